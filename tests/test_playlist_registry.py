from __future__ import annotations

import json

import pytest

from config.plugins import ConfigError
from playlist.plugin import PlaylistPlugin
from playlist.registry import PluginRegistry, create_registry


class LifecyclePlugin(PlaylistPlugin):
    def __init__(self, name, events, *, init_result=True, suffixes=()):
        self.name = name
        self.events = events
        self.init_result = init_result
        self.suffixes = frozenset(suffixes)

    def init(self, config):
        self.events.append(("init", self.name, dict(config)))
        if isinstance(self.init_result, Exception):
            raise self.init_result
        return self.init_result

    def finish(self):
        self.events.append(("finish", self.name))


def test_initialize_passes_config_blocks_in_registration_order() -> None:
    events: list = []
    registry = PluginRegistry(
        [LifecyclePlugin("alpha", events), LifecyclePlugin("beta", events), LifecyclePlugin("gamma", events)]
    )

    registry.initialize({"beta": {"name": "beta", "apikey": "k"}})

    assert events == [
        ("init", "alpha", {}),
        ("init", "beta", {"name": "beta", "apikey": "k"}),
        ("init", "gamma", {}),
    ]
    assert registry.list_plugins() == ["alpha", "beta", "gamma"]
    assert [plugin.name for plugin in registry.enabled_plugins()] == ["alpha", "beta", "gamma"]


def test_initialize_skips_plugins_disabled_by_config() -> None:
    events: list = []
    registry = PluginRegistry([LifecyclePlugin("alpha", events), LifecyclePlugin("beta", events)])

    registry.initialize({"alpha": {"name": "alpha", "enabled": False}})

    assert events == [("init", "beta", {})]
    assert registry.is_enabled("alpha") is False
    assert registry.is_enabled("beta") is True


def test_failed_or_raising_init_leaves_plugin_disabled(caplog) -> None:
    events: list = []
    registry = PluginRegistry(
        [
            LifecyclePlugin("declines", events, init_result=False),
            LifecyclePlugin("crashes", events, init_result=RuntimeError("missing credential")),
            LifecyclePlugin("works", events),
        ]
    )

    registry.initialize()

    assert [plugin.name for plugin in registry.enabled_plugins()] == ["works"]
    assert [index for index, _ in registry.enabled_entries()] == [2]
    assert any("crashes" in record.getMessage() for record in caplog.records)


def test_finish_only_calls_enabled_plugins_in_order() -> None:
    events: list = []
    registry = PluginRegistry(
        [
            LifecyclePlugin("one", events),
            LifecyclePlugin("off", events, init_result=False),
            LifecyclePlugin("two", events),
        ]
    )
    registry.initialize()
    events.clear()

    registry.finish()

    assert events == [("finish", "one"), ("finish", "two")]


def test_initialize_runs_once() -> None:
    registry = PluginRegistry([LifecyclePlugin("alpha", [])])
    registry.initialize()

    with pytest.raises(RuntimeError, match="already initialized"):
        registry.initialize()


def test_suffix_supported_ignores_disabled_plugins() -> None:
    registry = PluginRegistry(
        [
            LifecyclePlugin("m3u", [], suffixes={"m3u"}),
            LifecyclePlugin("pls", [], suffixes={"pls"}, init_result=False),
        ]
    )
    registry.initialize()

    assert registry.suffix_supported("m3u") is True
    assert registry.suffix_supported("M3U") is True
    assert registry.suffix_supported("pls") is False
    assert registry.suffix_supported(None) is False


def test_create_registry_disables_soundcloud_without_apikey(monkeypatch) -> None:
    monkeypatch.delenv("PLAYLIST_CONFIG_PATH", raising=False)
    registry = create_registry()

    assert registry.list_plugins() == ["extm3u", "m3u", "xspf", "pls", "soundcloud"]
    assert registry.is_enabled("soundcloud") is False
    assert registry.is_enabled("m3u") is True


def test_create_registry_enables_soundcloud_with_apikey() -> None:
    registry = create_registry({"soundcloud": {"name": "soundcloud", "apikey": "secret"}})

    assert registry.is_enabled("soundcloud") is True
    registry.finish()


def test_create_registry_loads_config_file_from_env(tmp_path, monkeypatch) -> None:
    path = tmp_path / "playlists.json"
    path.write_text(
        json.dumps(
            {
                "playlist_plugins": [
                    {"name": "soundcloud", "apikey": "secret"},
                    {"name": "pls", "enabled": False},
                ]
            }
        ),
        encoding="utf-8",
    )
    monkeypatch.setenv("PLAYLIST_CONFIG_PATH", str(path))

    registry = create_registry()

    assert registry.is_enabled("soundcloud") is True
    assert registry.is_enabled("pls") is False
    assert registry.is_enabled("m3u") is True


def test_create_registry_explicit_blocks_ignore_env(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("PLAYLIST_CONFIG_PATH", str(tmp_path / "missing.json"))

    registry = create_registry({})

    assert registry.is_enabled("soundcloud") is False


def test_create_registry_rejects_unreadable_config(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("PLAYLIST_CONFIG_PATH", str(tmp_path / "missing.json"))

    with pytest.raises(ConfigError, match="cannot read"):
        create_registry()

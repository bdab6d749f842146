from __future__ import annotations

import json

import pytest

from config.plugins import (
    ConfigError,
    block_enabled,
    config_path_from_env,
    load_config,
    plugin_configs,
    validate_config,
)


def test_load_config_reads_json(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"playlist_plugins": [{"name": "soundcloud", "apikey": "k"}]}), encoding="utf-8")

    config = load_config(path)

    assert plugin_configs(config) == {"soundcloud": {"name": "soundcloud", "apikey": "k"}}


def test_load_config_errors(tmp_path) -> None:
    broken = tmp_path / "broken.json"
    broken.write_text("{", encoding="utf-8")

    with pytest.raises(ConfigError, match="invalid JSON"):
        load_config(broken)
    with pytest.raises(ConfigError, match="cannot read"):
        load_config(tmp_path / "missing.json")


def test_validate_config_reports_bad_blocks() -> None:
    errors = validate_config(
        {"playlist_plugins": [{"apikey": "k"}, "soundcloud", {"name": "m3u", "enabled": "yes"}]}
    )

    assert errors == [
        "playlist_plugins[0] is missing a plugin name",
        "playlist_plugins[1] must be an object",
        "playlist_plugins[2].enabled must be true or false",
    ]
    assert validate_config([]) == ["config must be a JSON object"]
    assert validate_config({"playlist_plugins": {}}) == ["playlist_plugins must be a list"]
    assert validate_config({}) == []


def test_plugin_configs_first_block_wins_and_rejects_invalid() -> None:
    config = {
        "playlist_plugins": [
            {"name": "pls", "enabled": False},
            {"name": "pls", "enabled": True},
        ]
    }

    assert plugin_configs(config) == {"pls": {"name": "pls", "enabled": False}}
    assert plugin_configs(None) == {}
    with pytest.raises(ConfigError, match="missing a plugin name"):
        plugin_configs({"playlist_plugins": [{}]})


def test_block_enabled_defaults_to_true() -> None:
    assert block_enabled({}) is True
    assert block_enabled({"enabled": False}) is False


def test_config_path_from_env(monkeypatch) -> None:
    monkeypatch.delenv("PLAYLIST_CONFIG_PATH", raising=False)
    assert config_path_from_env() is None
    monkeypatch.setenv("PLAYLIST_CONFIG_PATH", " /etc/playlists.json ")
    assert config_path_from_env() == "/etc/playlists.json"

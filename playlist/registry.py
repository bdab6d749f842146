"""Ordered playlist plugin table with per-plugin enabled flags."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Mapping

from config.plugins import block_enabled, config_path_from_env, load_config, plugin_configs

from .plugin import PlaylistPlugin, has_suffix
from .plugins import default_plugins

logger = logging.getLogger(__name__)


@dataclass
class RegistryEntry:
    plugin: PlaylistPlugin
    enabled: bool = False


class PluginRegistry:
    """Plugins in dispatch order, each enabled at most once by ``initialize``."""

    def __init__(self, plugins: Iterable[PlaylistPlugin]) -> None:
        self._entries: tuple[RegistryEntry, ...] = tuple(RegistryEntry(plugin) for plugin in plugins)
        self._initialized = False

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[RegistryEntry]:
        return iter(self._entries)

    def initialize(self, configs_by_name: Mapping[str, dict[str, Any]] | None = None) -> None:
        if self._initialized:
            raise RuntimeError("plugin registry is already initialized")
        self._initialized = True

        configs_by_name = configs_by_name or {}
        for entry in self._entries:
            plugin = entry.plugin
            block = configs_by_name.get(plugin.name)
            if block is None:
                block = {}
            elif not block_enabled(block):
                logger.debug("Playlist plugin %s disabled by configuration", plugin.name)
                continue

            try:
                entry.enabled = bool(plugin.init(block))
            except Exception:
                logger.exception("Playlist plugin %s failed to initialize", plugin.name)
                entry.enabled = False
            if not entry.enabled:
                logger.debug("Playlist plugin %s is unavailable", plugin.name)

    def finish(self) -> None:
        for entry in self._entries:
            if not entry.enabled:
                continue
            try:
                entry.plugin.finish()
            except Exception:
                logger.exception("Playlist plugin %s failed to finish", entry.plugin.name)

    def enabled_entries(self) -> Iterator[tuple[int, PlaylistPlugin]]:
        """Yield ``(index, plugin)`` for enabled plugins in registration order."""
        for index, entry in enumerate(self._entries):
            if entry.enabled:
                yield index, entry.plugin

    def enabled_plugins(self) -> list[PlaylistPlugin]:
        return [plugin for _, plugin in self.enabled_entries()]

    def is_enabled(self, name: str) -> bool:
        return any(entry.enabled and entry.plugin.name == name for entry in self._entries)

    def list_plugins(self) -> list[str]:
        return [entry.plugin.name for entry in self._entries]

    def suffix_supported(self, suffix: str | None) -> bool:
        if not suffix:
            return False
        return any(has_suffix(plugin, suffix) for plugin in self.enabled_plugins())


def create_registry(configs_by_name: Mapping[str, dict[str, Any]] | None = None) -> PluginRegistry:
    """Build the registry over the built-in plugins and initialize it.

    Without explicit blocks, the JSON file named by PLAYLIST_CONFIG_PATH is
    loaded when set.
    """
    if configs_by_name is None:
        path = config_path_from_env()
        if path is not None:
            configs_by_name = plugin_configs(load_config(path))
    registry = PluginRegistry(default_plugins())
    registry.initialize(configs_by_name)
    return registry

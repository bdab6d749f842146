"""Resolution of playlist addresses into ordered track lists."""

from __future__ import annotations

from .plugin import PlaylistPlugin
from .provider import MemoryPlaylistProvider
from .registry import PluginRegistry, RegistryEntry, create_registry
from .resolver import open_path, open_stream, open_uri
from .song import Song, Tag

__all__ = [
    "MemoryPlaylistProvider",
    "PlaylistPlugin",
    "PluginRegistry",
    "RegistryEntry",
    "Song",
    "Tag",
    "create_registry",
    "open_path",
    "open_stream",
    "open_uri",
]

from __future__ import annotations

from .m3u import ExtM3uPlaylistPlugin, M3uPlaylistPlugin
from .pls import PlsPlaylistPlugin
from .soundcloud import SoundCloudPlaylistPlugin
from .xspf import XspfPlaylistPlugin


def default_plugins():
    """Built-in plugins in dispatch order."""
    return [
        ExtM3uPlaylistPlugin(),
        M3uPlaylistPlugin(),
        XspfPlaylistPlugin(),
        PlsPlaylistPlugin(),
        SoundCloudPlaylistPlugin(),
    ]


__all__ = [
    "ExtM3uPlaylistPlugin",
    "M3uPlaylistPlugin",
    "PlsPlaylistPlugin",
    "SoundCloudPlaylistPlugin",
    "XspfPlaylistPlugin",
    "default_plugins",
]

"""Application settings constants."""

from __future__ import annotations

# Bytes requested from a transport per read while parsing playlists.
READ_CHUNK_SIZE = 4096

# Socket timeout applied to HTTP transports.
HTTP_TIMEOUT_SECONDS = 30.0

USER_AGENT = "playlist-resolver/1.0"

# Base URL of the SoundCloud API used by the soundcloud plugin.
SOUNDCLOUD_API_URL = "http://api.soundcloud.com"

# Environment variable naming the JSON configuration file.
CONFIG_PATH_ENV = "PLAYLIST_CONFIG_PATH"

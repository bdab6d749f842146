from __future__ import annotations

import logging
from typing import Optional

from input.stream import InputStream, InputStreamError
from input.text_stream import iter_lines

from ..plugin import PlaylistPlugin
from ..provider import MemoryPlaylistProvider
from ..song import Song, Tag

logger = logging.getLogger(__name__)

_MIME_TYPES = frozenset({"audio/x-mpegurl", "audio/mpegurl", "application/vnd.apple.mpegurl"})


class M3uPlaylistPlugin(PlaylistPlugin):
    """Plain M3U: one address per non-comment line."""

    name = "m3u"
    suffixes = frozenset({"m3u", "m3u8"})
    mime_types = _MIME_TYPES

    def open_stream(self, stream: InputStream, uri: Optional[str]) -> Optional[MemoryPlaylistProvider]:
        songs: list[Song] = []
        try:
            for raw_line in iter_lines(stream, encoding="utf-8-sig"):
                line = raw_line.strip()
                if not line or line.startswith("#"):
                    continue
                songs.append(Song(uri=line))
        except InputStreamError as exc:
            logger.warning("%s", exc)
            return None
        return MemoryPlaylistProvider(songs)


class ExtM3uPlaylistPlugin(PlaylistPlugin):
    """Extended M3U with ``#EXTINF:<seconds>,<title>`` entries.

    Streams that do not start with ``#EXTM3U`` are left for the plain M3U
    plugin.
    """

    name = "extm3u"
    suffixes = frozenset({"m3u", "m3u8"})
    mime_types = _MIME_TYPES

    def open_stream(self, stream: InputStream, uri: Optional[str]) -> Optional[MemoryPlaylistProvider]:
        songs: list[Song] = []
        pending: Optional[Tag] = None
        try:
            lines = iter_lines(stream, encoding="utf-8-sig")
            first = next(lines, None)
            if first is None or first.strip().upper() != "#EXTM3U":
                return None

            for raw_line in lines:
                line = raw_line.strip()
                if not line:
                    continue
                if line.startswith("#EXTINF:"):
                    pending = parse_extinf(line)
                    continue
                if line.startswith("#"):
                    continue
                songs.append(Song(uri=line, tag=pending or Tag()))
                pending = None
        except InputStreamError as exc:
            logger.warning("%s", exc)
            return None
        return MemoryPlaylistProvider(songs)


def parse_extinf(line: str) -> Tag:
    # #EXTINF:<seconds>,<title>
    body = line[len("#EXTINF:"):]
    seconds, _, title = body.partition(",")
    try:
        duration = int(seconds.strip().split()[0]) if seconds.strip() else None
    except ValueError:
        duration = None
    if duration is not None and duration < 0:
        duration = None
    return Tag(duration_seconds=duration, name=title.strip() or None)

from __future__ import annotations

import configparser
import logging
import re
from typing import Optional

from input.stream import InputStream, InputStreamError
from input.text_stream import iter_lines

from ..plugin import PlaylistPlugin
from ..provider import MemoryPlaylistProvider
from ..song import Song, Tag

logger = logging.getLogger(__name__)

_ENTRY_KEY_RE = re.compile(r"^(file|title|length)(\d+)$")


class PlsPlaylistPlugin(PlaylistPlugin):
    """SHOUTcast/Winamp PLS playlists (``[playlist]`` ini section)."""

    name = "pls"
    suffixes = frozenset({"pls"})
    mime_types = frozenset({"audio/x-scpls"})

    def open_stream(self, stream: InputStream, uri: Optional[str]) -> Optional[MemoryPlaylistProvider]:
        try:
            text = "\n".join(iter_lines(stream, encoding="utf-8-sig"))
        except InputStreamError as exc:
            logger.warning("%s", exc)
            return None

        parser = configparser.ConfigParser(delimiters=("=",), interpolation=None, strict=False)
        try:
            parser.read_string(text)
        except configparser.Error as exc:
            logger.warning("malformed PLS playlist %s: %s", uri or stream.uri, exc)
            return None
        if not parser.has_section("playlist"):
            return None

        entries: dict[int, dict[str, str]] = {}
        for key, value in parser.items("playlist"):
            match = _ENTRY_KEY_RE.match(key)
            if match:
                entries.setdefault(int(match.group(2)), {})[match.group(1)] = value.strip()

        songs = []
        for number in sorted(entries):
            entry = entries[number]
            location = entry.get("file")
            if not location:
                continue
            tag = Tag(duration_seconds=_parse_length(entry.get("length")), name=entry.get("title") or None)
            songs.append(Song(uri=location, tag=tag))
        return MemoryPlaylistProvider(songs)


def _parse_length(value: Optional[str]) -> Optional[int]:
    if not value:
        return None
    try:
        seconds = int(value)
    except ValueError:
        return None
    return seconds if seconds >= 0 else None

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from typing import Optional

from config.settings import READ_CHUNK_SIZE
from input.stream import InputStream, InputStreamError

from ..plugin import PlaylistPlugin
from ..provider import MemoryPlaylistProvider
from ..song import Song, Tag

logger = logging.getLogger(__name__)


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


class XspfPlaylistPlugin(PlaylistPlugin):
    """XML Shareable Playlist Format, parsed incrementally."""

    name = "xspf"
    suffixes = frozenset({"xspf"})
    mime_types = frozenset({"application/xspf+xml"})

    def open_stream(self, stream: InputStream, uri: Optional[str]) -> Optional[MemoryPlaylistProvider]:
        parser = ET.XMLPullParser(events=("start", "end"))
        open_elements: list[ET.Element] = []
        songs: list[Song] = []
        try:
            while True:
                chunk = stream.read(READ_CHUNK_SIZE)
                if not chunk:
                    if not stream.eof():
                        raise InputStreamError(f"premature end of stream: {stream.uri}")
                    break
                parser.feed(chunk)
                _collect(parser, open_elements, songs)
            parser.close()
            _collect(parser, open_elements, songs)
        except InputStreamError as exc:
            logger.warning("%s", exc)
            return None
        except ET.ParseError as exc:
            logger.warning("malformed XSPF playlist %s: %s", uri or stream.uri, exc)
            return None
        return MemoryPlaylistProvider(songs)


def _collect(parser: ET.XMLPullParser, open_elements: list[ET.Element], songs: list[Song]) -> None:
    """Turn finished <track> elements into songs and detach them from the tree."""
    for event, element in parser.read_events():
        if event == "start":
            open_elements.append(element)
            continue
        open_elements.pop()
        if _local_name(element.tag) != "track":
            continue
        song = _track_to_song(element)
        if song is not None:
            songs.append(song)
        if open_elements:
            open_elements[-1].remove(element)


def _track_to_song(element: ET.Element) -> Optional[Song]:
    values: dict[str, str] = {}
    for child in element:
        name = _local_name(child.tag)
        if name in ("location", "title", "duration") and name not in values:
            values[name] = (child.text or "").strip()

    location = values.get("location")
    if not location:
        return None
    duration = None
    raw_duration = values.get("duration")
    if raw_duration and raw_duration.isdigit():
        duration = int(raw_duration) // 1000
    return Song(uri=location, tag=Tag(duration_seconds=duration, name=values.get("title") or None))

"""SoundCloud playlist plugin.

Accepted addresses::

    soundcloud://track/<track-id>
    soundcloud://playlist/<playlist-id>
    soundcloud://url/<url or path of a soundcloud page>

The API response is parsed incrementally; tracks are emitted as their JSON
objects close, so whole documents are never held in memory.
"""

from __future__ import annotations

import contextlib
import logging
from enum import Enum
from typing import Any, Iterable, Optional
from urllib.parse import quote

import ijson

from config.settings import READ_CHUNK_SIZE, SOUNDCLOUD_API_URL
from input import open_input_stream
from input.stream import InputStreamError

from ..plugin import PlaylistPlugin
from ..provider import MemoryPlaylistProvider
from ..song import Song, Tag

logger = logging.getLogger(__name__)


class Field(Enum):
    DURATION = "duration"
    TITLE = "title"
    STREAM_URL = "stream_url"
    OTHER = None


_FIELDS = {field.value: field for field in Field if field.value is not None}


def with_client_id(url: str, apikey: str) -> str:
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}client_id={apikey}"


class SoundCloudTrackParser:
    """State machine turning JSON parse events into songs.

    Tracking starts when a ``stream_url`` is seen; from then on nested maps
    are counted, and the map close that brings the count back to 1 closes
    the track object itself.
    """

    def __init__(self, apikey: str) -> None:
        self.apikey = apikey
        self.field = Field.OTHER
        self.title: Optional[str] = None
        self.stream_url: Optional[str] = None
        self.duration: Optional[int] = None
        self.depth = 0
        self._songs: list[Song] = []

    @property
    def songs(self) -> list[Song]:
        return list(self._songs)

    def on_map_key(self, key: str) -> None:
        self.field = _FIELDS.get(key, Field.OTHER)

    def on_integer(self, value: int) -> None:
        if self.field is Field.DURATION:
            self.duration = value

    def on_string(self, value: str) -> None:
        if self.field is Field.TITLE:
            self.title = value
        elif self.field is Field.STREAM_URL:
            self.stream_url = value
            if self.depth == 0:
                self.depth = 1

    def on_start_map(self) -> None:
        if self.depth > 0:
            self.depth += 1

    def on_end_map(self) -> None:
        if self.depth > 1:
            self.depth -= 1
            return
        if self.depth == 0:
            return

        self.depth = 0
        duration = self.duration // 1000 if self.duration is not None and self.duration >= 0 else None
        self._songs.append(
            Song(
                uri=with_client_id(self.stream_url, self.apikey),
                tag=Tag(duration_seconds=duration, name=self.title),
            )
        )
        self.title = None
        self.stream_url = None
        self.duration = None

    def feed(self, events: Iterable[tuple[str, Any]]) -> None:
        for event, value in events:
            if event == "map_key":
                self.on_map_key(value)
            elif event == "string":
                self.on_string(value)
            elif event in ("number", "integer"):
                if isinstance(value, int) and not isinstance(value, bool):
                    self.on_integer(value)
            elif event == "start_map":
                self.on_start_map()
            elif event == "end_map":
                self.on_end_map()


class SoundCloudPlaylistPlugin(PlaylistPlugin):
    name = "soundcloud"
    schemes = frozenset({"soundcloud"})

    def __init__(self, *, opener=open_input_stream, api_url: str = SOUNDCLOUD_API_URL) -> None:
        self.opener = opener
        self.api_url = api_url.rstrip("/")
        self.apikey: Optional[str] = None

    def init(self, config: dict[str, Any]) -> bool:
        apikey = config.get("apikey")
        if not isinstance(apikey, str) or not apikey.strip():
            logger.debug("disabling the soundcloud playlist plugin because API key is not set")
            return False
        self.apikey = apikey.strip()
        return True

    def finish(self) -> None:
        self.apikey = None

    def resolve_url(self, page: str) -> str:
        """Build a resolver call for a soundcloud page URL or bare path."""
        if page.startswith(("http://", "https://")):
            target = page
        elif page.startswith("soundcloud.com"):
            target = f"http://{page}"
        else:
            target = f"http://soundcloud.com/{page}"
        return f"{self.api_url}/resolve.json?url={quote(target, safe=':/')}&client_id={self.apikey}"

    def endpoint_for(self, uri: str) -> Optional[str]:
        scheme, sep, rest = uri.partition("://")
        if not sep or scheme.lower() != "soundcloud":
            return None

        kind, _, value = rest.partition("/")
        if not value:
            return None
        if kind == "track":
            return f"{self.api_url}/tracks/{value}.json?client_id={self.apikey}"
        if kind == "playlist":
            return f"{self.api_url}/playlists/{value}.json?client_id={self.apikey}"
        if kind == "url":
            return self.resolve_url(value)
        return None

    def open_uri(self, uri: str) -> Optional[MemoryPlaylistProvider]:
        if not self.apikey:
            return None
        endpoint = self.endpoint_for(uri)
        if endpoint is None:
            logger.warning("unknown soundcloud URI: %s", uri)
            return None

        parser = SoundCloudTrackParser(self.apikey)
        if not self._parse_json(endpoint, parser):
            return None
        return MemoryPlaylistProvider(parser.songs)

    def _parse_json(self, url: str, parser: SoundCloudTrackParser) -> bool:
        try:
            stream = self.opener(url)
        except InputStreamError as exc:
            logger.warning("%s", exc)
            return False

        with stream:
            events = ijson.sendable_list()
            coro = ijson.basic_parse_coro(events)
            try:
                stream.wait_ready()
                while True:
                    chunk = stream.read(READ_CHUNK_SIZE)
                    if not chunk:
                        break
                    coro.send(chunk)
                    parser.feed(events)
                    del events[:]

                if not stream.eof():
                    raise InputStreamError(f"premature end of soundcloud response {url}")
                coro.close()
                parser.feed(events)
            except InputStreamError as exc:
                logger.warning("%s", exc)
                _abandon(coro)
                return False
            except (ijson.JSONError, UnicodeDecodeError) as exc:
                logger.warning("malformed soundcloud response from %s: %s", url, exc)
                return False
        return True


def _abandon(coro) -> None:
    # the document is incomplete by definition here
    with contextlib.suppress(ijson.JSONError):
        coro.close()

"""Capability contract implemented by every playlist plugin."""

from __future__ import annotations

from typing import Any, Callable, Optional

from input.stream import InputStream

from .provider import MemoryPlaylistProvider


OpenUri = Callable[[str], Optional[MemoryPlaylistProvider]]
OpenStream = Callable[[InputStream, Optional[str]], Optional[MemoryPlaylistProvider]]


class PlaylistPlugin:
    """Base class for playlist plugins.

    A plugin opts into URI or stream dispatch by defining ``open_uri`` or
    ``open_stream`` as methods; leaving either as ``None`` means the plugin
    does not offer that capability. Both return a provider, or ``None`` when
    the address or stream is not accepted.
    """

    name: str = ""
    schemes: frozenset[str] = frozenset()
    suffixes: frozenset[str] = frozenset()
    mime_types: frozenset[str] = frozenset()

    open_uri: Optional[OpenUri] = None
    open_stream: Optional[OpenStream] = None

    def init(self, config: dict[str, Any]) -> bool:
        return True

    def finish(self) -> None:
        pass

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


def supports_uri(plugin: PlaylistPlugin) -> bool:
    return callable(getattr(plugin, "open_uri", None))


def supports_stream(plugin: PlaylistPlugin) -> bool:
    return callable(getattr(plugin, "open_stream", None))


def _contains(values, item: str | None) -> bool:
    if not values or not item:
        return False
    item = item.lower()
    return any(value.lower() == item for value in values)


def has_scheme(plugin: PlaylistPlugin, scheme: str | None) -> bool:
    return _contains(getattr(plugin, "schemes", None), scheme)


def has_suffix(plugin: PlaylistPlugin, suffix: str | None) -> bool:
    return _contains(getattr(plugin, "suffixes", None), suffix)


def has_mime_type(plugin: PlaylistPlugin, mime: str | None) -> bool:
    return _contains(getattr(plugin, "mime_types", None), mime)

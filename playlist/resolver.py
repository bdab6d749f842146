"""Dispatch of URIs, open streams and local paths to playlist plugins.

Every entry point returns ``None`` when no plugin produced a provider.
Exceptions raised by plugins are logged and count as "no provider", so the
fallback chain always runs to completion.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from input import open_input_stream
from input.stream import InputStream, InputStreamError

from .plugin import PlaylistPlugin, has_mime_type, has_scheme, has_suffix, supports_stream, supports_uri
from .provider import MemoryPlaylistProvider
from .registry import PluginRegistry
from .uri import strip_mime_parameters, uri_scheme, uri_suffix

logger = logging.getLogger(__name__)

StreamOpener = Callable[[str], InputStream]


def _call_open_uri(plugin: PlaylistPlugin, uri: str) -> Optional[MemoryPlaylistProvider]:
    try:
        return plugin.open_uri(uri)
    except Exception:
        logger.exception("Playlist plugin %s failed on %s", plugin.name, uri)
        return None


def _call_open_stream(
    plugin: PlaylistPlugin, stream: InputStream, uri: Optional[str]
) -> Optional[MemoryPlaylistProvider]:
    # each plugin must see the stream from its first byte
    if not stream.rewind():
        logger.debug("Skipping playlist plugin %s: cannot rewind %s", plugin.name, stream.uri)
        return None
    try:
        return plugin.open_stream(stream, uri)
    except Exception:
        logger.exception("Playlist plugin %s failed on stream %s", plugin.name, stream.uri)
        return None


def _open_uri_scheme(registry: PluginRegistry, uri: str, tried: set[int]) -> Optional[MemoryPlaylistProvider]:
    scheme = uri_scheme(uri)
    if scheme is None:
        return None

    for index, plugin in registry.enabled_entries():
        if not supports_uri(plugin) or not has_scheme(plugin, scheme):
            continue
        provider = _call_open_uri(plugin, uri)
        if provider is not None:
            return provider
        tried.add(index)
    return None


def _open_uri_suffix(registry: PluginRegistry, uri: str, tried: set[int]) -> Optional[MemoryPlaylistProvider]:
    suffix = uri_suffix(uri)
    if suffix is None:
        return None

    for index, plugin in registry.enabled_entries():
        if index in tried:
            continue
        if not supports_uri(plugin) or not has_suffix(plugin, suffix):
            continue
        provider = _call_open_uri(plugin, uri)
        if provider is not None:
            return provider
    return None


def open_uri(registry: PluginRegistry, uri: str) -> Optional[MemoryPlaylistProvider]:
    """Resolve ``uri`` by scheme, then by suffix.

    Plugins already attempted by scheme are not offered the same URI again
    during the suffix pass.
    """
    tried: set[int] = set()
    provider = _open_uri_scheme(registry, uri, tried)
    if provider is None:
        provider = _open_uri_suffix(registry, uri, tried)
    if provider is None:
        logger.debug("No playlist plugin accepted %s", uri)
    return provider


def _open_stream_mime(
    registry: PluginRegistry, stream: InputStream, mime: str, uri: Optional[str]
) -> Optional[MemoryPlaylistProvider]:
    for _, plugin in registry.enabled_entries():
        if supports_stream(plugin) and has_mime_type(plugin, mime):
            provider = _call_open_stream(plugin, stream, uri)
            if provider is not None:
                return provider
    return None


def _open_stream_suffix(
    registry: PluginRegistry, stream: InputStream, suffix: str, uri: Optional[str]
) -> Optional[MemoryPlaylistProvider]:
    for _, plugin in registry.enabled_entries():
        if supports_stream(plugin) and has_suffix(plugin, suffix):
            provider = _call_open_stream(plugin, stream, uri)
            if provider is not None:
                return provider
    return None


def open_stream(
    registry: PluginRegistry, stream: InputStream, uri: Optional[str] = None
) -> Optional[MemoryPlaylistProvider]:
    """Resolve an open stream by its content type, then by the suffix of ``uri``.

    The stream is never closed here; it stays owned by the caller.
    """
    try:
        stream.wait_ready()
    except InputStreamError as exc:
        logger.warning("Playlist stream %s not usable: %s", stream.uri, exc)
        return None

    if stream.mime_type:
        mime = strip_mime_parameters(stream.mime_type)
        if mime is not None:
            provider = _open_stream_mime(registry, stream, mime, uri)
            if provider is not None:
                return provider

    suffix = uri_suffix(uri) if uri else None
    if suffix is not None:
        provider = _open_stream_suffix(registry, stream, suffix, uri)
        if provider is not None:
            return provider

    logger.debug("No playlist plugin accepted stream %s", stream.uri)
    return None


def open_path(
    registry: PluginRegistry, path: str, *, opener: StreamOpener = open_input_stream
) -> Optional[tuple[MemoryPlaylistProvider, InputStream]]:
    """Open the local playlist file ``path``.

    Nothing is opened unless an enabled plugin claims the path's suffix. On
    success the open stream is returned with the provider and the caller
    must close it; on failure it has already been closed.
    """
    suffix = uri_suffix(path)
    if suffix is None or not registry.suffix_supported(suffix):
        return None

    try:
        stream = opener(path)
    except InputStreamError as exc:
        logger.warning("%s", exc)
        return None

    try:
        stream.wait_ready()
        provider = _open_stream_suffix(registry, stream, suffix, path)
    except InputStreamError as exc:
        logger.warning("Playlist stream %s not usable: %s", path, exc)
        provider = None

    if provider is None:
        stream.close()
        return None
    return provider, stream

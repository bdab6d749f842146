"""Byte-stream transports used to feed playlist plugins."""

from __future__ import annotations

import re

from .file_stream import FileInputStream
from .http_stream import HttpInputStream
from .memory_stream import MemoryInputStream
from .stream import InputStream, InputStreamError

_HTTP_RE = re.compile(r"^https?://", re.IGNORECASE)


def open_input_stream(uri: str) -> InputStream:
    """Open a transport for ``uri``: HTTP(S) URLs or local file paths."""
    if _HTTP_RE.match(uri):
        return HttpInputStream(uri)
    if "://" in uri:
        raise InputStreamError(f"unsupported URI scheme: {uri}")
    return FileInputStream(uri)


__all__ = [
    "FileInputStream",
    "HttpInputStream",
    "InputStream",
    "InputStreamError",
    "MemoryInputStream",
    "open_input_stream",
]

from __future__ import annotations

from typing import Iterator

from config.settings import READ_CHUNK_SIZE

from .stream import InputStream, InputStreamError


def iter_lines(stream: InputStream, *, encoding: str = "utf-8") -> Iterator[str]:
    """Yield decoded lines (without line terminators) until end of stream.

    A zero-length read that is not end-of-file raises ``InputStreamError``.
    """
    pending = b""
    while True:
        chunk = stream.read(READ_CHUNK_SIZE)
        if not chunk:
            if not stream.eof():
                raise InputStreamError(f"premature end of stream: {stream.uri}")
            break
        pending += chunk
        *lines, pending = pending.split(b"\n")
        for line in lines:
            yield _decode(line, encoding)
    if pending:
        yield _decode(pending, encoding)


def _decode(raw: bytes, encoding: str) -> str:
    return raw.rstrip(b"\r").decode(encoding, errors="replace")

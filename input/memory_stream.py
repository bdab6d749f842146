from __future__ import annotations

from .stream import InputStream


class MemoryInputStream(InputStream):
    """Seekable stream over a byte string that is already in memory."""

    def __init__(self, data: bytes, uri: str = "", *, mime_type: str | None = None) -> None:
        super().__init__(uri)
        self._data = bytes(data)
        self.size = len(self._data)
        self.mime_type = mime_type
        self.seekable = True
        self.ready = True

    def eof(self) -> bool:
        return self.offset >= len(self._data)

    def _read(self, size: int) -> bytes:
        return self._data[self.offset:self.offset + size]

    def _seek(self, offset: int) -> None:
        pass

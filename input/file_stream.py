from __future__ import annotations

import mimetypes
import os

from .stream import InputStream, InputStreamError


class FileInputStream(InputStream):
    """Local file transport; ready as soon as the file is open."""

    def __init__(self, path: str) -> None:
        super().__init__(path)
        try:
            self._file = open(path, "rb")
            self.size = os.fstat(self._file.fileno()).st_size
        except OSError as exc:
            raise InputStreamError(f"failed to open {path}: {exc}") from exc
        self.mime_type, _ = mimetypes.guess_type(path, strict=False)
        self.seekable = True
        self.ready = True

    def eof(self) -> bool:
        return self.size is not None and self.offset >= self.size

    def _read(self, size: int) -> bytes:
        try:
            return self._file.read(size)
        except (OSError, ValueError) as exc:
            # ValueError: file closed by another thread mid-read
            raise InputStreamError(f"failed to read {self.uri}: {exc}") from exc

    def _seek(self, offset: int) -> None:
        try:
            self._file.seek(offset)
        except OSError as exc:
            raise InputStreamError(f"failed to seek {self.uri}: {exc}") from exc

    def _close(self) -> None:
        self._file.close()

"""Blocking byte-stream transport shared by playlist plugins."""

from __future__ import annotations

import logging
import threading

logger = logging.getLogger(__name__)


class InputStreamError(RuntimeError):
    pass


class InputStream:
    """Base class for readable playlist sources.

    Every stream owns a ``threading.Condition``; ``wait_ready`` blocks on it
    until the transport knows its metadata (MIME type, size). Reads and seeks
    are serialized on the same lock. Closing the stream from another thread
    wakes any waiter, and subsequent reads raise ``InputStreamError``.
    """

    def __init__(self, uri: str) -> None:
        self.uri = uri
        self.cond = threading.Condition()
        self.ready = False
        self.closed = False
        self.mime_type: str | None = None
        self.size: int | None = None
        self.offset = 0
        self.seekable = False

    def __enter__(self) -> "InputStream":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def wait_ready(self) -> None:
        with self.cond:
            while not self.ready and not self.closed:
                self._update()
                if self.ready or self.closed:
                    break
                self.cond.wait()
            if self.closed:
                raise InputStreamError(f"stream closed: {self.uri}")

    def _update(self) -> None:
        """Give the transport a chance to make progress while waiting."""

    def eof(self) -> bool:
        raise NotImplementedError

    def read(self, size: int) -> bytes:
        with self.cond:
            self._check_open()
            data = self._read(size)
            if not data and self.closed:
                raise InputStreamError(f"stream closed: {self.uri}")
            self.offset += len(data)
            return data

    def _read(self, size: int) -> bytes:
        raise NotImplementedError

    def seek(self, offset: int) -> None:
        with self.cond:
            self._check_open()
            if offset == self.offset:
                return
            if not self.seekable:
                raise InputStreamError(f"stream is not seekable: {self.uri}")
            self._seek(offset)
            self.offset = offset

    def _seek(self, offset: int) -> None:
        raise NotImplementedError

    def rewind(self) -> bool:
        """Seek back to the start; return False if the transport refuses."""
        try:
            self.seek(0)
        except InputStreamError as exc:
            logger.debug("Rewind failed for %s: %s", self.uri, exc)
            return False
        return True

    def close(self) -> None:
        # may run while another thread is blocked in read()
        if self.closed:
            return
        self.closed = True
        self._close()
        with self.cond:
            self.cond.notify_all()

    def _close(self) -> None:
        pass

    def _check_open(self) -> None:
        if self.closed:
            raise InputStreamError(f"stream closed: {self.uri}")

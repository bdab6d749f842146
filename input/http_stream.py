"""HTTP transport backed by a streaming ``requests`` response."""

from __future__ import annotations

import logging

import requests

from config.settings import HTTP_TIMEOUT_SECONDS, USER_AGENT

from .stream import InputStream, InputStreamError

logger = logging.getLogger(__name__)


class HttpInputStream(InputStream):
    """Lazily connected HTTP(S) stream.

    The request is issued the first time a caller waits for readiness; once
    the response headers are in, ``mime_type`` and ``size`` are known.
    Seeking re-issues the request with a ``Range`` header.
    """

    def __init__(self, url: str, *, timeout: float = HTTP_TIMEOUT_SECONDS) -> None:
        super().__init__(url)
        self.timeout = timeout
        self._response = None
        self._exhausted = False
        self.seekable = True

    def _update(self) -> None:
        if self._response is None and not self.closed:
            self._connect(0)
            self.ready = True
            self.cond.notify_all()

    def _connect(self, offset: int) -> None:
        # identity keeps offset, size and Range in raw body bytes
        headers = {"User-Agent": USER_AGENT, "Accept-Encoding": "identity"}
        if offset > 0:
            headers["Range"] = f"bytes={offset}-"
        try:
            response = requests.get(self.uri, headers=headers, stream=True, timeout=self.timeout)
        except requests.RequestException as exc:
            raise InputStreamError(f"HTTP request failed for {self.uri}: {exc}") from exc

        if response.status_code not in (200, 206):
            response.close()
            raise InputStreamError(f"HTTP request failed for {self.uri} ({response.status_code})")
        if offset > 0 and response.status_code != 206:
            response.close()
            raise InputStreamError(f"server ignored range request for {self.uri}")

        content_type = response.headers.get("Content-Type")
        if content_type:
            self.mime_type = content_type.strip()
        length = response.headers.get("Content-Length")
        if length and length.isdigit():
            self.size = offset + int(length)
        self._response = response
        self._exhausted = False
        logger.debug("Opened %s (type=%s size=%s)", self.uri, self.mime_type, self.size)

    def eof(self) -> bool:
        if self.size is not None:
            return self.offset >= self.size
        return self._exhausted

    def _read(self, size: int) -> bytes:
        if self._response is None:
            raise InputStreamError(f"stream not ready: {self.uri}")
        try:
            data = self._response.raw.read(size)
        except Exception as exc:
            raise InputStreamError(f"failed to read {self.uri}: {exc}") from exc
        if not data:
            self._exhausted = True
        return data

    def _seek(self, offset: int) -> None:
        if self._response is not None:
            self._response.close()
            self._response = None
        self._connect(offset)

    def _close(self) -> None:
        if self._response is not None:
            self._response.close()
            self._response = None

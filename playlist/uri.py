"""Scheme and suffix extraction for playlist addresses."""

from __future__ import annotations

import re
from typing import Optional
from urllib.parse import urlsplit

_SCHEME_RE = re.compile(r"^([A-Za-z][A-Za-z0-9+.\-]*)://")


def uri_scheme(uri: str) -> Optional[str]:
    match = _SCHEME_RE.match(uri or "")
    if not match:
        return None
    return match.group(1).lower()


def uri_suffix(uri: str) -> Optional[str]:
    """Return the file-extension-like suffix of ``uri`` or None.

    Query strings and fragments of URIs that carry a scheme are ignored.
    """
    if not uri:
        return None
    path = urlsplit(uri).path if uri_scheme(uri) else uri
    dot = path.rfind(".")
    if dot <= 0 or path[dot - 1] == "/":
        return None
    suffix = path[dot + 1:]
    if not suffix or "/" in suffix or "\\" in suffix:
        return None
    return suffix


def strip_mime_parameters(mime: str) -> Optional[str]:
    """Drop ``;`` parameters from a content type; None if nothing remains."""
    base = mime.split(";", 1)[0].strip()
    return base or None

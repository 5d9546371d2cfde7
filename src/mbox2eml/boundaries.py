"""Discover every multipart boundary token declared in a message.

Two independent passes are merged: one over the top-level header block
and one over the whole message, which picks up boundaries of nested
multiparts (for example multipart/alternative inside multipart/mixed).
"""

import logging
import re

from .headers import header_block
from .models import BoundarySet

logger = logging.getLogger(__name__)

# How far past a nested "Content-Type: multipart" line to look for boundary=.
SCAN_WINDOW = 1024

_BOUNDARY_PARAM = re.compile(rb"""boundary\s*=\s*("[^"\r\n]*"?|[^;\s]+)""", re.IGNORECASE)
_MULTIPART_LINE = re.compile(rb"content-type:[^\r\n]*multipart", re.IGNORECASE)
_BLANK_LINE = re.compile(rb"\n\r?\n")


def clean_boundary(raw: bytes) -> bytes:
    """Strip line terminators, whitespace and surrounding quotes from a token."""
    return raw.replace(b"\r", b"").replace(b"\n", b"").strip().strip(b"\"'").strip()


def _boundary_in(text: bytes) -> bytes | None:
    match = _BOUNDARY_PARAM.search(text)
    if not match:
        return None
    return clean_boundary(match.group(1)) or None


def header_boundary(message: bytes) -> bytes | None:
    """Boundary declared by the top-level Content-Type header, if multipart."""
    lines = header_block(message).splitlines(keepends=True)

    for i, line in enumerate(lines):
        if not line.lower().startswith(b"content-type:"):
            continue
        value = [line]
        for cont in lines[i + 1 :]:
            if b"boundary=" in b"".join(value).lower():
                break
            if cont[:1] not in (b" ", b"\t"):
                break
            value.append(cont)
        joined = b"".join(value)
        if b"multipart" not in joined.lower():
            return None
        return _boundary_in(joined)

    return None


def nested_boundaries(message: bytes) -> list[bytes]:
    """Boundaries of every Content-Type: multipart line anywhere in the message."""
    found = []
    for match in _MULTIPART_LINE.finditer(message):
        start = match.start()
        window = message[start : start + SCAN_WINDOW]
        blank = _BLANK_LINE.search(window)
        if blank:
            window = window[: blank.start()]
        token = _boundary_in(window)
        if token:
            found.append(token)
    return found


def resolve_boundaries(message: bytes) -> BoundarySet:
    """
    Return all boundary tokens of a message, outermost first.

    An empty set means the message is not multipart.
    """
    boundaries = BoundarySet()
    top = header_boundary(message)
    if top:
        boundaries.add(top)
    boundaries.merge(nested_boundaries(message))

    if boundaries:
        logger.debug(f"Found {len(boundaries)} boundaries: {list(boundaries)}")
    return boundaries

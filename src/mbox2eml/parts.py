"""Split a multipart message into MIME parts.

Delimiters of every known boundary token are located in one pass and
each part runs from the end of its delimiter line to the start of the
nearest following delimiter, whichever token that belongs to. Nested
multiparts interleave their delimiters in document order, so the nearest
delimiter of any token is always the correct end of a part.
"""

import logging
import re
from dataclasses import dataclass, field

from .headers import first_fields, split_headers
from .models import BoundarySet, MimePart

logger = logging.getLogger(__name__)

# Anything shorter than this between two delimiters is delimiter noise.
MIN_PART_SIZE = 10

RECOGNIZED_HEADERS = {
    "content-type",
    "content-disposition",
    "content-transfer-encoding",
    "content-id",
}


@dataclass(frozen=True)
class Delimiter:
    token: bytes
    start: int
    end: int
    final: bool


@dataclass
class PartScan:
    # Everything before the first delimiter: top-level headers and preamble.
    preamble: bytes
    parts: list[MimePart] = field(default_factory=list)


def delimiter_pattern(boundaries: BoundarySet) -> re.Pattern[bytes]:
    # Longest first so a token that prefixes another cannot shadow it.
    tokens = sorted(boundaries, key=len, reverse=True)
    alternatives = b"|".join(re.escape(t) for t in tokens)
    return re.compile(
        rb"^--(?P<token>" + alternatives + rb")(?P<final>--)?[ \t]*(?:\r?\n|\Z)",
        re.MULTILINE,
    )


def find_delimiters(message: bytes, boundaries: BoundarySet) -> list[Delimiter]:
    """Return every delimiter line of every token, in document order."""
    if not boundaries:
        return []
    return [
        Delimiter(
            token=m.group("token"),
            start=m.start(),
            end=m.end(),
            final=m.group("final") is not None,
        )
        for m in delimiter_pattern(boundaries).finditer(message)
    ]


def _strip_line_end(segment: bytes) -> bytes:
    if segment.endswith(b"\r\n"):
        return segment[:-2]
    if segment.endswith(b"\n"):
        return segment[:-1]
    return segment


def parse_part(segment: bytes) -> MimePart:
    """
    Split one segment into headers and body.

    A segment without a blank line yields an empty part.
    """
    split = split_headers(segment)
    if split is None:
        return MimePart(raw_headers=b"", body=b"")

    raw_headers, body = split
    fields = first_fields(raw_headers, RECOGNIZED_HEADERS)
    return MimePart(
        raw_headers=raw_headers,
        body=body,
        content_type=fields.get("content-type"),
        content_disposition=fields.get("content-disposition"),
        transfer_encoding=fields.get("content-transfer-encoding"),
        content_id=fields.get("content-id"),
    )


def parse_parts(message: bytes, boundaries: BoundarySet) -> PartScan:
    """Locate all delimiters and return the preamble and the parts between them."""
    delimiters = find_delimiters(message, boundaries)
    if not delimiters:
        return PartScan(preamble=message)

    scan = PartScan(preamble=message[: delimiters[0].start])

    for i, delimiter in enumerate(delimiters):
        if delimiter.final:
            continue
        end = delimiters[i + 1].start if i + 1 < len(delimiters) else len(message)
        segment = _strip_line_end(message[delimiter.end : end])
        if len(segment) < MIN_PART_SIZE:
            continue
        scan.parts.append(parse_part(segment))

    logger.debug(f"Parsed {len(scan.parts)} parts from {len(delimiters)} delimiters")
    return scan

"""Best-effort timestamp extraction from a message's Date: header."""

import logging
import re
from datetime import datetime, timezone

from .headers import header_block, iter_fields

logger = logging.getLogger(__name__)

# Tried in order; the first layout that parses wins.
DATE_LAYOUTS = [
    "%a, %d %b %Y %H:%M:%S %z",
    "%d %b %Y %H:%M:%S %z",
    "%a, %d %b %Y %H:%M:%S",
    "%d %b %Y %H:%M:%S",
]

_TRAILING_COMMENT = re.compile(r"\s*\([^)]*\)\s*$")
_ZONE_NAME = re.compile(r"\s+(?:GMT|UTC?)$", re.IGNORECASE)


def find_date_header(message: bytes) -> str | None:
    """Return the trimmed value of the first Date: header, unfolded, if any."""
    for name, value in iter_fields(header_block(message)):
        if name == "date":
            return value.strip()
    return None


def parse_date(value: str) -> datetime | None:
    value = _TRAILING_COMMENT.sub("", value).strip()
    value = " ".join(value.split())
    value = _ZONE_NAME.sub(" +0000", value)
    for layout in DATE_LAYOUTS:
        try:
            parsed = datetime.strptime(value, layout)
        except ValueError:
            continue
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed
    return None


def extract_timestamp(message: bytes) -> datetime:
    """
    Return the message's Date: header as an aware datetime.

    Falls back to the current time when the header is missing or matches
    none of DATE_LAYOUTS.
    """
    value = find_date_header(message)
    if value:
        parsed = parse_date(value)
        if parsed is not None:
            return parsed
        logger.debug(f"Unparseable Date header: {value!r}")
    return datetime.now(timezone.utc)

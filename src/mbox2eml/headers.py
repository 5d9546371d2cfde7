"""Helpers for raw RFC 822 style header blocks."""

import re
from collections.abc import Iterator
from urllib.parse import unquote

BLANK_LINE = re.compile(rb"(?:^|\n)(\r?\n)")


def split_headers(data: bytes) -> tuple[bytes, bytes] | None:
    """
    Split data at its first blank line.

    Returns (header block including the blank line, remainder), or None when
    the data has no blank line at all.
    """
    match = BLANK_LINE.search(data)
    if not match:
        return None
    return data[: match.end()], data[match.end() :]


def header_block(message: bytes) -> bytes:
    """Return the lines before the first blank line (the whole input if none)."""
    split = split_headers(message)
    return split[0] if split else message


def iter_fields(block: bytes) -> Iterator[tuple[str, str]]:
    """Yield (lowercased name, unfolded value) for each header in a block."""
    name: str | None = None
    value: list[str] = []

    for raw_line in block.splitlines():
        line = raw_line.decode("utf-8", errors="replace")
        if not line.strip():
            break
        if line[0] in " \t":
            if name is not None:
                value.append(line.strip())
            continue
        if name is not None:
            yield name, " ".join(value)
        head, sep, rest = line.partition(":")
        if not sep or " " in head.strip():
            name, value = None, []
            continue
        name, value = head.strip().lower(), [rest.strip()]

    if name is not None:
        yield name, " ".join(value)


def first_fields(block: bytes, names: set[str]) -> dict[str, str]:
    """Return the first occurrence of each of the requested header names."""
    found: dict[str, str] = {}
    for name, value in iter_fields(block):
        if name in names and name not in found:
            found[name] = value
    return found


def get_param(value: str | None, param: str) -> str | None:
    """
    Extract a parameter such as boundary= or filename= from a header value.

    Handles quoted and bare values, and the RFC 2231 `param*=charset''value`
    form (charset and language prefix are dropped).
    """
    if not value:
        return None

    extended = re.search(
        rf"(?:^|;)\s*{re.escape(param)}\*\s*=\s*\"?([^\";]*)",
        value,
        re.IGNORECASE,
    )
    if extended:
        raw = extended.group(1).strip()
        if raw.count("'") >= 2:
            raw = raw.split("'", 2)[2]
        return unquote(raw) or None

    match = re.search(
        rf"(?:^|;)\s*{re.escape(param)}\s*=\s*(?:\"([^\"]*)\"?|([^;\s]+))",
        value,
        re.IGNORECASE,
    )
    if not match:
        return None
    result = match.group(1) if match.group(1) is not None else match.group(2)
    return result.strip() or None

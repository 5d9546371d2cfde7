"""Decide whether a MIME part is body text or an attachment.

The rules are deliberately aggressive: anything that looks like it could
be a file (inline images included) is extracted.
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from .headers import get_param
from .models import MimePart

BASE64_MIN_BODY = 100

BODY_TYPES = ("text/plain", "text/html", "multipart")

DEFAULT_TYPE = "text/plain"


class PartKind(str, Enum):
    ATTACHMENT = "attachment"
    TEXT = "text"
    DROP = "drop"


@dataclass(frozen=True)
class Rule:
    name: str
    matches: Callable[[MimePart], bool]


def _lower(value: str | None) -> str:
    return (value or "").lower()


def disposition_filename(part: MimePart) -> str | None:
    return get_param(part.content_disposition, "filename")


def _non_body_type(part: MimePart) -> bool:
    if part.content_type is None:
        return False
    ctype = _lower(part.content_type)
    return not any(ctype.startswith(t) for t in BODY_TYPES)


# Evaluated in order; the first matching rule decides.
RULES: list[Rule] = [
    Rule("disposition-attachment", lambda p: "attachment" in _lower(p.content_disposition)),
    Rule("content-id", lambda p: p.content_id is not None),
    Rule("image-type", lambda p: "image/" in _lower(p.content_type)),
    Rule(
        "large-base64",
        lambda p: "base64" in _lower(p.transfer_encoding) and len(p.body) > BASE64_MIN_BODY,
    ),
    Rule("non-body-type", _non_body_type),
    Rule(
        "binary-type",
        lambda p: any(t in _lower(p.content_type) for t in ("application/", "video/", "audio/")),
    ),
    Rule("disposition-filename", lambda p: disposition_filename(p) is not None),
]


def matching_rule(part: MimePart) -> Rule | None:
    """Return the first rule that marks the part as an attachment, if any."""
    if not part.body.strip():
        return None
    for rule in RULES:
        if rule.matches(part):
            return rule
    return None


def is_attachment(part: MimePart) -> bool:
    return matching_rule(part) is not None


def classify(part: MimePart) -> PartKind:
    if not part.body.strip():
        return PartKind.DROP
    if is_attachment(part):
        return PartKind.ATTACHMENT
    # A part without Content-Type is text/plain. Multipart containers are
    # dropped: their children are parts of their own.
    ctype = _lower(part.content_type) or DEFAULT_TYPE
    if ctype.startswith("text/"):
        return PartKind.TEXT
    return PartKind.DROP

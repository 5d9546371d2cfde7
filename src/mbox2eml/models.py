"""Core data models for mbox2eml."""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from datetime import datetime

# One raw mbox record, starting at its "From " separator line.
RawMessage = bytes


class BoundarySet:
    """Ordered set of multipart boundary tokens.

    Tokens keep their discovery order so the first one is the outermost
    boundary, but membership is by value and duplicates are ignored.
    """

    def __init__(self, tokens: Iterable[bytes] = ()) -> None:
        self._tokens: dict[bytes, None] = {}
        for token in tokens:
            self.add(token)

    def add(self, token: bytes) -> bool:
        """Add a token, returning False if it was empty or already present."""
        if not token or token in self._tokens:
            return False
        self._tokens[token] = None
        return True

    def merge(self, other: Iterable[bytes]) -> "BoundarySet":
        for token in other:
            self.add(token)
        return self

    @property
    def outermost(self) -> bytes | None:
        return next(iter(self._tokens), None)

    def __contains__(self, token: object) -> bool:
        return token in self._tokens

    def __iter__(self) -> Iterator[bytes]:
        return iter(self._tokens)

    def __len__(self) -> int:
        return len(self._tokens)

    def __bool__(self) -> bool:
        return bool(self._tokens)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, BoundarySet):
            return list(self) == list(other)
        if isinstance(other, (set, frozenset)):
            return set(self._tokens) == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"BoundarySet({list(self._tokens)!r})"


@dataclass
class MimePart:
    """One segment of a multipart body, between two delimiter lines."""

    raw_headers: bytes
    body: bytes
    content_type: str | None = None
    content_disposition: str | None = None
    transfer_encoding: str | None = None
    content_id: str | None = None

    @property
    def raw(self) -> bytes:
        """Headers and body as they appeared in the message."""
        return self.raw_headers + self.body


@dataclass(frozen=True)
class Attachment:
    filename: str
    content: bytes
    content_type: str = ""


@dataclass(frozen=True)
class ProcessedMessage:
    stripped_body: bytes
    timestamp: datetime
    attachments: tuple[Attachment, ...] = field(default_factory=tuple)

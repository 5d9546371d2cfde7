"""Split an mbox byte stream into raw message records."""

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

from .models import RawMessage

logger = logging.getLogger(__name__)

SEPARATOR = b"From "


def iter_messages(lines: Iterable[bytes]) -> Iterator[RawMessage]:
    """
    Yield one raw record per mbox "From " separator line.

    Lines before the first separator are discarded, so a stream with no
    separator yields nothing. The record in progress when the stream ends
    is always flushed.
    """
    current: list[bytes] | None = None

    for line in lines:
        if line.startswith(SEPARATOR):
            if current is not None:
                yield b"".join(current)
            current = [line]
        elif current is not None:
            current.append(line)

    if current is not None:
        yield b"".join(current)


def read_mbox(path: Path) -> list[RawMessage]:
    """Read a whole mbox file into memory as a list of raw records."""
    with path.open("rb") as f:
        messages = list(iter_messages(f))
    logger.debug(f"{path.name}: {len(messages)} messages")
    return messages

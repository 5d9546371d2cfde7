"""Rebuild a message with its attachments replaced by text markers."""

from collections.abc import Sequence

from .models import Attachment, MimePart

MARKER_HEADERS = "Content-Type: text/plain; charset=utf-8"


def line_ending(data: bytes) -> bytes:
    return b"\r\n" if b"\r\n" in data else b"\n"


def attachment_marker(attachment: Attachment, saved_name: str) -> str:
    return (
        f"[Attachment extracted: {attachment.filename} "
        f"({len(attachment.content)} bytes) saved as attachments/{saved_name}]"
    )


def reassemble(
    preamble: bytes,
    text_parts: Sequence[MimePart],
    attachments: Sequence[tuple[Attachment, str]],
    boundary: bytes,
) -> bytes:
    """
    Compose the stripped message.

    Every retained text part is re-delimited with the outermost boundary,
    followed by a single text/plain part listing each extracted attachment
    and the name it was saved under. The message is closed with the final
    delimiter.

    Args:
        preamble: original top-level headers and preamble, up to the first delimiter
        text_parts: parts kept as body text, in document order
        attachments: (attachment, saved name) pairs in extraction order
        boundary: outermost boundary token
    """
    eol = line_ending(preamble)
    delimiter = b"--" + boundary + eol
    out = [preamble]
    if preamble and not preamble.endswith(b"\n"):
        out.append(eol)

    for part in text_parts:
        out += [delimiter, part.raw, eol]

    if attachments:
        lines = [attachment_marker(att, name) for att, name in attachments]
        note = eol.join(line.encode("utf-8") for line in lines)
        out += [delimiter, MARKER_HEADERS.encode("ascii"), eol, eol, note, eol]

    out.append(b"--" + boundary + b"--" + eol)
    return b"".join(out)

import logging
import mimetypes

from .boundaries import resolve_boundaries
from .classifier import PartKind, classify, disposition_filename, matching_rule
from .dates import extract_timestamp
from .decoding import decode_body
from .headers import get_param
from .models import Attachment, MimePart, ProcessedMessage, RawMessage
from .naming import attachment_filename
from .parts import parse_parts
from .reassembler import reassemble

logger = logging.getLogger(__name__)


def media_type(part: MimePart) -> str:
    """Content type without parameters, e.g. "image/png"."""
    return (part.content_type or "").split(";", 1)[0].strip().lower()


def resolve_filename(part: MimePart, index: int) -> str:
    """
    Filename for an attachment part, never empty.

    Prefers Content-Disposition filename=, then Content-Type name=, then
    synthesizes attachment_<index> with an extension guessed from the type.
    """
    name = disposition_filename(part) or get_param(part.content_type, "name")
    if name:
        return name
    extension = mimetypes.guess_extension(media_type(part)) or ".bin"
    return f"attachment_{index}{extension}"


def extract_attachment(part: MimePart, index: int) -> Attachment:
    return Attachment(
        filename=resolve_filename(part, index),
        content=decode_body(part.body, part.transfer_encoding),
        content_type=media_type(part),
    )


class Decomposer:
    """Turns a raw mbox record into a stripped message plus its attachments."""

    def __init__(self, compress_attachments: bool = True):
        self.compress_attachments = compress_attachments

    def decompose(self, raw: RawMessage, seq: int) -> ProcessedMessage:
        """
        Decompose one message.

        `seq` is the message's global sequence number; it is needed up front
        because the stripped body refers to attachments by their saved names.
        """
        timestamp = extract_timestamp(raw)
        boundaries = resolve_boundaries(raw)
        if not boundaries:
            return ProcessedMessage(stripped_body=raw, timestamp=timestamp)

        scan = parse_parts(raw, boundaries)
        text_parts: list[MimePart] = []
        extracted: list[tuple[Attachment, str]] = []

        for part in scan.parts:
            kind = classify(part)
            if kind is PartKind.ATTACHMENT:
                index = len(extracted)
                attachment = extract_attachment(part, index)
                saved_name = attachment_filename(seq, index, attachment, self.compress_attachments)
                extracted.append((attachment, saved_name))
                logger.debug(
                    f"Message {seq}: extracted {attachment.filename} "
                    f"({len(attachment.content)} bytes, rule {matching_rule(part).name})"
                )
            elif kind is PartKind.TEXT:
                text_parts.append(part)

        if not text_parts and not extracted:
            logger.debug(f"Message {seq}: no usable parts, passing through")
            return ProcessedMessage(stripped_body=raw, timestamp=timestamp)

        stripped = reassemble(scan.preamble, text_parts, extracted, boundaries.outermost)
        return ProcessedMessage(
            stripped_body=stripped,
            timestamp=timestamp,
            attachments=tuple(att for att, _ in extracted),
        )


def decompose_message(raw: RawMessage, seq: int, compress_attachments: bool = True) -> ProcessedMessage:
    return Decomposer(compress_attachments).decompose(raw, seq)

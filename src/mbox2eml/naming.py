"""On-disk names for Maildir messages and extracted attachments."""

import re
from datetime import datetime
from pathlib import PurePath

from .models import Attachment

COMPRESSED_EXTENSIONS = {
    ".jpg", ".jpeg", ".png", ".gif", ".webp", ".bmp",
    ".zip", ".rar", ".7z", ".gz", ".bz2", ".xz",
    ".mp4", ".avi", ".mkv", ".mp3", ".flac", ".ogg",
}

COMPRESSED_TYPES = ("image/", "application/zip", "application/gzip")

GZIP_SUFFIX = ".gz"

MESSAGE_SUFFIX = ".eml"

_UNSAFE = re.compile(r'[\x00-\x1f\x7f/\\:*?"<>|]')


def safe_filename(name: str) -> str:
    """Reduce a filename to a single path component safe to create on disk."""
    cleaned = _UNSAFE.sub("_", name).strip().strip(".")
    return cleaned or "attachment"


def is_already_compressed(filename: str, content_type: str) -> bool:
    """
    Guess from extension and content type whether compressing is pointless.

    The content itself is never inspected.
    """
    if PurePath(filename.lower()).suffix in COMPRESSED_EXTENSIONS:
        return True
    ctype = content_type.lower()
    return any(ctype.startswith(t) for t in COMPRESSED_TYPES)


def should_compress(attachment: Attachment, compress: bool = True) -> bool:
    return compress and not is_already_compressed(attachment.filename, attachment.content_type)


def attachment_filename(seq: int, index: int, attachment: Attachment, compress: bool = True) -> str:
    """
    Name an attachment is saved under.

    Format: email_{seq:09d}_attachment_{index}_{filename}[.gz]
    Example: (1, 0, "logo.png") -> "email_000000001_attachment_0_logo.png"
    """
    name = f"email_{seq:09d}_attachment_{index}_{safe_filename(attachment.filename)}"
    if should_compress(attachment, compress):
        name += GZIP_SUFFIX
    return name


def message_filename(timestamp: datetime, seq: int, pid: int, compress: bool = False) -> str:
    """Maildir name in cur/: {unix}.M{seq}P{pid}_mbox2eml:2,S.eml[.gz]"""
    name = f"{int(timestamp.timestamp())}.M{seq}P{pid}_mbox2eml:2,S{MESSAGE_SUFFIX}"
    if compress:
        name += GZIP_SUFFIX
    return name

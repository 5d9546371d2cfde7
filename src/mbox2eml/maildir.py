import gzip
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from .models import Attachment, ProcessedMessage
from .naming import attachment_filename, message_filename, should_compress

logger = logging.getLogger(__name__)

SUBDIRS = ("cur", "new", "tmp", "attachments")


class MaildirError(Exception):
    pass


@dataclass
class SaveResult:
    seq: int
    message_path: Path | None = None
    attachment_paths: list[Path] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


class MaildirWriter:
    def __init__(
        self,
        output_dir: Path,
        compress_messages: bool = False,
        compress_attachments: bool = True,
    ):
        self.output_dir = output_dir
        self.compress_messages = compress_messages
        self.compress_attachments = compress_attachments
        self.pid = os.getpid()

    @property
    def attachments_dir(self) -> Path:
        return self.output_dir / "attachments"

    def ensure_layout(self) -> None:
        """
        Create cur/, new/, tmp/ and attachments/ under the output directory.

        Raises:
            MaildirError: If any of the directories cannot be created.
        """
        try:
            for name in SUBDIRS:
                (self.output_dir / name).mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise MaildirError(f"Cannot create Maildir at {self.output_dir}: {e}") from e

    def write_message(self, seq: int, message: ProcessedMessage) -> Path:
        """
        Deliver the stripped message into cur/.

        The file is written under tmp/ first and renamed into place. A
        partially written file is removed before the error propagates.
        """
        name = message_filename(message.timestamp, seq, self.pid, self.compress_messages)
        data = message.stripped_body
        if self.compress_messages:
            data = gzip.compress(data)

        tmp_path = self.output_dir / "tmp" / name
        final_path = self.output_dir / "cur" / name
        try:
            tmp_path.write_bytes(data)
            os.replace(tmp_path, final_path)
        except OSError:
            tmp_path.unlink(missing_ok=True)
            raise
        logger.debug(f"Wrote message: {final_path}")
        return final_path

    def write_attachment(self, seq: int, index: int, attachment: Attachment) -> Path:
        path = self.attachments_dir / attachment_filename(
            seq, index, attachment, self.compress_attachments
        )
        data = attachment.content
        if should_compress(attachment, self.compress_attachments):
            data = gzip.compress(data)
        try:
            path.write_bytes(data)
        except OSError:
            path.unlink(missing_ok=True)
            raise
        logger.debug(f"Wrote attachment: {path}")
        return path

    def save(self, seq: int, message: ProcessedMessage) -> SaveResult:
        """
        Write a message and all its attachments.

        A failing write is logged and recorded in the result; the remaining
        units are still written.
        """
        result = SaveResult(seq=seq)

        try:
            result.message_path = self.write_message(seq, message)
        except OSError as e:
            logger.warning(f"Message {seq}: cannot write message file: {e}")
            result.errors.append(f"message: {e}")

        for index, attachment in enumerate(message.attachments):
            try:
                result.attachment_paths.append(self.write_attachment(seq, index, attachment))
            except OSError as e:
                logger.warning(f"Message {seq}: cannot write attachment {attachment.filename}: {e}")
                result.errors.append(f"attachment {index}: {e}")

        return result

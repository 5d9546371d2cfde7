"""Chunk discovery and parallel per-message processing.

Chunks are handled one at a time, in numeric order. Each chunk is read
fully, its messages get a contiguous block of sequence numbers, and then
they are fanned out to a thread pool in no particular order.
"""

import logging
import re
from concurrent.futures import Executor, ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path

from rich.console import Console
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn

from .config import Config
from .decomposer import Decomposer
from .maildir import MaildirError, MaildirWriter, SaveResult
from .models import RawMessage
from .segmenter import read_mbox

logger = logging.getLogger(__name__)

CHUNK_PATTERN = re.compile(r"^chunk_(\d+)\.mbox$")


class PipelineError(Exception):
    """Fatal condition detected before any message is processed."""


@dataclass
class RunSummary:
    chunks: int = 0
    messages: int = 0
    attachments: int = 0
    failures: int = 0

    def add(self, result: SaveResult) -> None:
        self.messages += 1
        self.attachments += len(result.attachment_paths)
        if not result.ok:
            self.failures += 1


def discover_chunks(input_dir: Path) -> list[Path]:
    """
    Return the chunk_<N>.mbox files of a directory in ascending order of N.

    Raises:
        PipelineError: If the directory does not exist or holds no chunks.
    """
    if not input_dir.is_dir():
        raise PipelineError(f"Input directory does not exist: {input_dir}")

    chunks = []
    for path in input_dir.iterdir():
        match = CHUNK_PATTERN.match(path.name)
        if match and path.is_file():
            chunks.append((int(match.group(1)), path))

    if not chunks:
        raise PipelineError(f"No chunk_<N>.mbox files found in {input_dir}")

    return [path for _, path in sorted(chunks)]


def process_message(
    decomposer: Decomposer, writer: MaildirWriter, raw: RawMessage, seq: int
) -> SaveResult:
    """Decompose and store one message; never raises."""
    try:
        message = decomposer.decompose(raw, seq)
        return writer.save(seq, message)
    except Exception as e:
        logger.exception(f"Message {seq}: processing failed")
        return SaveResult(seq=seq, errors=[str(e)])


def process_chunk(
    messages: list[RawMessage],
    first_seq: int,
    decomposer: Decomposer,
    writer: MaildirWriter,
    executor: Executor,
    progress: Progress | None = None,
    description: str = "Processing messages...",
) -> list[SaveResult]:
    """Fan the messages of one chunk out to the executor and wait for all of them."""
    task = None
    if progress is not None:
        task = progress.add_task(description, total=len(messages))

    futures = [
        executor.submit(process_message, decomposer, writer, raw, first_seq + i)
        for i, raw in enumerate(messages)
    ]

    results = []
    for future in as_completed(futures):
        results.append(future.result())
        if progress is not None:
            progress.advance(task)

    if progress is not None:
        progress.remove_task(task)

    return sorted(results, key=lambda r: r.seq)


def run(
    input_dir: Path,
    output_dir: Path,
    config: Config,
    console: Console | None = None,
) -> RunSummary:
    """
    Convert every chunk in input_dir into a Maildir at output_dir.

    Raises:
        PipelineError: If there are no chunks or the Maildir cannot be created.
    """
    chunks = discover_chunks(input_dir)

    writer = MaildirWriter(
        output_dir,
        compress_messages=config.compress_messages,
        compress_attachments=config.compress_attachments,
    )
    try:
        writer.ensure_layout()
    except MaildirError as e:
        raise PipelineError(str(e)) from e

    decomposer = Decomposer(compress_attachments=config.compress_attachments)
    summary = RunSummary()
    next_seq = 0

    logger.info(f"Found {len(chunks)} chunks, using {config.workers} workers")

    with ThreadPoolExecutor(max_workers=config.workers) as executor, Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        console=console if console is not None else Console(stderr=True),
        transient=True,
    ) as progress:
        for path in chunks:
            try:
                messages = read_mbox(path)
            except OSError as e:
                logger.error(f"{path.name}: cannot read chunk: {e}")
                continue

            logger.info(f"{path.name}: {len(messages)} messages")
            results = process_chunk(
                messages, next_seq, decomposer, writer, executor, progress, f"Processing {path.name}"
            )
            next_seq += len(messages)

            summary.chunks += 1
            for result in results:
                summary.add(result)

    logger.info(
        f"Processed {summary.messages} messages from {summary.chunks} chunks, "
        f"{summary.attachments} attachments, {summary.failures} failures"
    )
    return summary

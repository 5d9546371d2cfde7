import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from .config import Config, ConfigError
from .pipeline import PipelineError, run

logger = logging.getLogger(__name__)
stderr_console = Console(stderr=True)


def setup_logging(verbose: bool, quiet: bool) -> None:
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=stderr_console, rich_tracebacks=verbose)],
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mbox2eml",
        description="Split chunk_<N>.mbox archives into a Maildir, extracting attachments",
    )
    parser.add_argument(
        "input_dir",
        type=Path,
        help="Directory containing chunk_<N>.mbox files",
    )
    parser.add_argument(
        "output_dir",
        type=Path,
        help="Maildir to create (cur/, new/, tmp/ and attachments/)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Number of worker threads (default: MBOX2EML_WORKERS or CPU count)",
    )
    parser.add_argument(
        "--compress-messages",
        action="store_true",
        default=None,
        help="Gzip message files in cur/",
    )
    parser.add_argument(
        "--no-compress-attachments",
        dest="compress_attachments",
        action="store_false",
        default=None,
        help="Store attachments uncompressed",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Only show errors",
    )
    return parser


def load_config(args: argparse.Namespace) -> Config:
    """Environment configuration with command-line overrides applied."""
    config = Config.from_env()
    if args.workers is not None:
        if args.workers < 1:
            raise ConfigError(f"--workers must be at least 1, got {args.workers}")
        config.workers = args.workers
    if args.compress_messages is not None:
        config.compress_messages = args.compress_messages
    if args.compress_attachments is not None:
        config.compress_attachments = args.compress_attachments
    return config


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    setup_logging(args.verbose, args.quiet)

    try:
        config = load_config(args)
    except ConfigError as e:
        stderr_console.print(f"[red]error:[/] {e}")
        sys.exit(1)

    logger.info(f"Converting {args.input_dir} into {args.output_dir}")

    try:
        run(args.input_dir, args.output_dir, config, console=stderr_console)
    except PipelineError as e:
        stderr_console.print(f"[red]error:[/] {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()

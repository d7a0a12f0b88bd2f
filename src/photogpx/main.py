# src/photogpx/main.py
"""Backend entry points for PhotoToGPX: logging setup, backend call and CLI."""

import argparse
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Callable, List, Optional

from .config import ProcessorConfig
from .constants import OUTPUT_DIR_NAME
from .exceptions import PhotoToGPXError
from .models import ProcessingProgress, ProcessingResult
from .processor import PhotoProcessor

LOG_DIR = Path.home() / ".phototogpx_logs"
LOG_FILE = LOG_DIR / "app.log"

logger = logging.getLogger(__name__)


def setup_logging(level: int = logging.INFO, log_file: Optional[Path] = None) -> None:
    """Configure the application log (rotating file + console)."""
    log_file = log_file or LOG_FILE
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.insert(0, RotatingFileHandler(log_file, maxBytes=1_000_000, backupCount=5, encoding="utf-8"))
    except OSError as e:
        print(f"Could not open log file {log_file}: {e}", file=sys.stderr)

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )


def process_photos_backend(
    input_path_str: str,
    output_path_str: Optional[str] = None,
    progress_callback: Optional[Callable[[ProcessingProgress], None]] = None,
) -> ProcessingResult:
    """
    Scan a folder and write its GPX track log.

    Args:
        input_path_str: Folder containing the photos (searched recursively).
        output_path_str: Folder for the GPX file and error log. Defaults to
            ``output/`` in the current directory.
        progress_callback: Optional callback receiving a snapshot per photo.

    Returns:
        The final ProcessingResult.

    Raises:
        ScanError: If the input folder is missing or unreadable.
        WriteFailure: If the GPX file could not be written.
    """
    logger.info(f"Starting backend process for {input_path_str}")

    config = ProcessorConfig(output_dir=Path(output_path_str or OUTPUT_DIR_NAME))
    processor = PhotoProcessor(config)
    return processor.process(Path(input_path_str), progress_callback)


def _print_progress(progress: ProcessingProgress) -> None:
    print(
        f"[{progress.percentage:3d}%] {progress.processed_photos}/{progress.total_photos} "
        f"ok={progress.successful_photos} skipped={progress.skipped_photos} "
        f"errors={progress.error_photos} - {progress.current_file}"
    )


def _create_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="phototogpx",
        description="Extract GPS coordinates from photos and export them as a GPX track log.",
    )
    parser.add_argument("folder", help="Folder containing photos (searched recursively)")
    parser.add_argument(
        "-o",
        "--output",
        default=OUTPUT_DIR_NAME,
        help=f"Output folder for the GPX file and error log (default: {OUTPUT_DIR_NAME})",
    )
    parser.add_argument("-q", "--quiet", action="store_true", help="Do not print per-photo progress")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = _create_argument_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    callback = None if args.quiet else _print_progress
    try:
        result = process_photos_backend(args.folder, args.output, callback)
    except PhotoToGPXError as e:
        print(f"An error occurred: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        logger.exception("Unexpected error")
        print(f"An error occurred: {e}", file=sys.stderr)
        return 1

    print(result.summary())
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""Folder enumeration for PhotoToGPX."""

import logging
import os
from pathlib import Path
from typing import Iterable, List, Optional

from .constants import IMAGE_EXTENSIONS_SET
from .exceptions import ScanError
from .models import PhotoReference

logger = logging.getLogger(__name__)


def file_extension(filename: str) -> str:
    """Lower-cased text from the last dot on, so a bare ``.JPG`` counts as a JPEG."""
    idx = filename.rfind(".")
    return filename[idx:].lower() if idx >= 0 else ""


def scan_photos(root_dir: Path | str, extensions: Optional[Iterable[str]] = None) -> List[PhotoReference]:
    """Recursively list the photos under ``root_dir``.

    Extensions are compared case-insensitively and must include the leading
    dot. Results follow traversal order and are not sorted.

    Raises:
        ScanError: If the folder does not exist or cannot be read.
    """
    root = Path(root_dir)
    exts = {e.lower() for e in (extensions or IMAGE_EXTENSIONS_SET)}

    if not root.exists():
        raise ScanError(root, "folder does not exist")
    if not root.is_dir():
        raise ScanError(root, "not a directory")

    def _raise_scan_error(err: OSError):
        raise ScanError(err.filename or root, err.strerror or str(err))

    photos: List[PhotoReference] = []
    try:
        for dirpath, _dirnames, filenames in os.walk(root, onerror=_raise_scan_error):
            for filename in filenames:
                path = Path(dirpath) / filename
                ext = file_extension(filename)
                if ext in exts:
                    photos.append(PhotoReference(path=path.absolute(), extension=ext))
    except OSError as e:
        raise ScanError(root, str(e)) from e

    logger.info(f"Found {len(photos)} photos under {root}")
    return photos

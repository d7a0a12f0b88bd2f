"""Shared fixtures: real JPEG/PNG/HEIC photos generated with Pillow and pillow-heif."""

import sys
import os
from pathlib import Path
from typing import Dict, Any, Optional

import pytest
from PIL import Image
from pillow_heif import register_heif_opener

# Add src to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "../src")))

register_heif_opener()

GPS_INFO_TAG = 34853

# 37.1 N, 122.1 W
GPS_CUPERTINO = {1: "N", 2: (37.0, 6.0, 0.0), 3: "W", 4: (122.0, 6.0, 0.0)}
# 40.0 N, 73.0 W
GPS_NEW_YORK = {1: "N", 2: (40.0, 0.0, 0.0), 3: "W", 4: (73.0, 0.0, 0.0)}

FORMATS = {".jpg": "JPEG", ".jpeg": "JPEG", ".heic": "HEIF", ".heif": "HEIF"}


def write_photo(path: Path, gps: Optional[Dict[int, Any]] = None) -> Path:
    """Save a tiny image at ``path``, with a GPS IFD when ``gps`` is given.

    The format follows the file extension.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    img = Image.new("RGB", (64, 64), "white")
    exif = Image.Exif()
    if gps:
        exif[GPS_INFO_TAG] = gps
    fmt = FORMATS.get(path.suffix.lower(), "PNG")
    img.save(path, format=fmt, exif=exif.tobytes())
    return path


def write_corrupt(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"this is not an image at all")
    return path


@pytest.fixture
def photo_dir(tmp_path: Path) -> Path:
    folder = tmp_path / "photos"
    folder.mkdir()
    return folder


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    return tmp_path / "output"

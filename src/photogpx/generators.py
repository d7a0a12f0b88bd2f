import logging
import os
import re
import tempfile
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Optional, Sequence

from .constants import (
    GPX_NAMESPACE,
    GPX_VERSION,
    GPX_CREATOR,
    GPX_COORD_FORMAT,
    GPX_INDENT,
    GPX_WRITE_ERROR_LOG_NAME,
)
from .error_log import ErrorLogger
from .exceptions import WriteFailure
from .models import GpsWaypoint
from .waypoints import iter_waypoint_pairs, track_name

logger = logging.getLogger(__name__)

# Characters outside the XML 1.0 Char production
_XML_ILLEGAL_CHARS = re.compile("[^\t\n\r\u0020-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")


def xml_safe_text(text: str) -> str:
    """Return ``text`` with undecodable file-name bytes replaced by U+FFFD and
    XML-illegal characters removed."""
    try:
        text = text.encode("utf-8", "surrogateescape").decode("utf-8", "replace")
    except UnicodeEncodeError:
        pass
    return _XML_ILLEGAL_CHARS.sub("", text)


class GpxReportGenerator:
    """Builds a GPX 1.1 document with one two-point track per photo."""

    def __init__(self, creator: str = GPX_CREATOR):
        self.root = ET.Element(
            "gpx",
            {"version": GPX_VERSION, "creator": creator, "xmlns": GPX_NAMESPACE},
        )
        self.track_count = 0

    def add_track(self, original: GpsWaypoint, offset: GpsWaypoint) -> None:
        trk = ET.SubElement(self.root, "trk")
        ET.SubElement(trk, "name").text = xml_safe_text(track_name(original))
        trkseg = ET.SubElement(trk, "trkseg")
        for point in (original, offset):
            ET.SubElement(
                trkseg,
                "trkpt",
                {
                    "lat": GPX_COORD_FORMAT.format(point.latitude),
                    "lon": GPX_COORD_FORMAT.format(point.longitude),
                },
            )
        self.track_count += 1

    def add_waypoints(self, waypoints: Sequence[GpsWaypoint]) -> None:
        """Add one track per (real, offset) pair, in sequence order."""
        for original, offset in iter_waypoint_pairs(waypoints):
            self.add_track(original, offset)

    def to_bytes(self) -> bytes:
        tree = ET.ElementTree(self.root)
        ET.indent(tree, space=GPX_INDENT)
        return ET.tostring(self.root, encoding="utf-8", xml_declaration=True) + b"\n"

    def save(self, path: Path | str, error_log_path: Optional[Path | str] = None) -> None:
        """Write the document next to ``path`` and rename it into place.

        A failed write leaves any previous file at ``path`` untouched, is
        recorded in ``error_log_path`` and raises ``WriteFailure``.
        """
        path = Path(path)
        if error_log_path is None:
            error_log_path = path.parent / GPX_WRITE_ERROR_LOG_NAME

        tmp_name = None
        try:
            data = self.to_bytes()
            with tempfile.NamedTemporaryFile(
                "wb", dir=path.parent, prefix=f".{path.stem}_", suffix=".tmp", delete=False
            ) as f:
                tmp_name = f.name
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, path)
            tmp_name = None
        except Exception as e:
            ErrorLogger(error_log_path).log_error(path, f"Error writing GPX: {e}")
            raise WriteFailure(path, str(e)) from e
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    pass

        logger.info(f"GPX written: {path} ({self.track_count} tracks)")


def write_gpx(path: Path | str, waypoints: Sequence[GpsWaypoint], error_log_path: Optional[Path | str] = None) -> Path:
    """Serialize ``waypoints`` (even length, possibly empty) to ``path``."""
    gpx_gen = GpxReportGenerator()
    gpx_gen.add_waypoints(waypoints)
    gpx_gen.save(path, error_log_path)
    return Path(path)

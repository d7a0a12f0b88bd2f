import logging
import math
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from PIL import Image
import pillow_heif

# Register HEIF opener
pillow_heif.register_heif_opener()

from .exceptions import ExtractionFailure
from .models import PhotoMetadata, GPSCoordinates

# Configure logger
logger = logging.getLogger(__name__)

# EXIF pointer to the GPS IFD
GPS_INFO_TAG = 34853


class GPSPhotoExtractor:
    """Reads GPS coordinates from JPEG, PNG and HEIC files through Pillow.

    Never raises: unreadable files come back as a ``PhotoMetadata`` without
    coordinates and with ``error`` set, so one bad photo cannot stop a batch.
    """

    def extract(self, file_path: Path) -> Optional[GPSCoordinates]:
        return self.extract_metadata(file_path).coordinates

    def extract_metadata(self, file_path: Path) -> PhotoMetadata:
        file_path = Path(file_path)
        try:
            with Image.open(file_path) as image:
                # 1. Get the GPS IFD (empty dict when the photo has none)
                gps_info = image.getexif().get_ifd(GPS_INFO_TAG)

            if not gps_info:
                logger.debug(f"No GPS info found for {file_path.name}")
                return PhotoMetadata(file_path.name, str(file_path))

            # 2. Convert to decimal degrees
            gps_coords = self._get_lat_lon(gps_info, file_path)

            return PhotoMetadata(
                filename=file_path.name,
                filepath=str(file_path),
                coordinates=gps_coords,
            )

        except Exception as e:
            logger.error(f"Error extracting metadata from {file_path.name}: {e}")
            return PhotoMetadata(file_path.name, str(file_path), None, str(e) or type(e).__name__)

    def _get_lat_lon(self, gps_info: Dict[int, Any], file_path: Path) -> Optional[GPSCoordinates]:
        # IDs are standard: 1=LatRef, 2=Lat, 3=LonRef, 4=Lon
        lat_dms = gps_info.get(2)
        lat_ref = gps_info.get(1)
        lon_dms = gps_info.get(4)
        lon_ref = gps_info.get(3)

        if not (lat_dms and lat_ref and lon_dms and lon_ref):
            logger.debug(f"Incomplete GPS info for {file_path.name}")
            return None

        lat = self._to_decimal(lat_dms, lat_ref, file_path)
        lon = self._to_decimal(lon_dms, lon_ref, file_path)
        return GPSCoordinates(lat, lon)

    def _to_decimal(self, dms_tuple: Tuple[Any, Any, Any], ref: Any, file_path: Path) -> float:
        try:
            d = float(dms_tuple[0])
            m = float(dms_tuple[1])
            s = float(dms_tuple[2])
        except (TypeError, ValueError, IndexError, ZeroDivisionError) as e:
            raise ExtractionFailure(file_path, f"invalid GPS value {dms_tuple!r}") from e

        decimal = d + (m / 60.0) + (s / 3600.0)
        if math.isnan(decimal):
            raise ExtractionFailure(file_path, f"invalid GPS value {dms_tuple!r}")

        if isinstance(ref, bytes):
            ref = ref.decode("ascii", errors="ignore")
        if str(ref).strip("\x00 ").upper() in ["S", "W"]:
            decimal = -decimal
        return decimal

"""
Photo processor module for PhotoToGPX.

This module contains the PhotoProcessor class which handles:
- Scanning a folder for image files
- Sequential GPS extraction, one photo at a time
- Classifying each photo as successful, skipped or errored
- Progress snapshots and writing the final GPX file
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from .config import ProcessorConfig
from .constants import NO_GPS_MESSAGE, PROCESSING_TAG
from .error_log import ErrorLogger
from .extractor import GPSPhotoExtractor
from .generators import write_gpx
from .models import (
    GpsWaypoint,
    PhotoReference,
    PhotoStatus,
    ProcessingProgress,
    ProcessingResult,
)
from .scanner import scan_photos
from .waypoints import derive_waypoints

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[ProcessingProgress], None]


class PhotoProcessor:
    """Runs one photo folder through extraction and GPX generation.

    Every photo is handled independently: a photo without GPS is skipped and
    a photo that fails to read is counted as an error, and neither stops the
    batch. Only a folder that cannot be scanned or a GPX file that cannot be
    written aborts the run.

    Attributes:
        config: Output locations and recognized extensions.
        extractor: Object exposing ``extract_metadata(path) -> PhotoMetadata``.
        waypoints: Waypoint pairs collected during the last run.
        statuses: Terminal status of each photo in the last run.
    """

    def __init__(
        self,
        config: Optional[ProcessorConfig] = None,
        extractor: Optional[GPSPhotoExtractor] = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.config = config or ProcessorConfig()
        self.extractor = extractor or GPSPhotoExtractor()
        self.clock = clock
        self.waypoints: List[GpsWaypoint] = []
        self.statuses: List[Tuple[PhotoReference, PhotoStatus]] = []

    def process(self, input_dir: Path | str, progress_callback: Optional[ProgressCallback] = None) -> ProcessingResult:
        """Process every recognized photo under ``input_dir``.

        Args:
            input_dir: Folder to scan recursively.
            progress_callback: Receives a ``ProcessingProgress`` after each photo.

        Returns:
            The final ``ProcessingResult``.

        Raises:
            ScanError: If the folder is missing or unreadable.
            WriteFailure: If the GPX file could not be written.
        """
        output_dir = Path(self.config.output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        log_path = self.config.log_file_path
        gpx_path = self.config.gpx_file_path(self.clock().strftime(self.config.timestamp_format))
        error_logger = ErrorLogger(log_path)

        self.waypoints = []
        self.statuses = []

        try:
            photos = scan_photos(input_dir, self.config.extensions)
            total = len(photos)

            if total == 0:
                logger.info(f"No photos found in {input_dir}, writing empty GPX")
                write_gpx(gpx_path, [], self.config.gpx_error_log_path)
                return ProcessingResult(0, 0, 0, 0, 0.0, str(gpx_path), str(log_path))

            successful = skipped = errored = 0
            for i, photo in enumerate(photos):
                status = self._process_photo(photo, error_logger)
                self.statuses.append((photo, status))

                if status is PhotoStatus.SUCCESS:
                    successful += 1
                elif status is PhotoStatus.SKIPPED:
                    skipped += 1
                else:
                    errored += 1

                if progress_callback:
                    processed = i + 1
                    progress_callback(
                        ProcessingProgress(
                            total_photos=total,
                            processed_photos=processed,
                            remaining_photos=total - processed,
                            successful_photos=successful,
                            skipped_photos=skipped,
                            error_photos=errored,
                            percentage=int(processed / total * 100),
                            success_rate=_success_rate(successful, total),
                            current_file=photo.name,
                        )
                    )

            write_gpx(gpx_path, self.waypoints, self.config.gpx_error_log_path)

        except Exception as e:
            error_logger.log_error(PROCESSING_TAG, str(e))
            raise

        logger.info(
            f"Process completed. {successful}/{total} photos with GPS, "
            f"{skipped} skipped, {errored} errors."
        )
        return ProcessingResult(
            total_photos=total,
            successful_photos=successful,
            skipped_photos=skipped,
            error_photos=errored,
            success_rate=_success_rate(successful, total),
            gpx_file_path=str(gpx_path),
            log_file_path=str(log_path),
        )

    def _process_photo(self, photo: PhotoReference, error_logger: ErrorLogger) -> PhotoStatus:
        """Extract one photo and append its waypoint pair; returns its terminal status."""
        logger.debug(f"{PhotoStatus.EXTRACTING.value}: {photo.path}")
        try:
            metadata = self.extractor.extract_metadata(photo.path)
        except Exception as e:
            error_logger.log_error(photo.path, str(e) or type(e).__name__)
            return PhotoStatus.ERRORED

        if metadata.error:
            error_logger.log_error(photo.path, metadata.error)
            return PhotoStatus.ERRORED

        pair = derive_waypoints(metadata.coordinates, photo.name)
        if not pair:
            error_logger.log_error(photo.path, NO_GPS_MESSAGE)
            return PhotoStatus.SKIPPED

        self.waypoints.extend(pair)
        return PhotoStatus.SUCCESS


def _success_rate(successful: int, total: int) -> float:
    return successful / total * 100 if total > 0 else 0.0

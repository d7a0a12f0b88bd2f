from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class PhotoReference:
    """A photo found by the scanner."""
    path: Path
    extension: str

    @property
    def name(self) -> str:
        return self.path.name


@dataclass(frozen=True)
class GPSCoordinates:
    """Latitude and longitude in decimal degrees."""
    latitude: float
    longitude: float

    def __str__(self):
        return f"{self.latitude}, {self.longitude}"


@dataclass
class PhotoMetadata:
    """Outcome of reading one photo's metadata."""
    filename: str
    filepath: str
    coordinates: Optional[GPSCoordinates] = None
    error: Optional[str] = None

    @property
    def has_gps(self) -> bool:
        return self.coordinates is not None


@dataclass(frozen=True)
class GpsWaypoint:
    latitude: float
    longitude: float
    name: str


class PhotoStatus(Enum):
    PENDING = "pending"
    EXTRACTING = "extracting"
    SUCCESS = "success"
    SKIPPED = "skipped"
    ERRORED = "errored"


@dataclass(frozen=True)
class ProcessingProgress:
    """Snapshot of the counters, emitted after every photo."""
    total_photos: int
    processed_photos: int
    remaining_photos: int
    successful_photos: int
    skipped_photos: int
    error_photos: int
    percentage: int
    success_rate: float
    current_file: str = ""


@dataclass(frozen=True)
class ProcessingResult:
    """Final summary of a run, created once when the batch completes."""
    total_photos: int
    successful_photos: int
    skipped_photos: int
    error_photos: int
    success_rate: float
    gpx_file_path: str
    log_file_path: str

    @property
    def processed_photos(self) -> int:
        return self.successful_photos + self.skipped_photos + self.error_photos

    def summary(self) -> str:
        message = (
            "Processing complete!\n\n"
            f"Total photos found: {self.total_photos}\n"
            f"Successfully processed: {self.successful_photos}\n"
            f"Skipped (no GPS): {self.skipped_photos}\n"
            f"Errors: {self.error_photos}\n"
            f"Success rate: {self.success_rate:.1f}%\n\n"
            f"GPX file saved to: {self.gpx_file_path}\n"
            f"Error log saved to: {self.log_file_path}"
        )
        if self.successful_photos == 0:
            message += "\n\nNo photos with GPS data were found."
        return message

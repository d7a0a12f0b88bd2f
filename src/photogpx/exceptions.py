# src/photogpx/exceptions.py


class PhotoToGPXError(Exception):
    """Base class for every exception raised by this application."""

    pass


class ScanError(PhotoToGPXError):
    """Raised when the input folder is missing or cannot be read."""

    def __init__(self, path, reason=""):
        self.path = path
        self.reason = reason
        msg = f"Error scanning folder: {path}"
        if reason:
            msg = f"{msg} ({reason})"
        super().__init__(msg)


class ExtractionFailure(PhotoToGPXError):
    """Raised while reading the metadata of a single photo."""

    def __init__(self, path, reason):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not read GPS metadata from {path}: {reason}")


class WriteFailure(PhotoToGPXError):
    """Raised when the GPX document could not be written."""

    def __init__(self, path, reason):
        self.path = path
        self.reason = reason
        super().__init__(f"Error writing GPX file {path}: {reason}")


class InvalidWaypointSequenceError(PhotoToGPXError, ValueError):
    """Raised when the GPX writer is fed an odd number of waypoints."""

    def __init__(self, length):
        self.length = length
        super().__init__(
            f"Waypoint sequence must hold (real, offset) pairs, got {length} entries."
        )

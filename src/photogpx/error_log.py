import logging
from datetime import datetime
from pathlib import Path

from .constants import LOG_TIMESTAMP_FORMAT

logger = logging.getLogger(__name__)


class ErrorLogger:
    """Append-only, one-line-per-event error log shown to the user.

    Writing never raises; if the log cannot be written the event is only
    reported through the application logger.
    """

    def __init__(self, log_path: Path | str):
        self.log_path = Path(log_path)

    def log_error(self, source: Path | str, message: str) -> None:
        timestamp = datetime.now().strftime(LOG_TIMESTAMP_FORMAT)
        entry = f"[{timestamp}] ERROR: {source} - {message}"
        logger.warning(f"{source} - {message}")
        try:
            with open(self.log_path, "a", encoding="utf-8", errors="backslashreplace") as f:
                f.write(entry + "\n")
        except Exception as e:
            logger.debug(f"Could not write to error log {self.log_path}: {e}")

# --- Main Configuration ---
# Compared against the lower-cased suffix, so one spelling per format is enough.
IMAGE_EXTENSIONS_SET = {".jpg", ".jpeg", ".png", ".heic"}

# --- Waypoint Derivation ---
LATITUDE_OFFSET = 0.00001  # ~1.1 meters north
OFFSET_SUFFIX = " (offset)"

# --- GPX Generation ---
GPX_NAMESPACE = "http://www.topografix.com/GPX/1/1"
GPX_VERSION = "1.1"
GPX_CREATOR = "PhotoToGPX"
GPX_COORD_FORMAT = "{:.6f}"
GPX_INDENT = "  "

# --- Output Files ---
OUTPUT_DIR_NAME = "output"
ERROR_LOG_NAME = "errors.log"
GPX_WRITE_ERROR_LOG_NAME = "gpx_write_errors.log"
GPX_FILENAME_PATTERN = "photos_export{timestamp}.gpx"
GPX_TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"
LOG_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

# Tag used in the error log when a failure is not tied to a single photo
PROCESSING_TAG = "PROCESSING"
NO_GPS_MESSAGE = "No GPS data found"

# --- GUI Configuration ---
APP_TITLE = "Photo to GPX"
APP_SIZE = "620x520"
APP_MIN_SIZE = (520, 460)
PROGRESS_POLL_MS = 100


class UIMessages:
    WAITING = "Select a folder containing photos with GPS data."
    READY = "Ready."
    PROCESSING = "Processing..."
    STARTING = "Starting..."
    SUCCESS = "Processing complete."
    WARNING = "No photos with GPS data were found."
    ERROR = "Error."
    BTN_SELECT = "Select Folder"
    BTN_START = "Start Processing"
    NO_FOLDER = "Please select a folder first."
    DIALOG_TITLE = "Select folder containing photos with GPS data"

# src/photogpx/config.py
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Any, FrozenSet

from .constants import (
    IMAGE_EXTENSIONS_SET,
    OUTPUT_DIR_NAME,
    ERROR_LOG_NAME,
    GPX_WRITE_ERROR_LOG_NAME,
    GPX_FILENAME_PATTERN,
    GPX_TIMESTAMP_FORMAT,
)

# Configure logger
logger = logging.getLogger(__name__)

# Config paths
CONFIG_DIR = Path.home() / ".phototogpx"
CONFIG_FILE = CONFIG_DIR / "settings.json"

DEFAULT_CONFIG = {
    "input_dir": "",
    "output_dir": OUTPUT_DIR_NAME,
}


@dataclass(frozen=True)
class ProcessorConfig:
    """Where and how a run writes its outputs."""

    output_dir: Path = Path(OUTPUT_DIR_NAME)
    log_file_name: str = ERROR_LOG_NAME
    gpx_file_pattern: str = GPX_FILENAME_PATTERN
    timestamp_format: str = GPX_TIMESTAMP_FORMAT
    gpx_error_log_name: str = GPX_WRITE_ERROR_LOG_NAME
    extensions: FrozenSet[str] = field(default_factory=lambda: frozenset(IMAGE_EXTENSIONS_SET))

    @property
    def log_file_path(self) -> Path:
        return Path(self.output_dir) / self.log_file_name

    @property
    def gpx_error_log_path(self) -> Path:
        return Path(self.output_dir) / self.gpx_error_log_name

    def gpx_file_path(self, timestamp: str) -> Path:
        return Path(self.output_dir) / self.gpx_file_pattern.format(timestamp=timestamp)


class ConfigManager:
    @staticmethod
    def load_config() -> Dict[str, Any]:
        """Load settings from the JSON file, or return the defaults."""
        if not CONFIG_FILE.exists():
            return DEFAULT_CONFIG.copy()

        try:
            with open(CONFIG_FILE, "r", encoding="utf-8") as f:
                data = json.load(f)
                # Merge with defaults to handle new keys
                config = DEFAULT_CONFIG.copy()
                config.update(data)
                return config
        except Exception as e:
            logger.warning(f"Could not load settings: {e}")
            return DEFAULT_CONFIG.copy()

    @staticmethod
    def save_config(input_dir: str = "", output_dir: str = "") -> None:
        """Remember the last folders used."""
        current = ConfigManager.load_config()

        if input_dir:
            current["input_dir"] = str(input_dir)
        if output_dir:
            current["output_dir"] = str(output_dir)

        try:
            CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
            with open(CONFIG_FILE, "w", encoding="utf-8") as f:
                json.dump(current, f, indent=4)
        except Exception as e:
            logger.warning(f"Error saving settings: {e}")

    @staticmethod
    def to_processor_config(config: Dict[str, Any]) -> ProcessorConfig:
        output_dir = config.get("output_dir") or OUTPUT_DIR_NAME
        return ProcessorConfig(output_dir=Path(output_dir))

"""Configuration management for StudyFlow."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

STUDYFLOW_HOME = Path(os.environ.get("STUDYFLOW_HOME", Path.home() / "studyflow"))
CONFIG_FILE = STUDYFLOW_HOME / "config" / "studyflow.conf"
DATA_DIR = STUDYFLOW_HOME / "data"


@dataclass
class Config:
    """StudyFlow configuration."""

    work_minutes: int = 25
    break_minutes: int = 5
    due_soon_days: int = 7
    dashboard_refresh_seconds: int = 2
    data_dir: str = ""

    @property
    def data_path(self) -> Path:
        """Directory holding the JSON documents."""
        if self.data_dir:
            return Path(self.data_dir).expanduser()
        return DATA_DIR


def _positive_int(key: str, value: str, default: int) -> int:
    try:
        n = int(value)
    except ValueError:
        logger.warning(f"Ignoring {key.upper()}={value!r}: not a whole number")
        return default
    if n <= 0:
        logger.warning(f"Ignoring {key.upper()}={value!r}: must be positive")
        return default
    return n


def _strip_value(value: str) -> str:
    # Handle quoted values with inline comments: "value" # comment
    if value.startswith('"') or value.startswith("'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        return value[1:end_quote] if end_quote != -1 else value[1:]
    # Unquoted: strip inline comments
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def load_config(path: Path | None = None) -> Config:
    """Load configuration from studyflow.conf file."""
    config = Config()
    path = path or CONFIG_FILE

    if not path.exists():
        return config

    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _strip_value(value.strip())

        match key:
            case "work_minutes":
                config.work_minutes = _positive_int(key, value, config.work_minutes)
            case "break_minutes":
                config.break_minutes = _positive_int(key, value, config.break_minutes)
            case "due_soon_days":
                config.due_soon_days = _positive_int(key, value, config.due_soon_days)
            case "dashboard_refresh_seconds":
                config.dashboard_refresh_seconds = _positive_int(
                    key, value, config.dashboard_refresh_seconds
                )
            case "data_dir":
                config.data_dir = value
            case _:
                logger.debug(f"Unknown config key {key!r}")

    return config

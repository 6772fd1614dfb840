"""
Configuration utilities.
"""
import logging
import os
from typing import Any, Optional
from dotenv import load_dotenv

DEFAULTS = {
    "CARDCRAFT_DATA_DIR": "data/active",
    "CARDCRAFT_BACKUP_DIR": "data/backups",
    "CARDCRAFT_MAX_BACKUPS": "5",
    "CARDCRAFT_EXPORT_DIR": "exports",
    "CARDCRAFT_LOG_LEVEL": "INFO",
    "CARDCRAFT_LOG_FILE": None,
}

class Config:
    """Configuration manager backed by environment variables and an optional .env file."""
    
    def __init__(self, env_file: Optional[str] = None):
        """Initialize configuration."""
        if env_file:
            load_dotenv(env_file)
        else:
            load_dotenv()

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value."""
        value = os.getenv(key)
        if value is None or value == "":
            return default if default is not None else DEFAULTS.get(key)
        return value

    @property
    def data_dir(self) -> str:
        return self.get("CARDCRAFT_DATA_DIR")

    @property
    def backup_dir(self) -> str:
        return self.get("CARDCRAFT_BACKUP_DIR")

    @property
    def max_backups(self) -> int:
        return int(self.get("CARDCRAFT_MAX_BACKUPS"))

    @property
    def export_dir(self) -> str:
        return self.get("CARDCRAFT_EXPORT_DIR")

    @property
    def log_file(self) -> Optional[str]:
        return self.get("CARDCRAFT_LOG_FILE")

    @property
    def log_level(self) -> int:
        """Numeric logging level; unknown names fall back to INFO."""
        level = logging.getLevelName(str(self.get("CARDCRAFT_LOG_LEVEL")).upper())
        return level if isinstance(level, int) else logging.INFO

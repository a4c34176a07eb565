"""
Configuration module for the LTER station browser.

Loads configuration from JSON file and environment variables.
"""

import json
import os
from typing import Dict, Any, Optional
from pathlib import Path

from . import constants
from .date_utils import DateUtils


class Config:
    """Configuration manager for the application."""

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            config_file: Path to configuration JSON file. If None, uses CONFIG_FILE env var
                        or defaults to 'config.json'
        """
        self.config_file = config_file or os.getenv("CONFIG_FILE", "config.json")
        self.config: Dict[str, Any] = {}
        self._load_config()
        self._override_from_env()
        self._validate_config()

    def _load_config(self) -> None:
        """Load configuration from JSON file."""
        config_path = Path(self.config_file)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {self.config_file}")

        with open(config_path, "r", encoding="utf-8") as f:
            self.config = json.load(f)

    def _override_from_env(self) -> None:
        """Override configuration with environment variables."""
        env_map = {
            "INFLUX_URL": ("influx", "base_url"),
            "INFLUX_DATABASE": ("influx", "database"),
            "INFLUX_USERNAME": ("influx", "username"),
            "INFLUX_PASSWORD": ("influx", "password"),
            "LOG_LEVEL": ("logging", "level"),
        }

        for env_name, (section, key) in env_map.items():
            value = os.getenv(env_name)
            if value:
                self.config.setdefault(section, {})[key] = value

    def _validate_config(self) -> None:
        """Validate that required configuration keys are present."""
        required_config = {
            "influx": ["base_url", "database"],
        }

        missing_sections = [
            section for section in required_config if section not in self.config
        ]
        if missing_sections:
            raise ValueError(
                f"Missing required configuration sections: {', '.join(missing_sections)}"
            )

        missing_keys = []
        for section, keys in required_config.items():
            for key in keys:
                if not self.config[section].get(key):
                    missing_keys.append(f"{section}.{key}")

        if missing_keys:
            raise ValueError(
                f"Missing required configuration keys: {', '.join(missing_keys)}"
            )

        max_retries = self.influx_max_retries
        if not isinstance(max_retries, int) or max_retries < 0:
            raise ValueError("influx.max_retries must be a non-negative integer")

        # Zone is written into every TZ() clause
        DateUtils.parse_timezone(self.query_timezone)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key (supports dot notation).

        Args:
            key: Configuration key (e.g., 'influx.base_url')
            default: Default value if key not found

        Returns:
            Configuration value
        """
        keys = key.split(".")
        value = self.config

        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default

        return value

    @property
    def influx_base_url(self) -> str:
        """Get InfluxDB base URL."""
        return self.get("influx.base_url", "")

    @property
    def influx_database(self) -> str:
        """Get the database queries run against."""
        return self.get("influx.database", "")

    @property
    def influx_timeout(self) -> int:
        """Get request timeout in seconds."""
        return self.get("influx.timeout", 30)

    @property
    def influx_max_retries(self) -> int:
        """Get maximum HTTP retry attempts of the driver."""
        return self.get("influx.max_retries", 0)

    @property
    def influx_verify_ssl(self) -> bool:
        """Get SSL verification setting."""
        return self.get("influx.verify_ssl", True)

    @property
    def influx_username(self) -> Optional[str]:
        """Get InfluxDB username."""
        return self.get("influx.username")

    @property
    def influx_password(self) -> Optional[str]:
        """Get InfluxDB password."""
        return self.get("influx.password")

    @property
    def query_timezone(self) -> str:
        """Get the zone the backend labels returned timestamps in."""
        return self.get("processing.timezone", constants.DEFAULT_QUERY_TIMEZONE)

    @property
    def show_std(self) -> bool:
        """Whether standard deviation measurements are included by default."""
        return bool(self.get("processing.show_std", False))

    @property
    def log_level(self) -> str:
        """Get logging level."""
        return self.get("logging.level", "INFO")

    @property
    def logging_settings(self) -> Dict[str, Any]:
        """The logging section as taken by setup_logger."""
        settings = dict(self.get("logging", {}))
        settings["level"] = self.log_level
        return settings

    def __repr__(self) -> str:
        """String representation of config."""
        return f"Config(file={self.config_file}, database={self.influx_database})"

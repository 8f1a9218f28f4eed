"""Settings management using Pydantic for type validation and configuration."""

import logging
import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field, PrivateAttr
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..timezone import DEFAULT_TIMEZONE

logger = logging.getLogger(__name__)

ENV_PREFIX = "ICALIMPORT_"
GOOGLE_CALENDAR_API_BASE_URL = "https://www.googleapis.com/calendar/v3"


class LoggingSettings(BaseModel):
    """Logging configuration settings."""

    # Console Logging
    console_enabled: bool = Field(default=True, description="Enable console logging")
    console_level: str = Field(
        default="INFO",
        description="Console log level: DEBUG, VERBOSE, INFO, WARNING, ERROR, CRITICAL",
    )
    console_colors: bool = Field(
        default=True, description="Enable colored console output (auto-detected)"
    )

    # File Logging
    file_enabled: bool = Field(default=False, description="Enable file logging")
    file_level: str = Field(default="DEBUG", description="File log level")
    file_directory: Optional[str] = Field(
        default=None, description="Log directory (defaults to config_dir/logs)"
    )
    file_prefix: str = Field(default="icalimport", description="Log file prefix")
    max_log_files: int = Field(default=5, description="Number of rotated log files to keep")
    max_file_size_mb: int = Field(default=10, description="Rotate log files above this size")
    include_function_names: bool = Field(
        default=True, description="Include function names and line numbers in file logs"
    )

    # Third-party Libraries
    third_party_level: str = Field(
        default="WARNING", description="Log level for third-party libraries"
    )


class ImporterSettings(BaseSettings):
    """Application settings with environment variable and YAML support.

    Priority: explicit arguments > environment > YAML > defaults.
    """

    _explicit_args: set = PrivateAttr(default_factory=set)
    _env_vars_set: set = PrivateAttr(default_factory=set)

    # Normalization
    default_timezone: str = Field(
        default=DEFAULT_TIMEZONE, description="Timezone applied to DTSTART/DTEND values"
    )

    # Google Calendar delivery
    calendar_id: Optional[str] = Field(default=None, description="Target calendar ID")
    access_token: Optional[str] = Field(default=None, description="OAuth 2.0 bearer token")
    api_base_url: str = Field(
        default=GOOGLE_CALENDAR_API_BASE_URL, description="Google Calendar API base URL"
    )
    request_timeout: int = Field(default=30, description="HTTP request timeout in seconds")

    # Application Configuration
    app_name: str = Field(default="icalimport", description="Application name")
    config_dir: Path = Field(default_factory=lambda: Path.home() / ".config" / "icalimport")
    config_path: Optional[Path] = Field(default=None, description="Explicit YAML config file")

    # Logging Configuration
    logging: LoggingSettings = Field(
        default_factory=LoggingSettings, description="Logging settings"
    )

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    def __init__(self, **kwargs: Any) -> None:
        env_vars_set = {
            key[len(ENV_PREFIX) :].lower()
            for key, value in os.environ.items()
            if key.upper().startswith(ENV_PREFIX) and value.strip()
        }

        super().__init__(**kwargs)

        self._explicit_args = set(kwargs.keys())
        self._env_vars_set = env_vars_set

        self._load_yaml_config()

    def validate_delivery_config(self) -> None:
        """Validate that delivery credentials are present.

        Raises:
            ValueError: If no access token is configured
        """
        if not self.access_token:
            raise ValueError(
                "An access token is required to import events. "
                f"Set {ENV_PREFIX}ACCESS_TOKEN, pass --token, or configure "
                "'google.access_token' in config.yaml"
            )

    def _is_overridden(self, setting: str) -> bool:
        return setting in self._explicit_args or setting in self._env_vars_set

    def _find_config_file(self) -> Optional[Path]:
        """Find config file: explicit path, then working directory, then config_dir."""
        if self.config_path is not None:
            if not self.config_path.exists():
                raise ValueError(f"Config file not found: {self.config_path}")
            return self.config_path

        local_config = Path.cwd() / "config.yaml"
        if local_config.exists():
            return local_config

        user_config = self.config_file
        if user_config.exists():
            return user_config

        return None

    def _load_basic_settings(self, config_data: dict) -> None:
        """Load top-level settings from YAML data."""
        basic_settings = [
            "default_timezone",
            "calendar_id",
            "access_token",
            "api_base_url",
            "request_timeout",
            "app_name",
        ]

        for setting in basic_settings:
            if setting in config_data and not self._is_overridden(setting):
                setattr(self, setting, config_data[setting])

    def _load_google_config(self, config_data: dict) -> None:
        """Load Google Calendar delivery settings from YAML data."""
        google_config = config_data.get("google")
        if not isinstance(google_config, dict):
            return

        for setting in ["calendar_id", "access_token", "api_base_url", "request_timeout"]:
            if setting in google_config and not self._is_overridden(setting):
                setattr(self, setting, google_config[setting])

    def _load_logging_config(self, config_data: dict) -> None:
        """Load logging configuration from YAML data."""
        logging_config = config_data.get("logging")
        if not isinstance(logging_config, dict) or "logging" in self._explicit_args:
            return

        for setting in LoggingSettings.model_fields:
            if setting in logging_config:
                setattr(self.logging, setting, logging_config[setting])

    def _load_yaml_config(self) -> None:
        """Load configuration from YAML file if it exists."""
        config_file = self._find_config_file()
        if not config_file:
            return

        try:
            with config_file.open(encoding="utf-8") as f:
                config_data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            # Fall back to defaults/env vars
            logger.warning(f"Could not load YAML config from {config_file}: {e}")
            return

        if not isinstance(config_data, dict):
            return

        self._load_basic_settings(config_data)
        self._load_google_config(config_data)
        self._load_logging_config(config_data)
        logger.debug(f"Loaded configuration from {config_file}")

    @property
    def config_file(self) -> Path:
        """Path to YAML configuration file."""
        return self.config_dir / "config.yaml"

    @property
    def log_dir(self) -> Path:
        """Directory for log files."""
        if self.logging.file_directory:
            return Path(self.logging.file_directory)
        return self.config_dir / "logs"


# Global settings management
_settings_instance: Optional[ImporterSettings] = None


def get_settings() -> ImporterSettings:
    """Get the global settings instance, creating it lazily if needed."""
    if globals()["_settings_instance"] is None:
        globals()["_settings_instance"] = ImporterSettings()
    return globals()["_settings_instance"]


def reset_settings() -> None:
    """Reset the global settings instance (primarily for testing)."""
    globals()["_settings_instance"] = None

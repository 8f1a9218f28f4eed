"""Logging configuration and setup utilities."""

import logging
import logging.handlers
import os
import sys
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..config.settings import ImporterSettings

# Custom log level between INFO(20) and DEBUG(10)
VERBOSE = 15
logging.addLevelName(VERBOSE, "VERBOSE")

ROOT_LOGGER_NAME = "icalimport"
THIRD_PARTY_LOGGERS = ("httpx", "httpcore")


def get_log_level(level_name: str) -> int:
    """Get numeric log level from string name, including custom VERBOSE level.

    Args:
        level_name: Log level name (DEBUG, VERBOSE, INFO, WARNING, ERROR, CRITICAL),
            case insensitive

    Returns:
        Numeric log level

    Raises:
        AttributeError: If level name is not recognized
    """
    level_name = level_name.upper()
    if level_name == "VERBOSE":
        return VERBOSE
    level = getattr(logging, level_name)
    if not isinstance(level, int):
        raise AttributeError(f"Unknown log level: {level_name}")
    return level


class AutoColoredFormatter(logging.Formatter):
    """Formatter that colors level names when the terminal supports it."""

    COLORS = {
        "ERROR": "\033[31m",
        "INFO": "\033[34m",
        "VERBOSE": "\033[32m",
        "WARNING": "\033[33m",
        "DEBUG": "\033[35m",
        "CRITICAL": "\033[31m\033[1m",
    }
    RESET = "\033[0m"

    def __init__(self, *args: Any, enable_colors: bool = True, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.use_colors = enable_colors and self._detect_color_support()

    @staticmethod
    def _detect_color_support() -> bool:
        if not hasattr(sys.stderr, "isatty") or not sys.stderr.isatty():
            return False
        if os.environ.get("NO_COLOR"):
            return False
        return os.environ.get("TERM", "").lower() != "dumb"

    def format(self, record: logging.LogRecord) -> str:
        formatted = super().format(record)
        color = self.COLORS.get(record.levelname)
        if not self.use_colors or not color:
            return formatted
        return formatted.replace(record.levelname, f"{color}{record.levelname}{self.RESET}", 1)


def setup_logging(settings: "ImporterSettings") -> logging.Logger:
    """Set up application logging with console and optional rotating file output.

    Args:
        settings: Application settings carrying a LoggingSettings section

    Returns:
        Configured "icalimport" logger
    """
    log_settings = settings.logging

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(logging.DEBUG)  # handlers filter
    logger.handlers.clear()

    if log_settings.console_enabled:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(get_log_level(log_settings.console_level))
        console_handler.setFormatter(
            AutoColoredFormatter(
                "%(asctime)s - %(levelname)s - %(message)s",
                datefmt="%H:%M:%S",
                enable_colors=log_settings.console_colors,
            )
        )
        logger.addHandler(console_handler)

    if log_settings.file_enabled:
        log_dir = settings.log_dir
        log_dir.mkdir(parents=True, exist_ok=True)
        log_path = log_dir / f"{log_settings.file_prefix}.log"

        file_handler = logging.handlers.RotatingFileHandler(
            log_path,
            maxBytes=log_settings.max_file_size_mb * 1024 * 1024,
            backupCount=log_settings.max_log_files,
            encoding="utf-8",
        )
        file_handler.setLevel(get_log_level(log_settings.file_level))

        if log_settings.include_function_names:
            file_format = (
                "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
            )
        else:
            file_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        file_handler.setFormatter(logging.Formatter(file_format, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(file_handler)

        logger.debug(f"Logging to file: {log_path}")

    third_party_level = get_log_level(log_settings.third_party_level)
    for lib in THIRD_PARTY_LOGGERS:
        logging.getLogger(lib).setLevel(third_party_level)

    return logger


def apply_command_line_overrides(
    settings: "ImporterSettings", args: Any
) -> "ImporterSettings":
    """Apply command-line logging overrides in place.

    Priority: Command-line > Environment > YAML > Defaults.
    """
    if getattr(args, "log_level", None):
        settings.logging.console_level = args.log_level
        settings.logging.file_level = args.log_level

    if getattr(args, "verbose", False):
        settings.logging.console_level = "VERBOSE"
        settings.logging.file_level = "VERBOSE"

    if getattr(args, "quiet", False):
        settings.logging.console_level = "ERROR"

    if getattr(args, "no_log_colors", False):
        settings.logging.console_colors = False

    return settings

"""Configuration management for icalimport."""

from .settings import ImporterSettings, LoggingSettings, get_settings, reset_settings

__all__ = ["ImporterSettings", "LoggingSettings", "get_settings", "reset_settings"]

"""
Configuration - Environment-driven settings.

Environment variables:
    MINISPLENDOR_SAVE_PATH   Default save file for save/load without a path
    MINISPLENDOR_LOG_LEVEL   Logging level name (DEBUG, INFO, WARNING, ...)
"""

import logging
import os

from pydantic import BaseModel, Field, field_validator

DEFAULT_SAVE_PATH = "minisplendor.sav"
DEFAULT_LOG_LEVEL = "WARNING"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class Settings(BaseModel):
    """Runtime settings for the command-line game."""
    save_path: str = Field(DEFAULT_SAVE_PATH, description="Default save file")
    log_level: str = Field(DEFAULT_LOG_LEVEL, description="Logging level name")

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level

    @classmethod
    def from_env(cls, environ=None) -> "Settings":
        """Build settings from environment variables."""
        environ = os.environ if environ is None else environ
        return cls(
            save_path=environ.get("MINISPLENDOR_SAVE_PATH", DEFAULT_SAVE_PATH),
            log_level=environ.get("MINISPLENDOR_LOG_LEVEL", DEFAULT_LOG_LEVEL),
        )


def configure_logging(level: str = DEFAULT_LOG_LEVEL):
    """Send log records to stderr. Called by the CLI, never by the library."""
    logging.basicConfig(level=level, format=LOG_FORMAT)

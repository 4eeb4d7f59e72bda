"""
Global Library Settings

Centralized configuration with validation, read from the environment.
"""

import logging
import os
from typing import Optional

import dotenv
from pydantic import BaseModel, Field, field_validator

from devents.config.logging import set_library_level


class EventsSettings(BaseModel):
    """Settings for the event engine"""

    log_level: str = Field(
        default="WARNING", description="Level for the library's own loggers"
    )
    listen_id_prefix: str = Field(
        default="l", description="Prefix for ids assigned to listened objects"
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v):
        level = str(v).upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @classmethod
    def from_env(cls) -> "EventsSettings":
        """Build settings from DEVENTS_* environment variables (and .env)"""
        dotenv.load_dotenv()
        values = {}
        if os.getenv("DEVENTS_LOG_LEVEL"):
            values["log_level"] = os.environ["DEVENTS_LOG_LEVEL"]
        if os.getenv("DEVENTS_LISTEN_ID_PREFIX"):
            values["listen_id_prefix"] = os.environ["DEVENTS_LISTEN_ID_PREFIX"]
        return cls(**values)


# Global settings instance
_settings: Optional[EventsSettings] = None


def get_settings() -> EventsSettings:
    """Get the global settings instance"""
    global _settings
    if _settings is None:
        _settings = EventsSettings.from_env()
    return _settings


def initialize_settings(**overrides) -> EventsSettings:
    """Initialize settings from the environment with optional overrides"""
    global _settings

    settings = EventsSettings.from_env()
    if overrides:
        settings = EventsSettings(**{**settings.model_dump(), **overrides})
    _settings = settings
    set_library_level(_settings.log_level)
    return _settings


def reset_settings() -> None:
    """Reset settings to default (useful for testing)"""
    global _settings
    _settings = None

"""Environment driven settings for the mock trip API."""

import logging
import os

from pydantic import BaseModel, Field

from tripmock.utils.constants import (
    DEFAULT_CORS_ORIGINS,
    DEFAULT_HOST,
    DEFAULT_LOG_LEVEL,
    DEFAULT_PORT,
    FARE_FIELDS,
    FIXTURE_PATH,
    LOG_FORMAT,
)

logger = logging.getLogger(__name__)

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


class Settings(BaseModel):
    host: str = DEFAULT_HOST
    port: int = Field(default=DEFAULT_PORT, ge=0, le=65535)
    fixture_path: str = str(FIXTURE_PATH)
    fare_fields: list[str] = list(FARE_FIELDS)
    cors_origins: list[str] = list(DEFAULT_CORS_ORIGINS)
    log_level: str = DEFAULT_LOG_LEVEL


def _split(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def load_settings() -> Settings:
    """
    Load settings from the environment.
    TRIPMOCK_PORT wins over the conventional PORT variable.
    """
    values = {}

    host = os.getenv("TRIPMOCK_HOST", "").strip()
    if host:
        values["host"] = host

    port = os.getenv("TRIPMOCK_PORT", "").strip() or os.getenv("PORT", "").strip()
    if port:
        values["port"] = port

    fixture_path = os.getenv("TRIPMOCK_FIXTURE_PATH", "").strip()
    if fixture_path:
        values["fixture_path"] = fixture_path

    fare_fields = _split(os.getenv("TRIPMOCK_FARE_FIELDS", ""))
    if fare_fields:
        values["fare_fields"] = fare_fields

    cors_origins = _split(os.getenv("TRIPMOCK_CORS_ORIGINS", ""))
    if cors_origins:
        values["cors_origins"] = cors_origins

    log_level = os.getenv("TRIPMOCK_LOG_LEVEL", "").strip().lower()
    if log_level:
        values["log_level"] = log_level

    # pydantic turns a bad port into a ValidationError, which is a ValueError
    return Settings(**values)


def configure_logging(log_level: str = DEFAULT_LOG_LEVEL) -> None:
    level = LOG_LEVELS.get(log_level.lower())
    if level is None:
        logger.warning(f"Unknown log level '{log_level}', using info")
        level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)

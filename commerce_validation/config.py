"""
Runtime settings read from the environment.
"""

import os

from pydantic import BaseModel, Field, field_validator


class ValidationSettings(BaseModel):
    """
    Settings shared by the rule loader, logging and the CLI.

    Attributes:
        log_level: LOG_LEVEL, default INFO
        log_format: LOG_FORMAT, "json" or "text"
        unique_timeout: VALIDATION_UNIQUE_TIMEOUT in seconds; None disables it
    """

    log_level: str = "INFO"
    log_format: str = "json"
    unique_timeout: float | None = Field(None, gt=0)

    @field_validator("log_level")
    @classmethod
    def normalize_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid log level '{v}'")
        return level

    @field_validator("log_format")
    @classmethod
    def check_format(cls, v: str) -> str:
        fmt = v.lower()
        if fmt not in ("json", "text"):
            raise ValueError(f"Invalid log format '{v}'. Must be 'json' or 'text'")
        return fmt

    @classmethod
    def from_env(cls) -> "ValidationSettings":
        """Build settings from environment variables."""
        timeout = os.getenv("VALIDATION_UNIQUE_TIMEOUT")
        return cls(
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "json"),
            unique_timeout=float(timeout) if timeout else None,
        )

"""Application configuration loading and validation."""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


class ConfigError(ValueError):
    """Raised when configuration cannot be loaded safely."""


class Settings(BaseModel):
    """Runtime settings loaded from environment variables."""

    model_config = ConfigDict(frozen=True)

    default_db_name: str = "nosql_generator_db"
    default_backend: str = "mongodb"
    default_structure: str = "nested"
    strict_structure: bool = True
    log_level: str = "WARNING"

    @field_validator("default_db_name", "default_backend", "default_structure")
    @classmethod
    def validate_non_empty(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError("value cannot be empty.")
        return normalized

    @field_validator("default_backend")
    @classmethod
    def validate_backend(cls, value: str) -> str:
        from json2nosql.models.options import UnsupportedBackendError, parse_backend

        try:
            return parse_backend(value).value
        except UnsupportedBackendError as exc:
            raise ValueError(str(exc)) from exc

    @field_validator("default_structure")
    @classmethod
    def validate_structure(cls, value: str) -> str:
        from json2nosql.models.options import (
            UnsupportedStructureError,
            parse_structure,
        )

        try:
            return parse_structure(value).value
        except UnsupportedStructureError as exc:
            raise ValueError(str(exc)) from exc

    @field_validator("strict_structure", mode="before")
    @classmethod
    def validate_strict_structure(cls, value: object) -> object:
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in _TRUE_VALUES:
                return True
            if lowered in _FALSE_VALUES:
                return False
            raise ValueError(
                "expected one of: " + ", ".join(sorted(_TRUE_VALUES | _FALSE_VALUES))
            )
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if normalized not in _LOG_LEVELS:
            raise ValueError(f"must be one of {', '.join(_LOG_LEVELS)}.")
        return normalized

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.log_level)


def _env_value(name: str, default: str | None = None) -> str | None:
    import os

    value = os.getenv(name, default)
    if value is None:
        return None
    return value.strip()


def load_settings() -> Settings:
    """Load settings from environment variables."""
    payload = {
        "default_db_name": _env_value("JSON2NOSQL_DEFAULT_DB_NAME", "nosql_generator_db"),
        "default_backend": _env_value("JSON2NOSQL_DEFAULT_BACKEND", "mongodb"),
        "default_structure": _env_value("JSON2NOSQL_DEFAULT_STRUCTURE", "nested"),
        "strict_structure": _env_value("JSON2NOSQL_STRICT_STRUCTURE", "true"),
        "log_level": _env_value("JSON2NOSQL_LOG_LEVEL", "WARNING"),
    }

    try:
        return Settings.model_validate(payload)
    except ValidationError as exc:
        messages = []
        for err in exc.errors():
            field = ".".join(str(item) for item in err["loc"])
            messages.append(f"- {field}: {err['msg']}")
        raise ConfigError(
            "Invalid configuration values:\n" + "\n".join(messages)
        ) from exc

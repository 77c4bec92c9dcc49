"""Pydantic models and helper utilities for configuration values."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from bookcache import logging_manager

from .constants import (
    BOOKSHELF_FILE_NAME,
    CACHE_DIR_NAME,
    DEFAULT_BASE_RELATIVE,
    DEFAULT_LOG_LEVEL_NAME,
)

logger = logging_manager.get_logger().getChild("config")


def _require_single_component(value: str, label: str) -> str:
    candidate = str(value or "").strip()
    if not candidate or candidate in {".", ".."} or "/" in candidate or "\\" in candidate:
        raise ValueError(f"{label} must be a single path component")
    return candidate


class BookCacheSettings(BaseModel):
    """Typed representation of the cache configuration."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    base_dir: str = str(DEFAULT_BASE_RELATIVE)
    cache_dir_name: str = CACHE_DIR_NAME
    bookshelf_file_name: str = BOOKSHELF_FILE_NAME
    log_level: str = DEFAULT_LOG_LEVEL_NAME

    @field_validator("cache_dir_name", "bookshelf_file_name")
    @classmethod
    def _single_component(cls, value: str) -> str:
        return _require_single_component(value, "value")

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        normalized = str(value or "").strip().upper()
        if not isinstance(logging.getLevelName(normalized), int):
            raise ValueError(f"Unknown log level: {value!r}")
        return normalized

    @property
    def log_level_value(self) -> int:
        return int(logging.getLevelName(self.log_level))


class EnvironmentOverrides(BaseSettings):
    """Configuration overrides sourced from environment variables."""

    model_config = SettingsConfigDict(env_prefix="", extra="ignore")

    base_dir: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("BOOKCACHE_BASE_DIR", "BOOKCACHE_APP_DIR"),
    )
    cache_dir_name: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("BOOKCACHE_CACHE_DIR_NAME")
    )
    log_level: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("BOOKCACHE_LOG_LEVEL")
    )


def load_environment_overrides() -> Dict[str, Any]:
    """Return configuration overrides sourced from environment variables."""

    try:
        overrides = EnvironmentOverrides()
    except ValidationError as exc:
        logger.warning(
            "Invalid environment configuration detected; using defaults.",
            extra={"event": "config.env.validation_error", "error": str(exc)},
        )
        return {}
    return overrides.model_dump(exclude_none=True)


def apply_settings_updates(
    settings: BookCacheSettings, updates: Dict[str, Any]
) -> BookCacheSettings:
    """Return a copy of ``settings`` updated with ``updates`` if any values exist."""

    if not updates:
        return settings
    payload = settings.model_dump()
    payload.update(updates)
    return BookCacheSettings.model_validate(payload)


__all__ = [
    "BookCacheSettings",
    "EnvironmentOverrides",
    "apply_settings_updates",
    "load_environment_overrides",
]

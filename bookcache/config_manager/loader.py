"""Configuration loading utilities."""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import ValidationError

from bookcache import logging_manager

from .constants import CONFIG_FILE_ENV, DEFAULT_CONFIG_PATH, DEFAULT_LOCAL_CONFIG_PATH
from .settings import BookCacheSettings, apply_settings_updates, load_environment_overrides

logger = logging_manager.get_logger().getChild("config")


def _read_config_json(path: Optional[Path], label: str = "configuration") -> Dict[str, Any]:
    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as handle:
            data = json.load(handle)
    except FileNotFoundError:
        logger.debug("No %s found at %s.", label, path)
        return {}
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning(
            "Error loading %s from %s: %s. Proceeding without it.",
            label,
            path,
            exc,
            extra={"event": "config.file.invalid"},
        )
        return {}
    if not isinstance(data, dict):
        logger.warning(
            "Ignoring %s at %s: expected a JSON object.",
            label,
            path,
            extra={"event": "config.file.invalid"},
        )
        return {}
    logger.debug("Loaded %s from %s", label, path)
    return data


def _resolve_override_path(config_file: Optional[str]) -> Path:
    candidate = config_file or os.environ.get(CONFIG_FILE_ENV)
    if not candidate:
        return DEFAULT_LOCAL_CONFIG_PATH
    override_path = Path(candidate).expanduser()
    if not override_path.is_absolute():
        override_path = (Path.cwd() / override_path).resolve()
    return override_path


def load_settings(config_file: Optional[str] = None, **overrides: Any) -> BookCacheSettings:
    """Return settings layered as defaults, config files, environment, then ``overrides``."""

    payload: Dict[str, Any] = {}
    payload.update(_read_config_json(DEFAULT_CONFIG_PATH, label="default configuration"))
    payload.update(
        _read_config_json(_resolve_override_path(config_file), label="local configuration")
    )

    try:
        settings = BookCacheSettings.model_validate(payload)
    except ValidationError as exc:
        raise RuntimeError("Invalid configuration detected") from exc

    env_overrides = load_environment_overrides()
    try:
        settings = apply_settings_updates(settings, env_overrides)
    except ValidationError as exc:
        logger.warning(
            "Ignoring invalid environment overrides.",
            extra={"event": "config.env.validation_error", "error": str(exc)},
        )

    explicit = {key: value for key, value in overrides.items() if value is not None}
    return apply_settings_updates(settings, explicit)


__all__ = ["load_settings"]

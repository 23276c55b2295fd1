"""User settings loaded from ``config.json``."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from loguru import logger

from utils.constants import (
    CHECKLIST_CONCURRENCY,
    CONFIG_FILE,
    DEFAULT_FORMAT,
    REQUEST_TIMEOUT_SECONDS,
    RESOLVER_CONCURRENCY,
    SUPPORTED_FORMATS,
    TOPCARDS_CONCURRENCY,
)

__all__ = ["Settings", "load_settings"]


@dataclass
class Settings:
    default_format: str = DEFAULT_FORMAT
    resolver_concurrency: int = RESOLVER_CONCURRENCY
    checklist_concurrency: int = CHECKLIST_CONCURRENCY
    # None keeps all MTGTop8 page requests in flight at once.
    topcards_concurrency: int | None = TOPCARDS_CONCURRENCY
    request_timeout: float = REQUEST_TIMEOUT_SECONDS


def _positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


_VALIDATORS = {
    "default_format": lambda value: isinstance(value, str) and value.lower() in SUPPORTED_FORMATS,
    "resolver_concurrency": _positive_int,
    "checklist_concurrency": _positive_int,
    "topcards_concurrency": lambda value: value is None or _positive_int(value),
    "request_timeout": lambda value: isinstance(value, (int, float))
    and not isinstance(value, bool)
    and value > 0,
}


def load_settings(path: Path = CONFIG_FILE) -> Settings:
    """
    Load settings, falling back to defaults for anything missing or invalid.

    Args:
        path: JSON settings file

    Returns:
        Settings instance
    """
    settings = Settings()
    if not path.exists():
        return settings
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        logger.warning(f"Invalid JSON at {path}; using default settings: {exc}")
        return settings
    except OSError as exc:
        logger.warning(f"Failed to read {path}; using default settings: {exc}")
        return settings
    if not isinstance(data, dict):
        logger.warning(f"Settings at {path} are not a JSON object; using defaults")
        return settings

    for key, value in data.items():
        validator = _VALIDATORS.get(key)
        if validator is None:
            logger.debug(f"Ignoring unknown setting {key}")
            continue
        if not validator(value):
            logger.warning(f"Invalid value for {key}: {value!r}; keeping {getattr(settings, key)!r}")
            continue
        setattr(settings, key, value.lower() if key == "default_format" else value)
    return settings

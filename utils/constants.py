"""Constants file."""

import os
import sys
from pathlib import Path

APP_NAME = "staples-checklist"
HOME_ENV_VAR = "STAPLES_CHECKLIST_HOME"


def _override_dir() -> Path | None:
    override = os.getenv(HOME_ENV_VAR)
    return Path(override).expanduser() if override else None


def _default_cache_dir() -> Path:
    """Return the per-application cache directory for this platform."""
    override = _override_dir()
    if override is not None:
        return override / "cache"
    if sys.platform.startswith("win"):
        local_appdata = os.getenv("LOCALAPPDATA")
        if local_appdata:
            return Path(local_appdata) / APP_NAME / "cache"
        return Path.home() / f".{APP_NAME}" / "cache"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Caches" / APP_NAME
    xdg_cache = os.getenv("XDG_CACHE_HOME")
    return (Path(xdg_cache) if xdg_cache else Path.home() / ".cache") / APP_NAME


def _default_config_dir() -> Path:
    """Return the per-application config directory for this platform."""
    override = _override_dir()
    if override is not None:
        return override / "config"
    if sys.platform.startswith("win"):
        appdata = os.getenv("APPDATA")
        if appdata:
            return Path(appdata) / APP_NAME
        return Path.home() / f".{APP_NAME}" / "config"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_NAME
    xdg_config = os.getenv("XDG_CONFIG_HOME")
    return (Path(xdg_config) if xdg_config else Path.home() / ".config") / APP_NAME


CACHE_DIR = _default_cache_dir()
CONFIG_DIR = _default_config_dir()
LOGS_DIR = CACHE_DIR / "logs"

CONFIG_FILE = CONFIG_DIR / "config.json"
COLLECTION_FILE = CONFIG_DIR / "collection.json"

# Card records keyed by normalized name; this is also the staple cache.
CARD_CACHE_FILE = CACHE_DIR / "staples.json"
PRINTINGS_CACHE_FILE = CACHE_DIR / "printings.json"

"""Source endpoints."""

SCRYFALL_API = "https://api.scryfall.com"
MTGGOLDFISH_BASE = "https://www.mtggoldfish.com"
MTGTOP8_TOPCARDS_URL = "https://mtgtop8.com/topcards"

"""Pipeline limits and defaults."""

REQUEST_TIMEOUT_SECONDS = 30
RESOLVER_CONCURRENCY = 8
CHECKLIST_CONCURRENCY = 8
# None keeps every MTGTop8 page request in flight at once.
TOPCARDS_CONCURRENCY: int | None = None
TOPCARDS_PAGES = 16

DEFAULT_PERCENT_IN_DECKS = 100.0
DEFAULT_NUM_COPIES = 4

SUPPORTED_FORMATS = ("pauper", "legacy", "pioneer")
DEFAULT_FORMAT = "pauper"
FORMAT_MATCH_CUTOFF = 60

BASIC_LAND_NAMES = frozenset({"Plains", "Island", "Swamp", "Mountain", "Forest"})
WUBRG = ("W", "U", "B", "R", "G")
COLOR_NAMES = {"W": "White", "U": "Blue", "B": "Black", "R": "Red", "G": "Green"}


__all__ = [
    "APP_NAME",
    "BASIC_LAND_NAMES",
    "CACHE_DIR",
    "CARD_CACHE_FILE",
    "CHECKLIST_CONCURRENCY",
    "COLLECTION_FILE",
    "COLOR_NAMES",
    "CONFIG_DIR",
    "CONFIG_FILE",
    "DEFAULT_FORMAT",
    "DEFAULT_NUM_COPIES",
    "DEFAULT_PERCENT_IN_DECKS",
    "FORMAT_MATCH_CUTOFF",
    "HOME_ENV_VAR",
    "LOGS_DIR",
    "MTGGOLDFISH_BASE",
    "MTGTOP8_TOPCARDS_URL",
    "PRINTINGS_CACHE_FILE",
    "REQUEST_TIMEOUT_SECONDS",
    "RESOLVER_CONCURRENCY",
    "SCRYFALL_API",
    "SUPPORTED_FORMATS",
    "TOPCARDS_CONCURRENCY",
    "TOPCARDS_PAGES",
    "WUBRG",
]

"""Format selection from a free-text token."""

from __future__ import annotations

from pathlib import Path

from rapidfuzz import process

from utils.constants import DEFAULT_FORMAT, FORMAT_MATCH_CUTOFF, SUPPORTED_FORMATS

__all__ = ["looks_like_path", "match_format", "select_format"]


def looks_like_path(token: str) -> bool:
    """True for tokens that name a file: separators, an extension, or an existing path."""
    if "/" in token or "\\" in token:
        return True
    path = Path(token)
    return bool(path.suffix) or path.exists()


def match_format(token: str, choices: tuple[str, ...] = SUPPORTED_FORMATS) -> str | None:
    """Return the best fuzzy match for ``token`` among the supported formats, if any."""
    token = token.strip()
    if not token or looks_like_path(token):
        return None
    match = process.extractOne(token.lower(), choices, score_cutoff=FORMAT_MATCH_CUTOFF)
    if match is None:
        return None
    return match[0]


def select_format(token: str | None, default: str = DEFAULT_FORMAT) -> str | None:
    """Resolve the requested format; no token means the default format."""
    if token is None or not token.strip():
        return default
    return match_format(token)

"""Exception hierarchy for the staples checklist.

Every failure the pipeline reports on purpose derives from ``ChecklistError``
so the entry point can catch them in one place.
"""


class ChecklistError(Exception):
    """Base exception for all checklist errors."""

    pass


class FetchError(ChecklistError):
    """An external source (Scryfall, MTGGoldfish, MTGTop8) failed to answer."""

    pass


class CacheIOError(ChecklistError):
    """A cache or collection file could not be read or written."""

    pass


class CacheDecodeError(ChecklistError):
    """A cache or collection file holds contents that do not match its schema."""

    pass


class InputError(ChecklistError):
    """User supplied input (decklist line, format name) is malformed."""

    pass


class UnsupportedFormatError(InputError):
    """A staple source has no listing for the requested format."""

    pass


__all__ = [
    "CacheDecodeError",
    "CacheIOError",
    "ChecklistError",
    "FetchError",
    "InputError",
    "UnsupportedFormatError",
]

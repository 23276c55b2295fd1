"""Card name canonicalisation shared by the caches and the collection store."""

from __future__ import annotations

__all__ = ["fix_transliteration", "normalize_card_name", "trim_double_faced"]

# Sources spell a few accented names without their diacritics.
_TRANSLITERATION_FIXES = {
    "Lorien Revealed": "Lórien Revealed",
    "Troll of Khazad-dum": "Troll of Khazad-dûm",
}


def trim_double_faced(name: str) -> str:
    """Keep only the front face of ``Front // Back`` style names."""
    index = name.find("/")
    if index == -1:
        return name
    return name[:index].strip()


def fix_transliteration(name: str) -> str:
    return _TRANSLITERATION_FIXES.get(name, name)


def normalize_card_name(name: str) -> str:
    """
    Return the key used for every cache and collection lookup.

    ``"Fire // Ice"`` becomes ``"Fire"`` and ``"Lorien Revealed"`` becomes
    ``"Lórien Revealed"`` so equivalent spellings land on one entry.
    """
    return fix_transliteration(trim_double_faced(name.strip()))

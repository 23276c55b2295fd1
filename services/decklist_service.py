"""
Decklist Service - checks a plain-text decklist against the collection.

Lines look like ``4 Counterspell`` or ``4x Counterspell``; ``Deck`` and
``Sideboard`` headers and blank lines are ignored.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from loguru import logger

from utils.constants import BASIC_LAND_NAMES
from utils.errors import InputError

__all__ = ["DecklistEntry", "DecklistReport", "DecklistService", "parse_decklist"]

SECTION_HEADERS = frozenset({"", "Deck", "Sideboard"})

COMPLETE_MARK = "✅"
PARTIAL_MARK = "\U0001f7e1"
MISSING_MARK = "❌"


class OwnedVersions(Protocol):
    def get(self, name: str) -> list[str]: ...


def parse_decklist_line(line: str) -> tuple[int, str] | None:
    """Return ``(count, name)`` for a card line, None for a header or blank line."""
    stripped = line.strip()
    if stripped in SECTION_HEADERS:
        return None
    parts = stripped.split(None, 1)
    if len(parts) < 2:
        raise InputError(f"expected [count] [cardname] got {stripped!r}")
    count_text, name = parts
    try:
        count = int(count_text.rstrip("x"))
    except ValueError:
        count = -1
    if count < 0:
        raise InputError(f"expected [count] [cardname] got {stripped!r}")
    return count, name.strip()


def parse_decklist(lines: Iterable[str]) -> list[tuple[int, str]]:
    cards = []
    for line in lines:
        parsed = parse_decklist_line(line)
        if parsed is not None:
            cards.append(parsed)
    return cards


@dataclass
class DecklistEntry:
    owned: int
    count: int

    @property
    def missing(self) -> int:
        return max(self.count - self.owned, 0)

    @property
    def mark(self) -> str:
        if self.missing == 0:
            return COMPLETE_MARK
        if self.missing < self.count:
            return PARTIAL_MARK
        return MISSING_MARK


class DecklistReport:
    """Per-card ownership for one decklist, keyed by the name as written."""

    def __init__(self, collection: OwnedVersions):
        self.collection = collection
        self.entries: dict[str, DecklistEntry] = {}

    def add(self, name: str, count: int) -> None:
        entry = self.entries.get(name)
        if entry is not None:
            entry.count += count
            return
        if name in BASIC_LAND_NAMES:
            owned = count
        else:
            owned = len(self.collection.get(name))
        self.entries[name] = DecklistEntry(owned=owned, count=count)

    def sorted_entries(self) -> list[tuple[str, DecklistEntry]]:
        return sorted(self.entries.items())

    def wishlist(self) -> list[tuple[int, str]]:
        return [(entry.missing, name) for name, entry in self.sorted_entries() if entry.missing]

    def render(self) -> str:
        lines = [
            f"{entry.owned}/{entry.count}\t{entry.mark}\t{name}"
            for name, entry in self.sorted_entries()
        ]
        lines.append("Wishlist missing:")
        lines.extend(f"{missing} {name}" for missing, name in self.wishlist())
        return "\n".join(lines)


class DecklistService:
    """Service reading decklist files and reporting what is still missing."""

    def __init__(self, collection: OwnedVersions):
        self.collection = collection

    def check_lines(self, lines: Iterable[str]) -> DecklistReport:
        report = DecklistReport(self.collection)
        for count, name in parse_decklist(lines):
            report.add(name, count)
        return report

    async def check_file(self, path: Path) -> DecklistReport:
        """
        Check a decklist file.

        Raises:
            InputError: The file cannot be read or a line is not ``[count] [cardname]``
        """
        try:
            text = await asyncio.to_thread(path.read_text, encoding="utf-8")
        except OSError as exc:
            raise InputError(f"Failed to read decklist {path}: {exc}") from exc
        report = self.check_lines(text.splitlines())
        logger.info(f"Checked {len(report.entries)} distinct cards from {path}")
        return report

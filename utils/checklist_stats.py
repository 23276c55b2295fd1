"""Completion statistics over the top of the checklist."""

from __future__ import annotations

from collections import Counter
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from itertools import islice
from typing import TYPE_CHECKING

from utils.constants import WUBRG
from utils.ranking import IGNORING_COLLECTED

if TYPE_CHECKING:
    from services.checklist_service import ChecklistEntry

__all__ = ["ChecklistStats", "Progress", "calculate_stats", "classify", "scan_top_entries"]

COLORLESS = "colorless"
MULTICOLOR = "multicolor"
LAND = "land"

MONO_COLOR_TARGET = 20
COLORLESS_TARGET = 20
MULTICOLOR_TARGET = 10


@dataclass
class Progress:
    owned: int = 0
    total: int = 0

    @property
    def complete(self) -> bool:
        return self.owned >= self.total


@dataclass
class ChecklistStats:
    top_20: Progress = field(default_factory=Progress)
    top_50: Progress = field(default_factory=Progress)
    top_150: Progress = field(default_factory=Progress)
    top_20_by_color: dict[str, Progress] = field(default_factory=dict)
    top_10_colorless: Progress = field(default_factory=Progress)
    top_20_multicolor: Progress = field(default_factory=Progress)
    top_10_lands: Progress = field(default_factory=Progress)


def classify(entry: ChecklistEntry) -> str:
    """Place an entry in exactly one bucket: land, colorless, a colour, or multicolor."""
    card = entry.card
    if card.is_land:
        return LAND
    if not card.colors:
        return COLORLESS
    if len(card.colors) == 1:
        return card.colors[0]
    return MULTICOLOR


def _targets_met(counters: Counter[str]) -> bool:
    return (
        all(counters[color] >= MONO_COLOR_TARGET for color in WUBRG)
        and counters[COLORLESS] >= COLORLESS_TARGET
        and counters[MULTICOLOR] >= MULTICOLOR_TARGET
    )


def scan_top_entries(ranked: Iterable[ChecklistEntry]) -> list[ChecklistEntry]:
    """
    Take entries in ranked order until every colour bucket has enough cards.

    Lands are counted but never part of the stop condition.
    """
    counters: Counter[str] = Counter()
    scanned: list[ChecklistEntry] = []
    for entry in ranked:
        if _targets_met(counters):
            break
        counters[classify(entry)] += 1
        scanned.append(entry)
    return scanned


def _top(
    entries: list[ChecklistEntry], count: int, predicate: Callable[[ChecklistEntry], bool]
) -> Progress:
    progress = Progress()
    matches = (entry for entry in entries if predicate(entry))
    for entry in islice(matches, count):
        num_copies = entry.metadata.num_copies
        progress.owned += min(entry.owned_count, num_copies)
        progress.total += num_copies
    return progress


def calculate_stats(entries: Iterable[ChecklistEntry]) -> ChecklistStats:
    """Compute top-N progress summaries over the collection-blind ranking."""
    top_cards = scan_top_entries(IGNORING_COLLECTED.sort(entries))

    def everything(_entry: ChecklistEntry) -> bool:
        return True

    def mono(color: str) -> Callable[[ChecklistEntry], bool]:
        return lambda entry: entry.card.colors == (color,)

    return ChecklistStats(
        top_20=_top(top_cards, 20, everything),
        top_50=_top(top_cards, 50, everything),
        top_150=_top(top_cards, 150, everything),
        top_20_by_color={color: _top(top_cards, 20, mono(color)) for color in WUBRG},
        top_10_colorless=_top(top_cards, 10, lambda entry: not entry.card.colors),
        top_20_multicolor=_top(
            top_cards, 20, lambda entry: entry.card.colors is not None and len(entry.card.colors) > 1
        ),
        top_10_lands=_top(top_cards, 10, lambda entry: entry.card.is_land),
    )

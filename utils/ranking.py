"""Priority ordering of checklist entries.

Entries are ranked by how much of the format's play they still represent:
missing copies times play percentage, then play percentage, colour and name.
The two modes only differ in how missing copies are counted.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Any

from utils.card_models import color_sort_key

if TYPE_CHECKING:
    from services.checklist_service import ChecklistEntry

__all__ = [
    "IGNORING_COLLECTED",
    "USING_COLLECTED",
    "RankingComparator",
    "missing_ignoring_collected",
    "missing_using_collected",
]

MissingFn = Callable[["ChecklistEntry"], int]


def missing_using_collected(entry: ChecklistEntry) -> int:
    return max(entry.metadata.num_copies - entry.owned_count, 0)


def missing_ignoring_collected(entry: ChecklistEntry) -> int:
    return entry.metadata.num_copies


class RankingComparator:
    """Total order over entries, highest acquisition priority first."""

    def __init__(self, missing: MissingFn):
        self.missing = missing

    def key(self, entry: ChecklistEntry) -> tuple[Any, ...]:
        percent = entry.metadata.percent_in_decks
        return (
            -(self.missing(entry) * percent),
            -percent,
            color_sort_key(entry.card.color_signature),
            entry.card.canonical_name,
        )

    def compare(self, a: ChecklistEntry, b: ChecklistEntry) -> int:
        key_a, key_b = self.key(a), self.key(b)
        return (key_a > key_b) - (key_a < key_b)

    def sort(self, entries: Iterable[ChecklistEntry]) -> list[ChecklistEntry]:
        return sorted(entries, key=self.key)


USING_COLLECTED = RankingComparator(missing_using_collected)
IGNORING_COLLECTED = RankingComparator(missing_ignoring_collected)

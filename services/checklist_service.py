"""
Checklist Service - joins staples with printings and ownership.

The resulting Checklist owns every entry. Callers address entries by index
and change ownership through ``add_version``/``remove_version``, which also
write through to the collection store.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import Protocol

from loguru import logger

from utils.card_models import CardIdentity, Metadata, Printing
from utils.concurrency import bounded_gather
from utils.constants import CHECKLIST_CONCURRENCY
from utils.ranking import IGNORING_COLLECTED, USING_COLLECTED, missing_using_collected

__all__ = ["Checklist", "ChecklistEntry", "ChecklistService"]


class PrintingsSource(Protocol):
    async def get_printings(self, card: CardIdentity) -> list[Printing]: ...


class OwnershipStore(Protocol):
    def get(self, name: str) -> list[str]: ...

    def add(self, name: str, printing: str) -> None: ...

    def remove(self, name: str, printing: str) -> bool: ...


class ChecklistEntry:
    """One staple with its printings, metadata and owned versions."""

    __slots__ = ("card", "printings", "metadata", "_owned")

    def __init__(
        self,
        card: CardIdentity,
        printings: Sequence[Printing],
        metadata: Metadata,
        owned: Sequence[str] = (),
    ):
        self.card = card
        self.printings = tuple(printings)
        self.metadata = metadata
        self._owned = list(owned)

    @property
    def owned_versions(self) -> tuple[str, ...]:
        return tuple(self._owned)

    @property
    def owned_count(self) -> int:
        return len(self._owned)

    def __repr__(self) -> str:
        return (
            f"ChecklistEntry({self.card.name!r}, owned={self.owned_count}/"
            f"{self.metadata.num_copies}, percent={self.metadata.percent_in_decks})"
        )


class Checklist:
    """Ranked staples, ordered by acquisition priority at construction time."""

    def __init__(self, entries: Sequence[ChecklistEntry], collection: OwnershipStore | None = None):
        self._entries = list(entries)
        self._collection = collection

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ChecklistEntry]:
        return iter(self._entries)

    def entry(self, index: int) -> ChecklistEntry:
        return self._entries[index]

    def owned_versions(self, index: int) -> tuple[str, ...]:
        return self._entries[index].owned_versions

    def add_version(self, index: int, code: str) -> int:
        """
        Record one more owned copy of a printing.

        Returns:
            The updated number of owned copies
        """
        entry = self._entries[index]
        if self._collection is not None:
            self._collection.add(entry.card.canonical_name, code)
        entry._owned.append(code)
        return entry.owned_count

    def remove_version(self, index: int, code: str) -> int:
        """
        Drop one owned copy of a printing; a code that is not owned is ignored.

        Returns:
            The updated number of owned copies
        """
        entry = self._entries[index]
        if code not in entry._owned:
            return entry.owned_count
        if self._collection is not None:
            self._collection.remove(entry.card.canonical_name, code)
        entry._owned.remove(code)
        return entry.owned_count

    def ignoring_collection(self) -> list[ChecklistEntry]:
        """Entries ranked as if nothing were owned."""
        return IGNORING_COLLECTED.sort(self._entries)

    def wishlist(self) -> list[tuple[int, str]]:
        """
        Missing copies per card, most played cards first.

        Returns:
            ``(missing, name)`` pairs for every entry still short of copies
        """
        short = [entry for entry in self._entries if missing_using_collected(entry) > 0]
        short.sort(key=lambda entry: -entry.metadata.percent_in_decks)
        return [(missing_using_collected(entry), entry.card.name) for entry in short]


class ChecklistService:
    """Service building the checklist from merged staples."""

    def __init__(
        self,
        printings: PrintingsSource,
        collection: OwnershipStore,
        concurrency: int = CHECKLIST_CONCURRENCY,
    ):
        """
        Initialize the checklist service.

        Args:
            printings: Repository resolving the printings of a card
            collection: Store of owned printing codes
            concurrency: Entries assembled at once
        """
        self.printings = printings
        self.collection = collection
        self.concurrency = concurrency

    async def build(self, staples: Sequence[tuple[CardIdentity, Metadata | None]]) -> Checklist:
        """
        Build the ranked checklist.

        Basic lands (by exact name) are left out; every other card is kept.
        Missing metadata defaults to 100% of decks and 4 copies.
        """
        survivors = [(card, metadata) for card, metadata in staples if not card.is_basic_land]
        skipped = len(staples) - len(survivors)
        if skipped:
            logger.debug(f"Skipped {skipped} basic lands")

        async def assemble(card: CardIdentity, metadata: Metadata | None) -> ChecklistEntry:
            owned = self.collection.get(card.canonical_name)
            printings = await self.printings.get_printings(card)
            return ChecklistEntry(card, printings, metadata or Metadata(), owned)

        entries = await bounded_gather(
            self.concurrency,
            (assemble(card, metadata) for card, metadata in survivors),
        )
        logger.info(f"Checklist built with {len(entries)} cards")
        return Checklist(USING_COLLECTED.sort(entries), self.collection)

"""
Staple Service - merges the staple lists of every source.

Sources run concurrently; their outputs are concatenated and deduplicated by
card id, keeping the entry with the best metadata for each card.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Protocol

from loguru import logger

from utils.card_models import CardIdentity, Metadata
from utils.concurrency import try_join

__all__ = ["StapleService", "StapleSource", "merge_staples"]

Staple = tuple[CardIdentity, Metadata | None]


class StapleSource(Protocol):
    source: str

    async def fetch(self, mtg_format: str) -> list[tuple[CardIdentity, Metadata]]: ...


def _merge_key(staple: Staple) -> tuple[str, bool, float]:
    card, metadata = staple
    if metadata is None:
        return (card.id, True, 0.0)
    return (card.id, False, -metadata.percent_in_decks)


def merge_staples(batches: Iterable[Iterable[Staple]]) -> list[Staple]:
    """
    Concatenate source outputs and keep one entry per card id.

    Entries are ordered by id; for a shared id the one with metadata wins over
    one without, and the higher ``percent_in_decks`` wins among two.
    """
    combined = [staple for batch in batches for staple in batch]
    combined.sort(key=_merge_key)
    merged: list[Staple] = []
    for staple in combined:
        if merged and merged[-1][0].id == staple[0].id:
            continue
        merged.append(staple)
    return merged


class StapleService:
    """Service running every staple source for a format."""

    def __init__(self, sources: Sequence[StapleSource]):
        self.sources = list(sources)

    async def fetch(self, mtg_format: str) -> list[Staple]:
        """
        Scrape every source concurrently and merge the results.

        The first failing source aborts the whole fetch.
        """
        logger.info(f"Fetching {mtg_format} staples from {len(self.sources)} sources")
        batches = await try_join(*(source.fetch(mtg_format) for source in self.sources))
        for source, batch in zip(self.sources, batches):
            logger.info(f"{source.source}: {len(batch)} cards")
        total = sum(len(batch) for batch in batches)
        merged = merge_staples(batches)
        logger.info(f"All staples downloaded: {total} rows, {len(merged)} distinct cards")
        return merged

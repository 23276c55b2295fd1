"""Number parsing and card resolution shared by the staple scrapers."""

from __future__ import annotations

import math
from typing import Protocol

from utils.card_models import CardIdentity, Metadata
from utils.concurrency import try_join

__all__ = ["CardResolver", "StapleRow", "parse_copies", "parse_percent", "resolve_rows"]

# (name, percent text, copies text) as read from a page.
StapleRow = tuple[str, str | None, str | None]


class CardResolver(Protocol):
    async def get_card(self, name: str) -> CardIdentity: ...


def _first_token(text: str | None) -> str | None:
    if not text:
        return None
    tokens = text.split()
    return tokens[0] if tokens else None


def _parse_float(text: str | None) -> float | None:
    token = _first_token(text)
    if token is None:
        return None
    try:
        value = float(token.rstrip("%"))
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def parse_percent(text: str | None) -> float | None:
    """Parse ``"45.2%"`` or ``"45.2"``; absent when unparsable."""
    return _parse_float(text)


def parse_copies(text: str | None) -> int | None:
    """Parse an average copy count, rounding up to whole copies."""
    value = _parse_float(text)
    if value is None:
        return None
    return math.ceil(value)


async def resolve_rows(
    resolver: CardResolver, rows: list[StapleRow]
) -> list[tuple[CardIdentity, Metadata]]:
    """Resolve every scraped name to a card, pairing it with its metadata."""

    async def resolve(row: StapleRow) -> tuple[CardIdentity, Metadata]:
        name, percent, copies = row
        card = await resolver.get_card(name)
        return card, Metadata.from_scrape(parse_percent(percent), parse_copies(copies))

    return await try_join(*(resolve(row) for row in rows))

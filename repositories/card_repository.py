"""
Card Repository - Data access layer for card information.

This module handles all card-related data access including:
- Card lookup by name (the staple cache)
- Printing lists per card
Both are served from JSON caches and filled from the Scryfall API on a miss.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any
from urllib.parse import quote

from loguru import logger

from repositories.cache_resolver import CacheAsideResolver
from utils.card_models import CardIdentity, Printing
from utils.card_name import normalize_card_name
from utils.constants import (
    CARD_CACHE_FILE,
    PRINTINGS_CACHE_FILE,
    RESOLVER_CONCURRENCY,
    SCRYFALL_API,
)
from utils.errors import FetchError
from utils.http import fetch_json

__all__ = ["CardRepository"]


def _is_card_payload(value: Any) -> bool:
    return isinstance(value, dict) and isinstance(value.get("id"), str) and "name" in value


def _is_printing_list(value: Any) -> bool:
    return isinstance(value, list) and all(
        isinstance(item, dict) and "code" in item and "name" in item for item in value
    )


class CardRepository:
    """Repository for card data access operations."""

    def __init__(
        self,
        session: Any,
        card_cache_file: Path = CARD_CACHE_FILE,
        printings_cache_file: Path = PRINTINGS_CACHE_FILE,
        max_concurrency: int = RESOLVER_CONCURRENCY,
    ):
        """
        Initialize the card repository.

        Args:
            session: Async HTTP session used for Scryfall requests
            card_cache_file: JSON cache of card records keyed by normalized name
            printings_cache_file: JSON cache of printings keyed by card id
            max_concurrency: Concurrent Scryfall fetches allowed per cache
        """
        self.session = session
        self.cards: CacheAsideResolver[dict[str, Any]] = CacheAsideResolver(
            "card",
            card_cache_file,
            self._fetch_card,
            validate=_is_card_payload,
            max_concurrency=max_concurrency,
        )
        self.printings: CacheAsideResolver[list[dict[str, str]]] = CacheAsideResolver(
            "printings",
            printings_cache_file,
            self._fetch_printings,
            validate=_is_printing_list,
            max_concurrency=max_concurrency,
        )

    # ============= Card Lookup =============

    async def get_card(self, name: str) -> CardIdentity:
        """
        Resolve a card by name.

        Args:
            name: Card name as scraped; normalized before the cache lookup

        Returns:
            CardIdentity built from the Scryfall record
        """
        payload = await self.cards.resolve(normalize_card_name(name))
        return CardIdentity.from_scryfall(payload)

    async def get_printings(self, card: CardIdentity) -> list[Printing]:
        """
        Resolve every printing of a card.

        Args:
            card: Card whose printings are requested

        Returns:
            Printings in Scryfall search order
        """
        raw = await self.printings.resolve(card.id, card)
        return [Printing.from_dict(item) for item in raw]

    # ============= Scryfall Fetchers =============

    async def _fetch_card(self, name: str) -> dict[str, Any]:
        logger.debug(f"Fetching card {name} from Scryfall")
        payload = await fetch_json(
            self.session, f"{SCRYFALL_API}/cards/named", params={"exact": name}
        )
        if not _is_card_payload(payload):
            raise FetchError(f"Scryfall returned an unexpected payload for {name}")
        return payload

    async def _fetch_printings(self, card_id: str, card: CardIdentity) -> list[dict[str, str]]:
        logger.debug(f"Fetching printings of {card.name} from Scryfall")
        exact_query = quote(f"!\"{card.name}\"")
        url: str | None = card.prints_search_uri or (
            f"{SCRYFALL_API}/cards/search?order=released&unique=prints&q={exact_query}"
        )
        printings: list[dict[str, str]] = []
        while url:
            page = await fetch_json(self.session, url)
            if not isinstance(page, dict):
                raise FetchError(f"Scryfall returned an unexpected printings page for {card.name}")
            for printing in page.get("data", []):
                printings.append({"code": printing["set"], "name": printing["set_name"]})
            url = page.get("next_page") if page.get("has_more") else None
        logger.info(f"Downloaded {len(printings)} printings of {card.name} ({card_id})")
        return printings

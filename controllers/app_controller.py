"""
App Controller - wires the staple sources, caches and collection for one run.

The controller owns nothing between runs: every call opens a fresh HTTP
session and parser worker, builds the repositories on top of them and tears
everything down when the call returns.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from pathlib import Path
from typing import Any

from loguru import logger

from navigators.mtggoldfish import MtgGoldfishScraper
from navigators.mtgtop8 import MtgTop8Scraper
from repositories.card_repository import CardRepository
from repositories.collection_repository import CollectionStore
from services.checklist_service import Checklist, ChecklistService
from services.decklist_service import DecklistReport, DecklistService
from services.staple_service import StapleService
from utils.checklist_format import format_wishlist
from utils.constants import CARD_CACHE_FILE, COLLECTION_FILE, PRINTINGS_CACHE_FILE
from utils.errors import CacheIOError
from utils.http import create_session
from utils.parser_worker import HtmlParserWorker
from utils.settings import Settings


class AppController:

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        collection_file: Path = COLLECTION_FILE,
        card_cache_file: Path = CARD_CACHE_FILE,
        printings_cache_file: Path = PRINTINGS_CACHE_FILE,
        session_factory: Callable[[float], Any] = create_session,
    ):
        self.settings = settings or Settings()
        self.collection_file = Path(collection_file)
        self.card_cache_file = Path(card_cache_file)
        self.printings_cache_file = Path(printings_cache_file)
        self.session_factory = session_factory

    async def load_collection(self) -> CollectionStore:
        return await asyncio.to_thread(CollectionStore.load, self.collection_file)

    async def build_checklist(self, mtg_format: str) -> Checklist:
        """
        Scrape, merge and rank the staples of a format against the collection.

        Args:
            mtg_format: Format name, already matched to a supported format

        Returns:
            Checklist ordered by acquisition priority
        """
        collection = await self.load_collection()
        logger.info(f"Building {mtg_format} checklist")
        async with self.session_factory(self.settings.request_timeout) as session:
            with HtmlParserWorker() as parser:
                cards = CardRepository(
                    session,
                    self.card_cache_file,
                    self.printings_cache_file,
                    max_concurrency=self.settings.resolver_concurrency,
                )
                staple_service = StapleService(
                    [
                        MtgGoldfishScraper(session, cards, parser),
                        MtgTop8Scraper(
                            session,
                            cards,
                            parser,
                            page_concurrency=self.settings.topcards_concurrency,
                        ),
                    ]
                )
                staples = await staple_service.fetch(mtg_format)
                checklist_service = ChecklistService(
                    cards, collection, concurrency=self.settings.checklist_concurrency
                )
                return await checklist_service.build(staples)

    async def save_wishlist(self, checklist: Checklist, path: Path) -> int:
        """
        Write the missing copies of the checklist to ``path``.

        Returns:
            Number of cards written

        Raises:
            CacheIOError: If the file cannot be written
        """
        wishlist = checklist.wishlist()
        path = Path(path)
        try:
            await asyncio.to_thread(path.write_text, format_wishlist(wishlist), encoding="utf-8")
        except OSError as exc:
            raise CacheIOError(f"Unable to write wishlist to {path}: {exc}") from exc
        logger.info(f"Wishlist with {len(wishlist)} cards saved to {path}")
        return len(wishlist)

    async def check_decklist(self, path: Path) -> DecklistReport:
        collection = await self.load_collection()
        return await DecklistService(collection).check_file(Path(path))

from __future__ import annotations

from typing import Any

import bs4
from loguru import logger

from navigators.staple_rows import CardResolver, StapleRow, resolve_rows
from utils.card_models import CardIdentity, Metadata
from utils.concurrency import try_join
from utils.constants import MTGGOLDFISH_BASE
from utils.errors import UnsupportedFormatError
from utils.http import fetch_text
from utils.parser_worker import HtmlParserWorker

__all__ = ["MtgGoldfishScraper", "parse_staples_table", "staple_urls"]

STAPLE_CATEGORIES = ("creatures", "spells", "lands")
GOLDFISH_FORMATS = frozenset({"pauper", "pioneer", "legacy", "standard"})


def staple_urls(mtg_format: str) -> list[str]:
    """Return the full staples page of every category for a format."""
    mtg_format = mtg_format.lower()
    if mtg_format not in GOLDFISH_FORMATS:
        raise UnsupportedFormatError(f"{mtg_format} not supported by MTGGoldfish")
    return [
        f"{MTGGOLDFISH_BASE}/format-staples/{mtg_format}/full/{category}"
        for category in STAPLE_CATEGORIES
    ]


def parse_staples_table(html: str) -> list[StapleRow] | None:
    """
    Read (name, percent, copies) from the first table of a staples page.

    The first text cell of every row is the rank and is skipped. Returns None
    when the page has no table at all.
    """
    soup = bs4.BeautifulSoup(html, "lxml")
    table = soup.find("table")
    if table is None:
        return None
    rows: list[StapleRow] = []
    for tr in table.find_all("tr"):
        if tr.parent is not None and tr.parent.name == "thead":
            continue
        values = list(tr.stripped_strings)[1:]
        if not values:
            continue
        rows.append(
            (
                values[0],
                values[1] if len(values) > 1 else None,
                values[2] if len(values) > 2 else None,
            )
        )
    return rows


class MtgGoldfishScraper:
    """Staples from the MTGGoldfish format-staples tables."""

    source = "mtggoldfish"

    def __init__(self, session: Any, cards: CardResolver, parser: HtmlParserWorker):
        self.session = session
        self.cards = cards
        self.parser = parser

    async def fetch(self, mtg_format: str) -> list[tuple[CardIdentity, Metadata]]:
        urls = staple_urls(mtg_format)
        batches = await try_join(*(self._scrape(url) for url in urls))
        return [item for batch in batches for item in batch]

    async def _scrape(self, url: str) -> list[tuple[CardIdentity, Metadata]]:
        html = await fetch_text(self.session, url)
        logger.info(f"{url} downloaded")
        rows = await self.parser.run(parse_staples_table, html)
        if rows is None:
            logger.warning(f"Could not find staples table for {url}")
            return []
        staples = await resolve_rows(self.cards, rows)
        logger.info(f"{url} scraped, {len(staples)} cards")
        return staples

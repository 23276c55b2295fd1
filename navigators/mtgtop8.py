"""MTGTop8 "top cards" scraper.

The listing is paginated behind a POST form: every page of both the maindeck
and the sideboard board is requested, parsed on the HTML worker thread, and
the collected names are resolved through the card cache.
"""

from __future__ import annotations

from typing import Any

import bs4
from loguru import logger

from navigators.staple_rows import CardResolver, StapleRow, resolve_rows
from utils.card_models import CardIdentity, Metadata
from utils.card_name import fix_transliteration
from utils.concurrency import bounded_gather
from utils.constants import MTGTOP8_TOPCARDS_URL, TOPCARDS_CONCURRENCY, TOPCARDS_PAGES
from utils.errors import UnsupportedFormatError
from utils.http import fetch_text
from utils.parser_worker import HtmlParserWorker

__all__ = ["BOARDS", "MtgTop8Scraper", "build_form", "parse_topcards_page"]

BOARDS = ("MD", "SB")
TOP8_FORMAT_CODES = {"pauper": "PAU", "legacy": "LE", "pioneer": "PI"}

# Fixed fields the topcards form submits alongside the page selection.
STATIC_FORM_FIELDS = {
    "data": "1",
    "metagame_sel[VI]": "71",
    "metagame_sel[LE]": "39",
    "metagame_sel[MO]": "51",
    "metagame_sel[PI]": "193",
    "metagame_sel[EX]": "95",
    "metagame_sel[HI]": "211",
    "metagame_sel[ST]": "52",
    "metagame_sel[BL]": "85",
    "metagame_sel[LI]": "227",
    "metagame_sel[PAU]": "145",
    "metagame_sel[EDH]": "121",
    "metagame_sel[HIGH]": "180",
    "metagame_sel[EDHP]": "106",
    "metagame_sel[CHL]": "105",
    "metagame_sel[PEA]": "228",
    "metagame_sel[EDHM]": "157",
    "metagame_sel[ALCH]": "232",
    "metagame_sel[cEDH]": "240",
    "metagame_sel[EXP]": "259",
    "metagame_sel[PREM]": "261",
    "card_col": "",
    "card_type": "",
    "card_rarity": "",
    "lands": "1",
}


def format_code(mtg_format: str) -> str:
    try:
        return TOP8_FORMAT_CODES[mtg_format.lower()]
    except KeyError:
        raise UnsupportedFormatError(f"{mtg_format} not supported by MTGTop8") from None


def build_form(mtg_format: str, page: int, board: str) -> dict[str, str]:
    return {
        **STATIC_FORM_FIELDS,
        "current_page": str(page),
        "maindeck": board,
        "format": format_code(mtg_format),
    }


def _first_text(cell: bs4.Tag) -> str | None:
    return next(iter(cell.strings), None)


def parse_topcards_page(html: str) -> list[StapleRow]:
    """Group the ``L14`` cells of a page into (name, percent, copies) rows."""
    soup = bs4.BeautifulSoup(html, "lxml")
    cells = soup.select('td[class="L14"]')
    rows: list[StapleRow] = []
    for start in range(0, len(cells) - 2, 3):
        name_cell, percent_cell, copies_cell = cells[start : start + 3]
        name = fix_transliteration(name_cell.get_text().strip())
        if not name:
            continue
        rows.append((name, _first_text(percent_cell), _first_text(copies_cell)))
    return rows


class MtgTop8Scraper:
    """Staples from the MTGTop8 top cards listing."""

    source = "mtgtop8"

    def __init__(
        self,
        session: Any,
        cards: CardResolver,
        parser: HtmlParserWorker,
        page_concurrency: int | None = TOPCARDS_CONCURRENCY,
        pages: int = TOPCARDS_PAGES,
    ):
        self.session = session
        self.cards = cards
        self.parser = parser
        self.page_concurrency = page_concurrency
        self.pages = pages

    async def fetch(self, mtg_format: str) -> list[tuple[CardIdentity, Metadata]]:
        format_code(mtg_format)
        requests = [(page, board) for board in BOARDS for page in range(1, self.pages + 1)]
        pages = await bounded_gather(
            self.page_concurrency,
            (self._scrape_page(mtg_format, page, board) for page, board in requests),
        )
        rows = [row for page_rows in pages for row in page_rows]
        return await resolve_rows(self.cards, rows)

    async def _scrape_page(self, mtg_format: str, page: int, board: str) -> list[StapleRow]:
        logger.debug(f"Downloading page {page:02} of mtgtop8 ({board})")
        html = await fetch_text(
            self.session,
            MTGTOP8_TOPCARDS_URL,
            method="POST",
            data=build_form(mtg_format, page, board),
        )
        rows = await self.parser.run(parse_topcards_page, html)
        logger.info(f"Scraped page {page:02} of mtgtop8 ({board}), found {len(rows)} cards")
        return rows

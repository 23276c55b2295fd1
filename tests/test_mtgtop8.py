"""Tests for navigators/mtgtop8.py module."""

import asyncio

import pytest
from test_helpers import FakeResponse, FakeSession, make_card

from navigators.mtgtop8 import BOARDS, MtgTop8Scraper, build_form, parse_topcards_page
from utils.card_models import Metadata
from utils.constants import MTGTOP8_TOPCARDS_URL
from utils.errors import UnsupportedFormatError

SAMPLE_TOPCARDS_HTML = """
<html>
<body>
<table>
    <tr class="hover_tr">
        <td class="L14">Lorien Revealed</td>
        <td class="L14">45 %</td>
        <td class="L14">3.2</td>
    </tr>
    <tr class="hover_tr">
        <td class="L14"><a>Counterspell</a></td>
        <td class="L14">30<span> %</span></td>
        <td class="L14">4</td>
    </tr>
    <tr>
        <td class="L14 other">Ignored</td>
        <td class="L14">Dangling</td>
    </tr>
</table>
</body>
</html>
"""


class FakeResolver:
    def __init__(self):
        self.names = []

    async def get_card(self, name):
        self.names.append(name)
        return make_card(name)


def test_build_form_sets_page_board_and_format():
    form = build_form("pauper", 3, "SB")

    assert form["current_page"] == "3"
    assert form["maindeck"] == "SB"
    assert form["format"] == "PAU"
    assert form["lands"] == "1"


def test_build_form_rejects_unknown_format():
    with pytest.raises(UnsupportedFormatError):
        build_form("standard", 1, "MD")


class TestParseTopcardsPage:
    def test_groups_cells_in_triples(self):
        rows = parse_topcards_page(SAMPLE_TOPCARDS_HTML)

        assert rows == [("Lórien Revealed", "45 %", "3.2"), ("Counterspell", "30", "4")]

    def test_empty_page(self):
        assert parse_topcards_page("<html><body></body></html>") == []


class TestMtgTop8Scraper:
    def test_fetch_requests_every_page_of_both_boards(self, parser_worker):
        forms = []

        def route(data=None, **_kwargs):
            forms.append(data)
            if data["maindeck"] == "MD" and data["current_page"] == "1":
                return FakeResponse(text=SAMPLE_TOPCARDS_HTML)
            return FakeResponse(text="<html></html>")

        session = FakeSession({MTGTOP8_TOPCARDS_URL: route})
        resolver = FakeResolver()
        scraper = MtgTop8Scraper(session, resolver, parser_worker, page_concurrency=2, pages=3)

        staples = asyncio.run(scraper.fetch("legacy"))

        assert sorted((form["maindeck"], form["current_page"]) for form in forms) == sorted(
            (board, str(page)) for board in BOARDS for page in range(1, 4)
        )
        assert all(method == "POST" for method, _url, _kwargs in session.calls)
        assert all(form["format"] == "LE" for form in forms)
        assert resolver.names == ["Lórien Revealed", "Counterspell"]
        assert staples[0][1] == Metadata(45.0, 4)
        assert staples[1][1] == Metadata(30.0, 4)

    def test_unsupported_format_makes_no_requests(self, parser_worker):
        session = FakeSession()
        scraper = MtgTop8Scraper(session, FakeResolver(), parser_worker)

        with pytest.raises(UnsupportedFormatError):
            asyncio.run(scraper.fetch("standard"))
        assert session.calls == []

"""Tests for scraped number parsing and row resolution."""

import asyncio

import pytest
from test_helpers import make_card

from navigators.staple_rows import parse_copies, parse_percent, resolve_rows
from utils.card_models import Metadata
from utils.errors import FetchError


@pytest.mark.parametrize(
    "text,expected",
    [
        ("45.2%", 45.2),
        ("45.2", 45.2),
        ("12 %", 12.0),
        ("  7.5% of decks", 7.5),
        ("", None),
        (None, None),
        ("n/a", None),
        ("nan", None),
        ("inf%", None),
    ],
)
def test_parse_percent(text, expected):
    assert parse_percent(text) == expected


@pytest.mark.parametrize(
    "text,expected",
    [("3.4", 4), ("4.0", 4), ("1", 1), ("2.01 copies", 3), ("x", None), (None, None)],
)
def test_parse_copies_rounds_up(text, expected):
    assert parse_copies(text) == expected


class FakeResolver:
    def __init__(self, fail_on=None):
        self.fail_on = fail_on
        self.names = []

    async def get_card(self, name):
        self.names.append(name)
        if name == self.fail_on:
            raise FetchError(f"no card {name}")
        return make_card(name)


def test_resolve_rows_pairs_cards_with_metadata():
    resolver = FakeResolver()
    rows = [("Ponder", "80%", "3.2"), ("Preordain", None, "junk")]

    staples = asyncio.run(resolve_rows(resolver, rows))

    assert [card.name for card, _ in staples] == ["Ponder", "Preordain"]
    assert staples[0][1] == Metadata(80.0, 4)
    assert staples[1][1] == Metadata(100.0, 4)


def test_resolve_rows_propagates_failures():
    resolver = FakeResolver(fail_on="Bad Card")

    with pytest.raises(FetchError):
        asyncio.run(resolve_rows(resolver, [("Ponder", "1", "1"), ("Bad Card", "1", "1")]))

"""Tests for the decklist ownership check."""

import asyncio

import pytest

from services.decklist_service import (
    COMPLETE_MARK,
    MISSING_MARK,
    PARTIAL_MARK,
    DecklistService,
    parse_decklist,
    parse_decklist_line,
)
from utils.errors import InputError

SAMPLE_DECKLIST = """Deck
4 Counterspell
2x Ponder
12 Island

Sideboard
1 Hydroblast
2 Ponder
"""


@pytest.mark.parametrize(
    "line,expected",
    [
        ("4 Counterspell", (4, "Counterspell")),
        ("4x Counterspell", (4, "Counterspell")),
        ("  1   Fire // Ice  ", (1, "Fire // Ice")),
        ("0 Ponder", (0, "Ponder")),
        ("", None),
        ("Deck", None),
        ("Sideboard", None),
    ],
)
def test_parse_decklist_line(line, expected):
    assert parse_decklist_line(line) == expected


@pytest.mark.parametrize("line", ["Counterspell", "four Counterspell", "-1 Ponder", "4"])
def test_malformed_lines_raise(line):
    with pytest.raises(InputError) as excinfo:
        parse_decklist_line(line)

    assert "expected [count] [cardname]" in str(excinfo.value)


def test_parse_decklist_skips_headers():
    assert parse_decklist(SAMPLE_DECKLIST.splitlines()) == [
        (4, "Counterspell"),
        (2, "Ponder"),
        (12, "Island"),
        (1, "Hydroblast"),
        (2, "Ponder"),
    ]


def test_report_counts_ownership(collection):
    for code in ("ice", "ice"):
        collection.add("Counterspell", code)
    for code in ("lrw", "lrw", "m12", "m12"):
        collection.add("Ponder", code)

    report = DecklistService(collection).check_lines(SAMPLE_DECKLIST.splitlines())
    entries = dict(report.sorted_entries())

    assert (entries["Counterspell"].owned, entries["Counterspell"].count) == (2, 4)
    assert entries["Counterspell"].mark == PARTIAL_MARK
    # Repeated names add up their counts.
    assert (entries["Ponder"].owned, entries["Ponder"].count) == (4, 4)
    assert entries["Ponder"].mark == COMPLETE_MARK
    # Basic lands are always owned.
    assert (entries["Island"].owned, entries["Island"].count) == (12, 12)
    assert entries["Hydroblast"].mark == MISSING_MARK
    assert report.wishlist() == [(2, "Counterspell"), (1, "Hydroblast")]


def test_render_lists_entries_then_wishlist(collection):
    report = DecklistService(collection).check_lines(["2 Ponder", "1 Brainstorm"])

    assert report.render().splitlines() == [
        f"0/1\t{MISSING_MARK}\tBrainstorm",
        f"0/2\t{MISSING_MARK}\tPonder",
        "Wishlist missing:",
        "1 Brainstorm",
        "2 Ponder",
    ]


def test_check_file(tmp_path, collection):
    path = tmp_path / "deck.txt"
    path.write_text(SAMPLE_DECKLIST, encoding="utf-8")

    report = asyncio.run(DecklistService(collection).check_file(path))

    assert len(report.entries) == 4


def test_check_missing_file_raises(tmp_path, collection):
    with pytest.raises(InputError):
        asyncio.run(DecklistService(collection).check_file(tmp_path / "missing.txt"))

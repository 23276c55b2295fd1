"""End-to-end tests for AppController with a fake network."""

import asyncio
import json

import pytest
from test_helpers import FakeResponse, FakeSession, make_card_payload

from controllers.app_controller import AppController
from navigators.mtggoldfish import staple_urls
from utils.card_models import Metadata
from utils.constants import MTGTOP8_TOPCARDS_URL, SCRYFALL_API
from utils.errors import CacheIOError
from utils.settings import Settings


def goldfish_table(*rows):
    body = "".join(
        f"<tr><td>{rank}</td><td>{name}</td><td>{percent}</td><td>{copies}</td></tr>"
        for rank, (name, percent, copies) in enumerate(rows, start=1)
    )
    return f"<html><body><table><tbody>{body}</tbody></table></body></html>"


TOP8_PAGE = """
<table>
<tr><td class="L14">Lorien Revealed</td><td class="L14">45 %</td><td class="L14">3.1</td></tr>
<tr><td class="L14">Ponder</td><td class="L14">95 %</td><td class="L14">4</td></tr>
</table>
"""

CARDS = {
    "Ponder": make_card_payload("Ponder", colors=["U"], type_line="Sorcery"),
    "Fire": make_card_payload(
        "Fire // Ice",
        card_faces=[{"colors": ["R"], "type_line": "Instant"}, {"colors": ["U"]}],
    ),
    "Lórien Revealed": make_card_payload("Lórien Revealed", colors=["U"], type_line="Sorcery"),
    "Island": make_card_payload("Island", colors=[], type_line="Basic Land — Island"),
}


def build_session():
    creatures, spells, lands = staple_urls("pauper")
    routes = {
        creatures: FakeResponse(text="<html><body>No staples yet</body></html>"),
        spells: FakeResponse(text=goldfish_table(("Ponder", "62.5%", "3.9"), ("Fire // Ice", "20%", "1.2"))),
        lands: FakeResponse(text=goldfish_table(("Island", "80%", "12"))),
    }

    def top8(data=None, **_kwargs):
        if data["maindeck"] == "MD" and data["current_page"] == "1":
            return FakeResponse(text=TOP8_PAGE)
        return FakeResponse(text="<html></html>")

    def named(params=None, **_kwargs):
        return FakeResponse(payload=CARDS[params["exact"]])

    routes[MTGTOP8_TOPCARDS_URL] = top8
    routes[f"{SCRYFALL_API}/cards/named"] = named
    for payload in CARDS.values():
        routes[payload["prints_search_uri"]] = FakeResponse(
            payload={"has_more": False, "data": [{"set": "tst", "set_name": "Test Set"}]}
        )
    return FakeSession(routes)


@pytest.fixture
def controller(tmp_path):
    session = build_session()
    app = AppController(
        Settings(resolver_concurrency=2, checklist_concurrency=2, topcards_concurrency=4),
        collection_file=tmp_path / "collection.json",
        card_cache_file=tmp_path / "cache" / "staples.json",
        printings_cache_file=tmp_path / "cache" / "printings.json",
        session_factory=lambda _timeout: session,
    )
    app.session = session
    return app


def test_build_checklist_end_to_end(controller, tmp_path):
    (tmp_path / "collection.json").write_text(json.dumps({"Ponder": ["lrw"]}), encoding="utf-8")

    checklist = asyncio.run(controller.build_checklist("pauper"))

    names = [entry.card.name for entry in checklist]
    assert names == ["Ponder", "Lórien Revealed", "Fire // Ice"]
    ponder = checklist.entry(0)
    assert ponder.metadata == Metadata(95.0, 4)
    assert ponder.owned_versions == ("lrw",)
    assert [printing.code for printing in ponder.printings] == ["tst"]
    assert controller.session.closed

    cached = json.loads((tmp_path / "cache" / "staples.json").read_text(encoding="utf-8"))
    assert set(cached) == {"Ponder", "Fire", "Lórien Revealed", "Island"}


def test_second_run_uses_caches(controller):
    asyncio.run(controller.build_checklist("pauper"))
    first_run = [url for url in controller.session.urls() if url.startswith(SCRYFALL_API)]
    controller.session.calls.clear()

    asyncio.run(controller.build_checklist("pauper"))

    assert len(first_run) == 4 + 3
    assert not any(url.startswith(SCRYFALL_API) for url in controller.session.urls())


def test_check_decklist(controller, tmp_path):
    (tmp_path / "collection.json").write_text(json.dumps({"Ponder": ["lrw"]}), encoding="utf-8")
    deck = tmp_path / "deck.txt"
    deck.write_text("4 Ponder\n10 Island\n", encoding="utf-8")

    report = asyncio.run(controller.check_decklist(deck))

    assert report.wishlist() == [(3, "Ponder")]


def test_save_wishlist(controller, tmp_path):
    (tmp_path / "collection.json").write_text(json.dumps({"Ponder": ["lrw"]}), encoding="utf-8")
    checklist = asyncio.run(controller.build_checklist("pauper"))
    target = tmp_path / "wishlist.txt"

    written = asyncio.run(controller.save_wishlist(checklist, target))

    assert written == 3
    assert target.read_text(encoding="utf-8").splitlines() == [
        "3 Ponder",
        "4 Lórien Revealed",
        "2 Fire // Ice",
    ]


def test_save_wishlist_to_unwritable_path(controller, tmp_path):
    checklist = asyncio.run(controller.build_checklist("pauper"))

    with pytest.raises(CacheIOError):
        asyncio.run(controller.save_wishlist(checklist, tmp_path / "missing" / "wishlist.txt"))

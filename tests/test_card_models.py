"""Tests for card value types."""

from test_helpers import make_card, make_card_payload

from utils.card_models import CardIdentity, Metadata, Printing


def test_from_scryfall_single_faced():
    card = CardIdentity.from_scryfall(
        make_card_payload("Counterspell", card_id="abc", colors=["U"], type_line="Instant")
    )

    assert card.id == "abc"
    assert card.colors == ("U",)
    assert card.face_colors is None
    assert card.color_signature == ("U",)
    assert not card.is_land


def test_from_scryfall_double_faced_reads_front_face():
    payload = {
        "id": "dfc",
        "name": "Delver of Secrets // Insectile Aberration",
        "card_faces": [
            {"colors": ["U"], "type_line": "Creature — Human Wizard"},
            {"colors": ["U"], "type_line": "Creature — Human Insect"},
        ],
    }

    card = CardIdentity.from_scryfall(payload)

    assert card.colors is None
    assert card.face_colors == ("U",)
    assert card.type_line == "Creature — Human Wizard"
    assert card.canonical_name == "Delver of Secrets"


def test_basic_land_is_an_exact_name_match():
    assert make_card("Forest", type_line="Basic Land — Forest").is_basic_land
    assert not make_card("Snow-Covered Forest", type_line="Basic Snow Land — Forest").is_basic_land
    assert make_card("Bojuka Bog", type_line="Land").is_land
    assert not make_card("Bojuka Bog", type_line="Land").is_basic_land


def test_printing_dict_round_trip():
    printing = Printing("lrw", "Lorwyn")

    assert Printing.from_dict(printing.to_dict()) == printing


def test_metadata_defaults_fill_absent_values():
    assert Metadata.from_scrape(None, None) == Metadata(100.0, 4)
    assert Metadata.from_scrape(12.5, None) == Metadata(12.5, 4)
    assert Metadata.from_scrape(None, 2) == Metadata(100.0, 2)

"""Value types shared by the scrapers, the caches and the checklist."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from utils.card_name import normalize_card_name
from utils.constants import (
    BASIC_LAND_NAMES,
    DEFAULT_NUM_COPIES,
    DEFAULT_PERCENT_IN_DECKS,
    WUBRG,
)

__all__ = ["CardIdentity", "Metadata", "Printing", "color_sort_key"]


def _color_tuple(value: Any) -> tuple[str, ...] | None:
    if value is None:
        return None
    return tuple(value)


@dataclass(frozen=True)
class CardIdentity:
    """A card as described by Scryfall, reduced to what the checklist needs."""

    id: str
    name: str
    colors: tuple[str, ...] | None = None
    face_colors: tuple[str, ...] | None = None
    type_line: str | None = None
    prints_search_uri: str | None = None

    @classmethod
    def from_scryfall(cls, payload: dict[str, Any]) -> CardIdentity:
        """
        Build an identity from a full Scryfall card record.

        Double-faced cards carry no top-level ``colors``; the first face's
        colours are kept separately for ranking.
        """
        faces = payload.get("card_faces") or []
        front = faces[0] if faces else {}
        type_line = payload.get("type_line")
        if type_line is None and front:
            type_line = front.get("type_line")
        return cls(
            id=payload["id"],
            name=payload["name"],
            colors=_color_tuple(payload.get("colors")),
            face_colors=_color_tuple(front.get("colors")),
            type_line=type_line,
            prints_search_uri=payload.get("prints_search_uri"),
        )

    @property
    def canonical_name(self) -> str:
        return normalize_card_name(self.name)

    @property
    def is_land(self) -> bool:
        return self.type_line is not None and "Land" in self.type_line

    @property
    def is_basic_land(self) -> bool:
        return self.name in BASIC_LAND_NAMES

    @property
    def color_signature(self) -> tuple[str, ...] | None:
        if self.colors is not None:
            return self.colors
        return self.face_colors


def color_sort_key(colors: tuple[str, ...] | None) -> tuple[int, ...]:
    """Order colour lists with absent first, then lexicographically in WUBRG order."""
    if colors is None:
        return (0,)
    return (1, *(WUBRG.index(color) if color in WUBRG else len(WUBRG) for color in colors))


@dataclass(frozen=True)
class Printing:
    code: str
    name: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Printing:
        return cls(code=data["code"], name=data["name"])

    def to_dict(self) -> dict[str, str]:
        return {"code": self.code, "name": self.name}


@dataclass(frozen=True)
class Metadata:
    """Staple popularity of a card in a format."""

    percent_in_decks: float = DEFAULT_PERCENT_IN_DECKS
    num_copies: int = DEFAULT_NUM_COPIES

    @classmethod
    def from_scrape(cls, percent_in_decks: float | None, num_copies: int | None) -> Metadata:
        return cls(
            percent_in_decks=(
                DEFAULT_PERCENT_IN_DECKS if percent_in_decks is None else percent_in_decks
            ),
            num_copies=DEFAULT_NUM_COPIES if num_copies is None else num_copies,
        )

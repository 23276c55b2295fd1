from __future__ import annotations

from collections.abc import Iterable

from utils.checklist_stats import ChecklistStats, Progress
from utils.constants import COLOR_NAMES, WUBRG

__all__ = ["format_checklist", "format_entry", "format_progress", "format_stats", "format_wishlist"]


def format_progress(label: str, progress: Progress) -> str:
    mark = "✅" if progress.complete else "  "
    return f"{mark} {label:<18} {progress.owned:>4}/{progress.total:<4}"


def format_entry(rank: int, entry) -> str:
    """Compose one checklist row: rank, ownership, play rate and name."""
    metadata = entry.metadata
    owned = min(entry.owned_count, metadata.num_copies)
    colors = "".join(entry.card.color_signature or ()) or "C"
    return (
        f"{rank:>4}. {owned}/{metadata.num_copies} "
        f"{metadata.percent_in_decks:>6.2f}% {colors:<5} {entry.card.name}"
    )


def format_checklist(entries: Iterable, limit: int | None = None) -> str:
    lines = []
    for rank, entry in enumerate(entries, start=1):
        if limit is not None and rank > limit:
            break
        lines.append(format_entry(rank, entry))
    return "\n".join(lines)


def format_stats(stats: ChecklistStats) -> str:
    lines = [
        format_progress("Top 20", stats.top_20),
        format_progress("Top 50", stats.top_50),
        format_progress("Top 150", stats.top_150),
    ]
    lines.extend(
        format_progress(f"Top 20 {COLOR_NAMES[color]}", stats.top_20_by_color[color])
        for color in WUBRG
    )
    lines.append(format_progress("Top 10 Colorless", stats.top_10_colorless))
    lines.append(format_progress("Top 20 Multicolor", stats.top_20_multicolor))
    lines.append(format_progress("Top 10 Lands", stats.top_10_lands))
    return "\n".join(lines)


def format_wishlist(wishlist: Iterable[tuple[int, str]]) -> str:
    """One ``<missing> <name>`` line per card, newline terminated."""
    return "".join(f"{missing} {name}\n" for missing, name in wishlist)

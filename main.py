#!/usr/bin/env python3
"""Command line entry point for the staples checklist."""

from __future__ import annotations

import argparse
import asyncio
import sys
import traceback
from pathlib import Path

from loguru import logger

from controllers.app_controller import AppController
from utils.checklist_format import format_checklist, format_stats
from utils.checklist_stats import calculate_stats
from utils.constants import LOGS_DIR
from utils.errors import ChecklistError
from utils.formats import select_format
from utils.logging_config import configure_logging
from utils.settings import load_settings

DEFAULT_TOP = 50


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="staples-checklist",
        description="Rank the staples of a format against your collection, or check a decklist.",
    )
    parser.add_argument(
        "mode",
        nargs="?",
        help="format to rank (pauper, legacy, pioneer) or the path of a decklist file",
    )
    parser.add_argument(
        "--top",
        type=int,
        default=DEFAULT_TOP,
        help=f"checklist rows to print (default {DEFAULT_TOP}, 0 prints everything)",
    )
    parser.add_argument(
        "--ignore-collection",
        action="store_true",
        help="print the checklist ranked as if nothing were owned",
    )
    parser.add_argument(
        "--wishlist",
        type=Path,
        metavar="PATH",
        help="write the missing copies, most played first, to PATH",
    )
    parser.add_argument("--log-level", default="INFO", help="stderr log level")
    return parser


async def run(args: argparse.Namespace) -> None:
    settings = await asyncio.to_thread(load_settings)
    controller = AppController(settings)
    mtg_format = select_format(args.mode, settings.default_format)
    if mtg_format is None:
        report = await controller.check_decklist(Path(args.mode))
        print(report.render())
        return

    checklist = await controller.build_checklist(mtg_format)
    ranked = checklist.ignoring_collection() if args.ignore_collection else checklist
    print(format_checklist(ranked, limit=args.top or None))
    print()
    print(format_stats(calculate_stats(checklist)))
    if args.wishlist is not None:
        await controller.save_wishlist(checklist, args.wishlist)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(LOGS_DIR, args.log_level.upper())

    def global_exception_handler(exc_type, exc_value, exc_traceback):
        logger.error("=== UNCAUGHT EXCEPTION ===")
        logger.error(f"Exception type: {exc_type.__name__}")
        logger.error(f"Exception value: {exc_value}")
        logger.error("Traceback:")
        for line in traceback.format_tb(exc_traceback):
            logger.error(line.rstrip())
        logger.error("=== END UNCAUGHT EXCEPTION ===")
        sys.__excepthook__(exc_type, exc_value, exc_traceback)

    sys.excepthook = global_exception_handler

    try:
        asyncio.run(run(args))
    except ChecklistError as exc:
        logger.error(f"{type(exc).__name__}: {exc}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

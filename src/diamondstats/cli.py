"""Command-line entry point: ``diamondstats import [--fresh]``."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from diamondstats.config import load_settings
from diamondstats.errors import BaseballImportError
from diamondstats.ingest import run_import
from diamondstats.persistence import StatsStore


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Manage imported baseball player statistics")
    subparsers = parser.add_subparsers(dest="command", required=True)
    import_parser = subparsers.add_parser(
        "import",
        help="Import baseball player data from the remote stats API",
    )
    import_parser.add_argument(
        "--fresh",
        action="store_true",
        help="Clear existing data before importing",
    )
    return parser.parse_args(argv)


def _print_progress(done: int, total: int) -> None:
    end = "\n" if done == total else ""
    print(f"\r{done}/{total} players processed", end=end, flush=True)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    settings = load_settings()
    store = StatsStore(settings.db_path)

    if args.fresh:
        print("Existing data will be cleared before importing.")
    try:
        result = run_import(store, settings, fresh=args.fresh, progress=_print_progress)
    except BaseballImportError as exc:
        print(str(exc), file=sys.stderr)
        return 1

    print(f"Successfully imported {result.imported_count} players!")
    print(f"Store now holds {result.player_count} players across {result.position_count} positions.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

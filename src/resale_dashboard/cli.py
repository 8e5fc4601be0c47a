"""Command-line interface for the dashboard statistics.

Provides subcommands: `summary` and `event`. Each command is implemented as
a `cmd_*` function that accepts an argparse namespace and prints JSON.
"""
from __future__ import annotations

import argparse
import logging
import sys
from datetime import date

from dotenv import load_dotenv

from resale_dashboard.config import get_settings
from resale_dashboard.logging_config import configure_logging
from resale_dashboard.fetch.load_snapshot import fetch_snapshot
from resale_dashboard.aggregate.stats import compute_summary
from resale_dashboard.aggregate.event_totals import compute_event_totals

log = logging.getLogger(__name__)


# --------------------------------------------------
# SUMMARY
# --------------------------------------------------
def cmd_summary(args: argparse.Namespace) -> None:
    """Fetch a fresh snapshot and print the dashboard Summary.

    Args:
        args: argparse namespace with `as_of` (date or None).
    """
    snapshot = fetch_snapshot(get_settings())
    summary = compute_summary(
        snapshot.lots,
        snapshot.items,
        snapshot.sales,
        snapshot.events,
        now=args.as_of,
    )
    log.info(
        "Summary computed: revenue=%.2f profit=%.2f roi=%.2f%%",
        summary.total_revenue,
        summary.total_profit,
        summary.roi_percentage,
    )
    print(summary.model_dump_json(indent=2))


# --------------------------------------------------
# EVENT
# --------------------------------------------------
def cmd_event(args: argparse.Namespace) -> None:
    """Print profit and loss for a single event.

    Args:
        args: argparse namespace with `event_id`.
    """
    snapshot = fetch_snapshot(get_settings())
    totals = compute_event_totals(args.event_id, snapshot.lots, snapshot.sales)
    print(totals.model_dump_json(indent=2))


# --------------------------------------------------
# CLI
# --------------------------------------------------
def build_parser() -> argparse.ArgumentParser:
    """Build and return the top-level argument parser for the CLI.

    Returns:
        Configured argparse.ArgumentParser instance.
    """
    p = argparse.ArgumentParser(prog="resale_dashboard")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_summary = sub.add_parser("summary")
    p_summary.add_argument(
        "--as-of",
        type=date.fromisoformat,
        default=None,
        help="Last month of the 12-month window, as YYYY-MM-DD (default: today).",
    )

    p_event = sub.add_parser("event")
    p_event.add_argument("event_id")

    return p


def main(argv: list[str] | None = None) -> None:
    """CLI entry point: parse args, configure logging and dispatch commands."""
    load_dotenv()
    args = build_parser().parse_args(argv)

    settings = get_settings()
    # stdout carries the JSON output
    configure_logging(settings.log_path, stream=sys.stderr)

    if args.cmd == "summary":
        cmd_summary(args)
    elif args.cmd == "event":
        cmd_event(args)
    else:
        raise SystemExit(2)


if __name__ == "__main__":
    main()

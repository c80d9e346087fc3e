"""Command-line interface for summarizing a sales CSV.

Provides the `summarize` subcommand, implemented as a `cmd_*` function that
accepts an argparse namespace, so a CSV can be checked without starting the
dashboard.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from salespulse.aggregate.build import aggregate
from salespulse.config import get_settings
from salespulse.ingest.parse_csv import IngestionError, parse_csv
from salespulse.logging_config import configure_logging
from salespulse.summary import format_money, format_pct, summarize

log = logging.getLogger(__name__)


# --------------------------------------------------
# SUMMARIZE
# --------------------------------------------------
def cmd_summarize(args: argparse.Namespace) -> int:
    """Parse and aggregate one CSV, then report the results.

    Args:
        args: argparse namespace with `path`, `top_n` and `json`.

    Returns:
        Process exit status: 0 on success, 1 when the file cannot be ingested.
    """
    s = get_settings()

    try:
        records = parse_csv(args.path, encoding=s.csv_encoding, delimiter=s.csv_delimiter)
    except IngestionError as exc:
        log.error("%s: %s", args.path, exc)
        return 1

    result = aggregate(records, ma_window=s.ma_window)

    if args.json:
        sys.stdout.write(result.model_dump_json(indent=2) + "\n")
        return 0

    summary = summarize(result)
    log.info(
        "Total sales=%s products=%d records=%d",
        format_money(summary.total_sales),
        summary.product_count,
        summary.record_count,
    )
    for t in result.product_totals[: args.top_n]:
        log.info("  %-30s %14s %8s", t.product, format_money(t.total_sales), format_pct(t.percent))
    for b in result.monthly:
        change = format_pct(b.pct_change) if b.pct_change is not None else "-"
        log.info("  %s %14s %6d %8s", b.key, format_money(b.sales), b.transactions, change)
    log.info(
        "Naive=%s MA(%d)=%s last change=%s",
        format_money(summary.naive),
        s.ma_window,
        format_money(summary.ma),
        format_pct(summary.last_pct_change),
    )
    return 0


# --------------------------------------------------
# CLI
# --------------------------------------------------
def build_parser() -> argparse.ArgumentParser:
    """Build and return the top-level argument parser for the CLI.

    Returns:
        Configured argparse.ArgumentParser instance.
    """
    p = argparse.ArgumentParser(prog="salespulse")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_sum = sub.add_parser("summarize", help="aggregate a sales CSV and print the results")
    p_sum.add_argument("path", type=Path)
    p_sum.add_argument("--top-n", type=int, default=10)
    p_sum.add_argument("--json", action="store_true", help="print the full result as JSON")

    return p


def main(argv: list[str] | None = None) -> None:
    """CLI entry point: parse args, configure logging and dispatch commands."""
    args = build_parser().parse_args(argv)

    try:
        s = get_settings()
    except RuntimeError as exc:
        raise SystemExit(f"salespulse: {exc}") from exc
    # keep stdout clean for --json output
    stream = sys.stderr if getattr(args, "json", False) else sys.stdout
    configure_logging(s.log_path, s.log_level, stream)

    if args.cmd == "summarize":
        raise SystemExit(cmd_summarize(args))
    raise SystemExit(2)


if __name__ == "__main__":
    main()

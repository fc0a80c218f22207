#!/usr/bin/env python3
"""
Storm Analytics CLI — casualty and property-damage report over NOAA storm events.

USAGE:
  python -m storm_analytics.cli report                              # Excel + JSON report
  python -m storm_analytics.cli report --input StormData.csv.bz2 --top 10
  python -m storm_analytics.cli report --rules my_rules.csv --output ./out

  python -m storm_analytics.cli summary                             # Full per-category table
  python -m storm_analytics.cli top --metric damage                 # Top 5 by property damage
  python -m storm_analytics.cli unmatched --limit 40                # Labels no rule matched
  python -m storm_analytics.cli categories                          # Canonical event types
"""
from __future__ import annotations

import argparse
import json
import sys
from datetime import datetime
from pathlib import Path

from storm_analytics.config import (
    CANONICAL_CATEGORIES, INPUT_FILE, JSON_FILENAME, REPORT_FILENAME,
    REPORTS_FOLDER, RULES_FILE, TOP_N, UNMATCHED_SAMPLE_SIZE,
)
from storm_analytics.data.rules import load_rules
from storm_analytics.data.schemas import Metric
from storm_analytics.data.store import StormDataStore
from storm_analytics.errors import StormAnalyticsError


def _banner(title: str) -> None:
    print("\n" + "=" * 70)
    print(f"  STORM ANALYTICS — {title}")
    print("=" * 70)


def _load_store(args, sample_size: int = UNMATCHED_SAMPLE_SIZE) -> StormDataStore:
    """Load ruleset then dataset from CLI args."""
    rules = load_rules(Path(args.rules))
    return StormDataStore(rules, sample_size=sample_size).load(Path(args.input))


def _write_json(path: Path, data) -> None:
    """Write sanitised JSON to path, creating parent dirs."""
    from storm_analytics.analytics.common import sanitize_for_json
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(sanitize_for_json(data), f, indent=2, default=str)


def _fmt_value(metric: Metric, value: float) -> str:
    if metric == Metric.DAMAGE:
        return f"${value:>18,.0f}"
    return f"{value:>19,.0f}"


def cmd_report(args):
    """Generate the Excel workbook and JSON export."""
    from storm_analytics.reports.impact_report import generate_excel, generate_json

    _banner("STORM IMPACT REPORT")
    print(f"  Started: {datetime.now():%Y-%m-%d %H:%M:%S}\n")

    store = _load_store(args)

    if args.output:
        output_folder = Path(args.output)
    else:
        output_folder = REPORTS_FOLDER / datetime.now().strftime("%Y%m%d_%H%M%S")
    output_folder.mkdir(parents=True, exist_ok=True)

    print("\n  Generating reports...\n")
    data = generate_json(store, args.top)
    generate_excel(store, output_folder / REPORT_FILENAME, args.top, data=data)
    print(f"   {REPORT_FILENAME}")
    _write_json(output_folder / JSON_FILENAME, data)
    print(f"   {JSON_FILENAME}")

    print("\n  CONCLUSION")
    for finding in data["conclusion"]:
        print(f"   {finding['title']}")
        print(f"      {finding['detail']}")

    print(f"\n  Reports saved to: {output_folder}")
    print("=" * 70 + "\n")


def cmd_summary(args):
    """Print the full per-category summary table."""
    from storm_analytics.analytics.impact import summarize_by_category

    _banner("CATEGORY SUMMARY")
    store = _load_store(args)
    summary = summarize_by_category(store.cleaned_df)

    print(f"\n{'EVENT TYPE':<28}{'INJURIES':>12}{'FATALITIES':>12}{'PROPERTY DAMAGE':>22}")
    for row in summary.itertuples(index=False):
        print(f"{row.category[:26]:<28}{row.total_injuries:>12,}{row.total_fatalities:>12,}"
              f"${row.total_damage:>21,.0f}")
    print(f"\n  {len(summary)} event types\n")


def cmd_top(args):
    """Print the top-N ranking for one metric."""
    from storm_analytics.analytics.impact import summarize_by_category, top_n

    metric = Metric(args.metric)
    _banner(f"TOP {args.top} BY {metric.label.upper()}")
    store = _load_store(args)
    ranking = top_n(summarize_by_category(store.cleaned_df), metric, args.top)

    print()
    for entry in ranking:
        print(f"{entry.rank:<4}{entry.category[:40]:<42}{_fmt_value(metric, entry.value)}")
    print()


def cmd_unmatched(args):
    """List the most frequent event-type labels no rule matched."""
    _banner("UNMATCHED EVENT TYPES")
    store = _load_store(args, sample_size=args.limit)
    ex = store.exclusions

    labels = ex.top_unmatched_labels[:args.limit]
    print(f"\n  {ex.unmatched_event_types:,} rows with unmatched event types\n")
    for i, (label, count) in enumerate(labels, 1):
        print(f"{i:<4}{label[:50]:<52}{count:>10,}")
    if ex.top_unmatched_units:
        print(f"\n  {ex.unmatched_damage_units:,} rows with unmatched damage units\n")
        for unit, count in ex.top_unmatched_units[:args.limit]:
            print(f"    {unit:<10}{count:>10,}")
    print()


def cmd_categories(args):
    """List canonical event types."""
    print(f"\nCANONICAL EVENT TYPES ({len(CANONICAL_CATEGORIES)}):\n")
    for i, name in enumerate(CANONICAL_CATEGORIES, 1):
        print(f"{i:<4}{name}")
    print()


def _add_data_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--input", default=str(INPUT_FILE), help="Storm dataset CSV (plain or compressed)")
    p.add_argument("--rules", default=str(RULES_FILE), help="Event-type ruleset CSV")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="storm-analytics",
        description="Storm Analytics — casualties and property damage by event type",
    )
    sub = parser.add_subparsers(dest="command")

    p_report = sub.add_parser("report", help="Generate Excel + JSON report")
    _add_data_args(p_report)
    p_report.add_argument("--top", type=int, default=TOP_N, help="Rows per ranking")
    p_report.add_argument("--output", default=None, help="Output directory")

    p_summary = sub.add_parser("summary", help="Print per-category totals")
    _add_data_args(p_summary)

    p_top = sub.add_parser("top", help="Print a top-N ranking")
    _add_data_args(p_top)
    p_top.add_argument("--metric", choices=[m.value for m in Metric], default=Metric.DAMAGE.value)
    p_top.add_argument("--top", type=int, default=TOP_N)

    p_unmatched = sub.add_parser("unmatched", help="List event types no rule matched")
    _add_data_args(p_unmatched)
    p_unmatched.add_argument("--limit", type=int, default=UNMATCHED_SAMPLE_SIZE)

    sub.add_parser("categories", help="List canonical event types")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    commands = {
        "report": cmd_report,
        "summary": cmd_summary,
        "top": cmd_top,
        "unmatched": cmd_unmatched,
        "categories": cmd_categories,
    }
    if args.command is None:
        parser.print_help()
        return 1
    if getattr(args, "top", 1) < 1:
        parser.error("--top must be at least 1")

    try:
        commands[args.command](args)
    except (StormAnalyticsError, FileNotFoundError) as exc:
        print(f"\n  ERROR: {exc}\n", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

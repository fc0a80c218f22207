"""
Storm Impact Report — category summary, top-N rankings with bar charts, narrative conclusion.
"""
from __future__ import annotations

from pathlib import Path

import pandas as pd

from storm_analytics.config import TOP_N
from storm_analytics.data.schemas import Metric
from storm_analytics.data.store import StormDataStore
from storm_analytics.analytics.common import sanitize_for_json
from storm_analytics.analytics.impact import (
    all_rankings,
    impact_totals,
    summarize_by_category,
)
from storm_analytics.analytics.narrative import narrative_conclusion
from storm_analytics.excel.styles import CHART_COLORS
from storm_analytics.excel.writer import ExcelWriter


SUMMARY_COLS = [
    ("category", "text", "Event Type"),
    ("total_injuries", "number", "Injuries"),
    ("total_fatalities", "number", "Fatalities"),
    ("total_damage", "currency", "Property Damage"),
]

EXCLUSION_COLS = [
    ("label", "text", "Unmatched Event Type"),
    ("count", "number", "Rows"),
]


def _ranking_cols(metric: Metric) -> list[tuple[str, str, str]]:
    return [
        ("category", "text", "Event Type"),
        ("value", "currency" if metric == Metric.DAMAGE else "number", metric.label),
        ("rank", "number", "Rank"),
    ]


def generate_json(store: StormDataStore, top_n: int = TOP_N) -> dict:
    summary = summarize_by_category(store.cleaned_df)
    rankings = all_rankings(summary, top_n)
    totals = impact_totals(store.cleaned_df)

    return sanitize_for_json({
        "source": store.source_label(),
        "top_n": top_n,
        "totals": totals,
        "exclusions": store.exclusions.as_dict(),
        "summary": summary.to_dict("records"),
        "rankings": {
            metric.value: [
                {"rank": e.rank, "category": e.category, "value": e.value} for e in entries
            ]
            for metric, entries in rankings.items()
        },
        "conclusion": narrative_conclusion(rankings, totals, store.exclusions),
    })


def generate_excel(
    store: StormDataStore,
    output_path: str | Path,
    top_n: int = TOP_N,
    data: dict | None = None,
) -> Path:
    """Write the workbook. Pass `data` from generate_json() to avoid rebuilding it."""
    if data is None:
        data = generate_json(store, top_n)
    top_n = data["top_n"]
    t = data["totals"]
    ex = data["exclusions"]
    ew = ExcelWriter()

    # Overview
    ws = ew.add_sheet("Overview")
    ew.write_title(ws, "STORM IMPACT REPORT",
                   f"Casualties and property damage by event type  |  {data['source']}  |  "
                   f"Generated {pd.Timestamp.now():%B %d, %Y}")

    row = ew.write_section(ws, 4, "IMPACT OVERVIEW")
    row = ew.write_kpi_row(ws, row, [
        (t["total_fatalities"], "FATALITIES", "number"),
        (t["total_injuries"], "INJURIES", "number"),
        (t["total_damage"], "PROPERTY DAMAGE", "currency"),
        (t["categories"], "EVENT TYPES", "number"),
    ])

    row = ew.write_section(ws, row, "CONCLUSION")
    row = ew.write_insights(ws, row, data["conclusion"])

    row = ew.write_section(ws, row, "DATA COVERAGE")
    row = ew.write_kpi_row(ws, row, [
        (ex["total_rows"], "ROWS READ", "number"),
        (ex["kept_rows"], "ROWS USED", "number"),
        (ex["unmatched_event_types"], "UNMATCHED EVENT TYPE", "number"),
        (ex["unmatched_damage_units"], "UNMATCHED DAMAGE UNIT", "number"),
    ])

    # Full summary, insertion order
    ws_s = ew.add_sheet("Category Summary")
    ew.write_table(ws_s, 1, SUMMARY_COLS, data["summary"], show_total=True)

    # One sheet per ranking: table + bar chart
    for metric in (Metric.FATALITIES, Metric.INJURIES, Metric.DAMAGE):
        entries = data["rankings"][metric.value]
        ws_r = ew.add_sheet(f"Top {top_n} {metric.label}"[:31])
        ew.write_table(ws_r, 1, _ranking_cols(metric), entries,
                       highlight_fn=lambda i, r: "sky" if i == 0 else None)
        ew.write_bar_chart(
            ws_r, header_row=1, n_rows=len(entries), category_col=1, value_col=2,
            title=f"Top {top_n} Event Types by {metric.label}",
            y_title=metric.label, anchor="E2", color=CHART_COLORS[metric.value],
        )

    # Ruleset maintenance aid
    if ex["top_unmatched_labels"]:
        ws_u = ew.add_sheet("Unmatched Event Types")
        ew.write_table(ws_u, 1, EXCLUSION_COLS, ex["top_unmatched_labels"])

    return ew.save(output_path)

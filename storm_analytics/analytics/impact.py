"""
Impact analytics — per-category casualty and damage totals, top-N rankings.
"""
from __future__ import annotations

import pandas as pd

from storm_analytics.config import TOP_N
from storm_analytics.data.schemas import CategorySummary, Metric, RankingEntry

SUMMARY_COLUMNS = ["category", "total_injuries", "total_fatalities", "total_damage"]


def summarize_by_category(cleaned_df: pd.DataFrame) -> pd.DataFrame:
    """One row per category present, in first-encountered order."""
    if cleaned_df.empty:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)

    summary = cleaned_df.groupby("category", sort=False).agg(
        total_injuries=("injuries", "sum"),
        total_fatalities=("fatalities", "sum"),
        total_damage=("damage_value", "sum"),
    ).reset_index()

    summary["total_injuries"] = summary["total_injuries"].astype("int64")
    summary["total_fatalities"] = summary["total_fatalities"].astype("int64")
    summary["total_damage"] = summary["total_damage"].astype(float)
    return summary[SUMMARY_COLUMNS]


def summary_records(summary_df: pd.DataFrame) -> list[CategorySummary]:
    return [
        CategorySummary(
            category=row.category,
            total_injuries=int(row.total_injuries),
            total_fatalities=int(row.total_fatalities),
            total_damage=float(row.total_damage),
        )
        for row in summary_df.itertuples(index=False)
    ]


def ranking_frame(summary_df: pd.DataFrame, metric: Metric | str, n: int = TOP_N) -> pd.DataFrame:
    """Top-n categories by metric as a (rank, category, value) frame.

    Sorted descending by value; equal values fall back to category label
    ascending so the order never depends on input order.
    """
    metric = Metric(metric)
    if n < 1:
        raise ValueError(f"n must be positive, got {n}")
    if summary_df.empty:
        return pd.DataFrame(columns=["rank", "category", "value"])

    ranked = summary_df.sort_values(
        [metric.column, "category"], ascending=[False, True], kind="mergesort",
    ).head(n)
    out = pd.DataFrame({
        "rank": range(1, len(ranked) + 1),
        "category": ranked["category"].to_numpy(),
        "value": ranked[metric.column].to_numpy(),
    })
    return out


def top_n(summary_df: pd.DataFrame, metric: Metric | str, n: int = TOP_N) -> list[RankingEntry]:
    """Top-n RankingEntry list for one metric."""
    metric = Metric(metric)
    frame = ranking_frame(summary_df, metric, n)
    cast = float if metric == Metric.DAMAGE else int
    return [
        RankingEntry(rank=int(r.rank), category=r.category, value=cast(r.value))
        for r in frame.itertuples(index=False)
    ]


def all_rankings(summary_df: pd.DataFrame, n: int = TOP_N) -> dict[Metric, list[RankingEntry]]:
    return {metric: top_n(summary_df, metric, n) for metric in Metric}


def impact_totals(cleaned_df: pd.DataFrame) -> dict:
    """Dataset-wide totals for KPI cards."""
    if cleaned_df.empty:
        return {"records": 0, "categories": 0, "total_injuries": 0,
                "total_fatalities": 0, "total_damage": 0.0}
    return {
        "records": int(len(cleaned_df)),
        "categories": int(cleaned_df["category"].nunique()),
        "total_injuries": int(cleaned_df["injuries"].sum()),
        "total_fatalities": int(cleaned_df["fatalities"].sum()),
        "total_damage": float(cleaned_df["damage_value"].sum()),
    }

"""
Event-type recoding, damage-unit resolution, and record cleaning.
"""
from __future__ import annotations

import pandas as pd

from storm_analytics.config import DAMAGE_UNIT_MULTIPLIERS, UNMATCHED_SAMPLE_SIZE
from storm_analytics.data.rules import RuleSet, clean_event_text
from storm_analytics.data.schemas import CleanedRecord, ExclusionReport, RawRecord

__all__ = [
    "clean_event_text",
    "normalize_event_types",
    "resolve_damage",
    "resolve_damage_units",
    "clean_record",
    "clean_records",
]


# ---------------------------------------------------------------------------
# Event-type recoding
# ---------------------------------------------------------------------------

def normalize_event_types(df: pd.DataFrame, rules: RuleSet) -> pd.DataFrame:
    """Add `event_clean` and `category` columns (category is None when unmatched).

    Rules run once per distinct raw label rather than once per row; the
    dataset repeats a few hundred labels across ~900k rows.
    """
    df = df.copy()
    labels = df["event_type"].unique()
    cleaned = {label: clean_event_text(label) for label in labels}
    categories = {label: rules.match_clean(text) for label, text in cleaned.items()}

    df["event_clean"] = df["event_type"].map(cleaned)
    df["category"] = df["event_type"].map(categories)
    return df


# ---------------------------------------------------------------------------
# Damage units
# ---------------------------------------------------------------------------

def resolve_damage(magnitude: float, unit_code: str) -> float | None:
    """Magnitude × unit multiplier, or None when the unit code is not K/M/B."""
    if magnitude is None or pd.isna(magnitude):
        return None
    multiplier = DAMAGE_UNIT_MULTIPLIERS.get(str(unit_code).strip())
    if multiplier is None:
        return None
    return float(magnitude) * multiplier


def resolve_damage_units(df: pd.DataFrame) -> pd.DataFrame:
    """Add `damage_value` (NaN when the unit code is unmatched)."""
    df = df.copy()
    multiplier = df["damage_unit"].astype(str).str.strip().map(DAMAGE_UNIT_MULTIPLIERS)
    df["damage_value"] = df["damage_magnitude"].astype(float) * multiplier
    return df


# ---------------------------------------------------------------------------
# Cleaning
# ---------------------------------------------------------------------------

def clean_record(record: RawRecord, rules: RuleSet) -> CleanedRecord | None:
    """Single-record form of clean_records()."""
    category = rules.match(record.event_type)
    if category is None:
        return None
    damage = resolve_damage(record.damage_magnitude, record.damage_unit)
    if damage is None:
        return None
    return CleanedRecord(
        category=category,
        fatalities=record.fatalities,
        injuries=record.injuries,
        damage_value=damage,
    )


def _top_counts(series: pd.Series, n: int) -> list[tuple[str, int]]:
    counts = series.value_counts()
    counts = counts.sort_index(kind="stable").sort_values(ascending=False, kind="stable")
    return [(str(k), int(v)) for k, v in counts.head(n).items()]


def clean_records(
    raw_df: pd.DataFrame,
    rules: RuleSet,
    malformed_rows: int = 0,
    sample_size: int = UNMATCHED_SAMPLE_SIZE,
) -> tuple[pd.DataFrame, ExclusionReport]:
    """Recode event types and resolve damage; keep rows where both succeed.

    Returns the cleaned frame (category, fatalities, injuries, damage_value)
    and an ExclusionReport. A row unmatched on event type is counted there
    only, never again as an unmatched unit.
    """
    df = resolve_damage_units(normalize_event_types(raw_df, rules))

    has_category = df["category"].notna()
    has_damage = df["damage_value"].notna()
    keep = has_category & has_damage

    report = ExclusionReport(
        total_rows=len(df) + malformed_rows,
        malformed_rows=malformed_rows,
        unmatched_event_types=int((~has_category).sum()),
        unmatched_damage_units=int((has_category & ~has_damage).sum()),
        kept_rows=int(keep.sum()),
        top_unmatched_labels=_top_counts(df.loc[~has_category, "event_clean"], sample_size),
        top_unmatched_units=_top_counts(
            df.loc[has_category & ~has_damage, "damage_unit"].replace("", "(blank)"), sample_size,
        ),
    )

    cleaned = df.loc[keep, ["category", "fatalities", "injuries", "damage_value"]].reset_index(drop=True)
    cleaned["damage_value"] = cleaned["damage_value"].astype(float)
    return cleaned, report

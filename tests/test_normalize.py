import math

import pandas as pd
import pytest

from storm_analytics.data.loader import iter_raw_records
from storm_analytics.data.normalize import (
    clean_record,
    clean_records,
    normalize_event_types,
    resolve_damage,
    resolve_damage_units,
)
from storm_analytics.data.schemas import CleanedRecord, RawRecord


def _raw_frame(rows):
    return pd.DataFrame(rows, columns=["event_type", "damage_magnitude", "damage_unit", "fatalities", "injuries"])


MIXED_ROWS = [
    ("TORNADO", 2.5, "M", 3, 40),
    ("TSTM WIND", 10.0, "K", 0, 1),
    ("TSTM WIND", 5.0, "", 0, 2),         # blank unit
    ("SUMMARY OF MAY 5", 1.0, "K", 0, 0),  # unmatched event type
    ("HAIL", 1.0, "X", 0, 0),             # unmatched unit
    ("FLASH FLOOD", 4.0, "b", 1, 0),
    ("?", 1.0, "?", 0, 0),                # both unmatched
]


@pytest.mark.parametrize("magnitude, unit, expected", [
    (3, "K", 3000.0),
    (1.5, "B", 1_500_000_000.0),
    (2, "m", 2_000_000.0),
    (7, "k", 7000.0),
    (0, "M", 0.0),
])
def test_resolve_damage(magnitude, unit, expected):
    assert resolve_damage(magnitude, unit) == pytest.approx(expected)


@pytest.mark.parametrize("unit", ["X", "", "+", "-", "?", "H", "5", "KK"])
def test_resolve_damage_rejects_unknown_units(unit):
    assert resolve_damage(1.0, unit) is None


def test_resolve_damage_rejects_missing_magnitude():
    assert resolve_damage(float("nan"), "K") is None


def test_resolve_damage_units_vectorized():
    df = resolve_damage_units(_raw_frame([
        ("A", 3, "K", 0, 0),
        ("A", 1.5, "B", 0, 0),
        ("A", 9, "X", 0, 0),
    ]))
    assert df["damage_value"].iloc[0] == 3000
    assert df["damage_value"].iloc[1] == 1.5e9
    assert math.isnan(df["damage_value"].iloc[2])


def test_normalize_event_types_adds_category(rules):
    df = normalize_event_types(_raw_frame(MIXED_ROWS), rules)
    assert df["category"].iloc[0] == "Tornado"
    assert df["category"].iloc[1] == "Thunderstorm Wind"
    assert pd.isna(df["category"].iloc[3])
    assert df["event_clean"].iloc[3] == "summary of may 5"


def test_normalize_does_not_mutate_input(rules):
    raw = _raw_frame(MIXED_ROWS)
    normalize_event_types(raw, rules)
    assert "category" not in raw.columns


def test_clean_records_keeps_only_fully_resolved_rows(rules):
    cleaned, report = clean_records(_raw_frame(MIXED_ROWS), rules, malformed_rows=2)

    assert list(cleaned.columns) == ["category", "fatalities", "injuries", "damage_value"]
    assert cleaned["category"].tolist() == ["Tornado", "Thunderstorm Wind", "Flash Flood"]
    assert cleaned["damage_value"].tolist() == [2_500_000.0, 10_000.0, 4_000_000_000.0]
    assert cleaned["category"].notna().all()
    assert cleaned["damage_value"].notna().all()

    assert report.total_rows == 9
    assert report.malformed_rows == 2
    assert report.unmatched_event_types == 2
    assert report.unmatched_damage_units == 2
    assert report.kept_rows == 3
    assert report.excluded_rows + report.kept_rows == report.total_rows


def test_clean_records_reports_top_unmatched(rules):
    rows = MIXED_ROWS + [("SUMMARY OF MAY 5", 1.0, "K", 0, 0)]
    _, report = clean_records(_raw_frame(rows), rules)
    assert report.top_unmatched_labels[0] == ("summary of may 5", 2)
    assert ("(blank)", 1) in report.top_unmatched_units
    assert ("X", 1) in report.top_unmatched_units


def test_record_and_frame_cleaning_agree(rules):
    raw = _raw_frame(MIXED_ROWS)
    cleaned, _ = clean_records(raw, rules)

    one_by_one = [clean_record(r, rules) for r in iter_raw_records(raw)]
    survivors = [c for c in one_by_one if c is not None]

    assert len(survivors) == len(cleaned)
    for rec, row in zip(survivors, cleaned.itertuples(index=False)):
        assert rec.category == row.category
        assert rec.damage_value == pytest.approx(row.damage_value)


def test_clean_record_examples(rules):
    assert clean_record(RawRecord("Tornado", 5, "K", 1, 10), rules) == CleanedRecord("Tornado", 1, 10, 5000.0)
    assert clean_record(RawRecord("Tornado", 5, "X", 1, 10), rules) is None
    assert clean_record(RawRecord("???", 5, "K", 1, 10), rules) is None


def test_clean_records_on_empty_frame(rules):
    cleaned, report = clean_records(_raw_frame([]), rules)
    assert cleaned.empty
    assert report.kept_rows == 0
    assert report.pct_kept == 0.0

"""
Storm dataset loading — column selection, type coercion, malformed-row drop.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

import pandas as pd

from storm_analytics.config import COLUMN_MAP, COUNT_COLS, INPUT_FILE
from storm_analytics.data.schemas import RawRecord
from storm_analytics.errors import DatasetError


@dataclass
class LoadResult:
    """Loaded raw records plus how many source rows were unusable."""
    df: pd.DataFrame
    total_rows: int
    malformed_rows: int


# ---------------------------------------------------------------------------
# Reading
# ---------------------------------------------------------------------------

def _read_raw(filepath: Path, column_map: dict[str, str]) -> pd.DataFrame:
    """Read only the mapped columns, keeping text columns as strings."""
    source_cols = list(column_map.keys())
    text_cols = [src for src, dst in column_map.items() if dst in ("event_type", "damage_unit")]
    try:
        df = pd.read_csv(
            filepath,
            usecols=source_cols,
            dtype={c: str for c in text_cols},
            encoding="latin-1",
            low_memory=False,
        )
    except (pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
        raise DatasetError(f"Could not parse {filepath.name}: {exc}") from exc
    except ValueError as exc:
        # usecols mismatch surfaces as ValueError
        raise DatasetError(f"{filepath.name} is missing required columns {source_cols}: {exc}") from exc
    except OSError as exc:
        raise DatasetError(f"Could not read {filepath}: {exc}") from exc
    return df.rename(columns=column_map)


# ---------------------------------------------------------------------------
# Coercion
# ---------------------------------------------------------------------------

def _coerce_types(df: pd.DataFrame) -> pd.DataFrame:
    """Parse numerics, flag malformed rows in a boolean `_valid` column."""
    df["event_type"] = df["event_type"].fillna("").astype(str)
    df["damage_unit"] = df["damage_unit"].fillna("").astype(str).str.strip()
    df["damage_magnitude"] = pd.to_numeric(df["damage_magnitude"], errors="coerce")
    for col in COUNT_COLS:
        df[col] = pd.to_numeric(df[col], errors="coerce")

    valid = df["event_type"].str.strip() != ""
    valid &= df["damage_magnitude"].notna() & (df["damage_magnitude"] >= 0)
    for col in COUNT_COLS:
        valid &= df[col].notna() & (df[col] >= 0) & (df[col] % 1 == 0)
    df["_valid"] = valid
    return df


def load_storm_csv(
    filepath: str | Path = INPUT_FILE,
    column_map: dict[str, str] = COLUMN_MAP,
) -> LoadResult:
    """Load the storm dataset into a frame of raw records.

    Compressed inputs (.bz2, .gz, .zip) are inferred from the extension.
    Rows with a blank event type, a missing or negative number, or a
    fractional casualty count are dropped and counted, not raised.
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"Storm dataset not found: {filepath}")

    df = _coerce_types(_read_raw(filepath, column_map))
    total = len(df)

    df = df[df["_valid"]].drop(columns=["_valid"]).reset_index(drop=True)
    for col in COUNT_COLS:
        df[col] = df[col].astype("int64")
    df["damage_magnitude"] = df["damage_magnitude"].astype(float)

    return LoadResult(df=df, total_rows=total, malformed_rows=total - len(df))


def iter_raw_records(df: pd.DataFrame) -> Iterator[RawRecord]:
    """Yield RawRecord objects for record-at-a-time callers."""
    cols = ["event_type", "damage_magnitude", "damage_unit", "fatalities", "injuries"]
    for event_type, magnitude, unit, fatalities, injuries in df[cols].itertuples(index=False):
        yield RawRecord(
            event_type=event_type,
            damage_magnitude=float(magnitude),
            damage_unit=unit,
            fatalities=int(fatalities),
            injuries=int(injuries),
        )

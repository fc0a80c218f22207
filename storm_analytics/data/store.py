"""
StormDataStore — holds one run's raw frame, cleaned frame, and exclusion counts.

Built explicitly from an input path and a RuleSet; nothing is module-global.
"""
from __future__ import annotations

from pathlib import Path

import pandas as pd

from storm_analytics.config import INPUT_FILE, UNMATCHED_SAMPLE_SIZE
from storm_analytics.data.loader import load_storm_csv
from storm_analytics.data.normalize import clean_records
from storm_analytics.data.rules import RuleSet
from storm_analytics.data.schemas import ExclusionReport


class StormDataStore:
    """In-memory storm data for a single report run."""

    def __init__(self, rules: RuleSet, sample_size: int = UNMATCHED_SAMPLE_SIZE) -> None:
        self.rules = rules
        self.sample_size = sample_size
        self.raw_df: pd.DataFrame = pd.DataFrame()
        self.cleaned_df: pd.DataFrame = pd.DataFrame(
            columns=["category", "fatalities", "injuries", "damage_value"]
        )
        self.exclusions = ExclusionReport()
        self.source: Path | None = None
        self._loaded = False

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self, filepath: str | Path = INPUT_FILE) -> "StormDataStore":
        """Load the dataset, recode event types, resolve damage units."""
        filepath = Path(filepath)
        print(f"Loading storm data from {filepath.name}...")
        result = load_storm_csv(filepath)
        print(f"  {result.total_rows:,} rows read, {result.malformed_rows:,} malformed rows dropped")
        return self.load_frame(result.df, malformed_rows=result.malformed_rows, source=filepath)

    def load_frame(
        self,
        raw_df: pd.DataFrame,
        malformed_rows: int = 0,
        source: Path | None = None,
    ) -> "StormDataStore":
        """Clean an already-loaded raw frame."""
        self.raw_df = raw_df
        self.source = source
        self.cleaned_df, self.exclusions = clean_records(
            raw_df, self.rules, malformed_rows, sample_size=self.sample_size,
        )

        ex = self.exclusions
        print(f"  Ruleset: {len(self.rules)} rules from {self.rules.source}")
        print(f"  Unmatched event types: {ex.unmatched_event_types:,} rows excluded")
        print(f"  Unmatched damage units: {ex.unmatched_damage_units:,} rows excluded")
        print(f"  Kept {ex.kept_rows:,} of {ex.total_rows:,} rows ({ex.pct_kept:.1f}%)")

        self._loaded = True
        return self

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    # ------------------------------------------------------------------
    # Metadata queries
    # ------------------------------------------------------------------

    def categories(self) -> list[str]:
        """Canonical categories present in the cleaned data, sorted."""
        if self.cleaned_df.empty:
            return []
        return sorted(self.cleaned_df["category"].unique().tolist())

    def row_count(self) -> int:
        return len(self.raw_df)

    def cleaned_count(self) -> int:
        return len(self.cleaned_df)

    def source_label(self) -> str:
        return self.source.name if self.source else "in-memory data"

"""
Record, summary, and ranking schemas for the storm impact pipeline.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Metric(str, Enum):
    INJURIES = "injuries"
    FATALITIES = "fatalities"
    DAMAGE = "damage"

    @property
    def column(self) -> str:
        """Category Summary column holding this metric."""
        return f"total_{self.value}"

    @property
    def label(self) -> str:
        return {
            Metric.INJURIES: "Injuries",
            Metric.FATALITIES: "Fatalities",
            Metric.DAMAGE: "Property Damage",
        }[self]


@dataclass(frozen=True)
class RawRecord:
    """One row of the storm dataset, as loaded."""
    event_type: str
    damage_magnitude: float
    damage_unit: str
    fatalities: int
    injuries: int


@dataclass(frozen=True)
class CleanedRecord:
    """A raw record whose event type and damage unit both resolved."""
    category: str
    fatalities: int
    injuries: int
    damage_value: float


@dataclass(frozen=True)
class CategorySummary:
    category: str
    total_injuries: int
    total_fatalities: int
    total_damage: float


@dataclass(frozen=True)
class RankingEntry:
    rank: int
    category: str
    value: float


@dataclass
class ExclusionReport:
    """Counts of records dropped at each stage of the pipeline."""
    total_rows: int = 0
    malformed_rows: int = 0
    unmatched_event_types: int = 0
    unmatched_damage_units: int = 0
    kept_rows: int = 0
    top_unmatched_labels: list[tuple[str, int]] = field(default_factory=list)
    top_unmatched_units: list[tuple[str, int]] = field(default_factory=list)

    @property
    def excluded_rows(self) -> int:
        return self.malformed_rows + self.unmatched_event_types + self.unmatched_damage_units

    @property
    def pct_kept(self) -> float:
        if self.total_rows == 0:
            return 0.0
        return round(self.kept_rows / self.total_rows * 100, 1)

    def as_dict(self) -> dict:
        return {
            "total_rows": self.total_rows,
            "malformed_rows": self.malformed_rows,
            "unmatched_event_types": self.unmatched_event_types,
            "unmatched_damage_units": self.unmatched_damage_units,
            "excluded_rows": self.excluded_rows,
            "kept_rows": self.kept_rows,
            "pct_kept": self.pct_kept,
            "top_unmatched_labels": [
                {"label": label, "count": count} for label, count in self.top_unmatched_labels
            ],
            "top_unmatched_units": [
                {"unit": unit, "count": count} for unit, count in self.top_unmatched_units
            ],
        }

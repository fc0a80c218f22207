from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest

from storm_analytics.config import RULES_FILE
from storm_analytics.data.rules import load_rules
from storm_analytics.data.store import StormDataStore

SOURCE_COLUMNS = ["STATE", "EVTYPE", "PROPDMG", "PROPDMGEXP", "FATALITIES", "INJURIES"]

EXAMPLE_ROWS = [
    ("OK", "Tornado", 5, "K", 1, 10),
    ("KS", "TORNADO ", 2, "M", 0, 3),
    ("MS", "Flood", 1, "B", 2, 0),
]


@pytest.fixture(scope="session")
def rules():
    return load_rules(RULES_FILE)


@pytest.fixture
def write_storm_csv(tmp_path: Path):
    """Factory: write rows (STATE, EVTYPE, PROPDMG, PROPDMGEXP, FATALITIES, INJURIES) to a CSV."""
    def _write(rows, name: str = "storm.csv") -> Path:
        path = tmp_path / name
        pd.DataFrame(rows, columns=SOURCE_COLUMNS).to_csv(path, index=False)
        return path
    return _write


@pytest.fixture
def example_csv(write_storm_csv) -> Path:
    return write_storm_csv(EXAMPLE_ROWS)


@pytest.fixture
def example_store(rules, example_csv) -> StormDataStore:
    return StormDataStore(rules).load(example_csv)

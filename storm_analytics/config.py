"""
Storm Analytics — Configuration: paths, constants, column map, canonical categories.
"""
import os
from pathlib import Path

# ---------------------------------------------------------------------------
# Paths: override with STORM_DATA_DIR / STORM_RULES_FILE env vars
# ---------------------------------------------------------------------------
_data_dir = Path(os.environ.get("STORM_DATA_DIR", str(Path.home() / "storm-analytics")))
BASE_FOLDER = _data_dir
INPUT_FILE = _data_dir / "repdata_data_StormData.csv.bz2"
REPORTS_FOLDER = _data_dir / "reports"

RULES_FILE = Path(os.environ.get(
    "STORM_RULES_FILE",
    str(Path(__file__).resolve().parent / "data" / "event_type_rules.csv"),
))

REPORT_FILENAME = "Storm_Impact_Report.xlsx"
JSON_FILENAME = "storm_impact.json"

# ---------------------------------------------------------------------------
# Column mapping from raw NOAA storm data → internal names
# ---------------------------------------------------------------------------
COLUMN_MAP = {
    "EVTYPE": "event_type",
    "PROPDMG": "damage_magnitude",
    "PROPDMGEXP": "damage_unit",
    "FATALITIES": "fatalities",
    "INJURIES": "injuries",
}

COUNT_COLS = ["fatalities", "injuries"]

# ---------------------------------------------------------------------------
# Damage unit codes (anything else is unmatched and the record is excluded)
# ---------------------------------------------------------------------------
DAMAGE_UNIT_MULTIPLIERS = {
    "K": 1e3,
    "k": 1e3,
    "M": 1e6,
    "m": 1e6,
    "B": 1e9,
    "b": 1e9,
}

# ---------------------------------------------------------------------------
# Ranking defaults
# ---------------------------------------------------------------------------
TOP_N = 5
UNMATCHED_SAMPLE_SIZE = 20

# ---------------------------------------------------------------------------
# Canonical event types, NWS Directive 10-1605, Storm Data Event Table
# ---------------------------------------------------------------------------
CANONICAL_CATEGORIES = (
    "Astronomical Low Tide",
    "Avalanche",
    "Blizzard",
    "Coastal Flood",
    "Cold/Wind Chill",
    "Debris Flow",
    "Dense Fog",
    "Dense Smoke",
    "Drought",
    "Dust Devil",
    "Dust Storm",
    "Excessive Heat",
    "Extreme Cold/Wind Chill",
    "Flash Flood",
    "Flood",
    "Frost/Freeze",
    "Funnel Cloud",
    "Freezing Fog",
    "Hail",
    "Heat",
    "Heavy Rain",
    "Heavy Snow",
    "High Surf",
    "High Wind",
    "Hurricane (Typhoon)",
    "Ice Storm",
    "Lake-Effect Snow",
    "Lakeshore Flood",
    "Lightning",
    "Marine Hail",
    "Marine High Wind",
    "Marine Strong Wind",
    "Marine Thunderstorm Wind",
    "Rip Current",
    "Seiche",
    "Sleet",
    "Storm Surge/Tide",
    "Strong Wind",
    "Thunderstorm Wind",
    "Tornado",
    "Tropical Depression",
    "Tropical Storm",
    "Tsunami",
    "Volcanic Ash",
    "Waterspout",
    "Wildfire",
    "Winter Storm",
    "Winter Weather",
)

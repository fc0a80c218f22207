"""Storm dataset loading, event-type recoding, and damage resolution."""
from .loader import load_storm_csv, iter_raw_records, LoadResult
from .rules import RuleSet, EventTypeRule, load_rules, clean_event_text
from .normalize import normalize_event_types, resolve_damage, resolve_damage_units, clean_record, clean_records
from .schemas import Metric, RawRecord, CleanedRecord, CategorySummary, RankingEntry, ExclusionReport
from .store import StormDataStore

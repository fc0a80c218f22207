"""
Exceptions for conditions that abort a report run.

Record-level problems (unmatched event types, unknown damage units, malformed
rows) never raise; those rows are excluded and counted instead.
"""


class StormAnalyticsError(Exception):
    """Base class for fatal pipeline errors."""


class DatasetError(StormAnalyticsError):
    """Input file is unreadable, malformed, or missing required columns."""


class RulesetError(StormAnalyticsError):
    """Event-type ruleset is missing, empty, or invalid."""

"""Storm Analytics — casualty and property-damage report over NOAA storm events."""

__version__ = "1.0.0"

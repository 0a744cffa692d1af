"""
Utilities package for the Courtside game tracker.

This package contains utility functions and constants used throughout the application.
"""
from .time_utils import fmt_mmss, now_ts
from .constants import (
    APP_TITLE, DEFAULT_SPORT, DEFAULT_STARTERS_COUNT, OVERTIME_PREFIX,
    PERIOD_LABELS, STAT_LABELS, TICK_INTERVAL_SECONDS
)

__all__ = [
    "fmt_mmss", "now_ts", "APP_TITLE", "DEFAULT_SPORT", "DEFAULT_STARTERS_COUNT",
    "OVERTIME_PREFIX", "PERIOD_LABELS", "STAT_LABELS", "TICK_INTERVAL_SECONDS"
]

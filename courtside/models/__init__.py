"""
Models package for the Courtside game tracker.

This package contains the core data models used throughout the application.
"""
from .aggregates import BoxScore, PlayerAggregate, TeamScoreState
from .clock_state import ClockState
from .event_log import EventLog
from .game_state import GameState
from .league import LeagueConfig, is_overtime, overtime_number
from .roster import RosterMember, TeamRoster
from .stat_event import CourtLocation, StatEvent, Transaction, new_id

__all__ = [
    "BoxScore", "PlayerAggregate", "TeamScoreState", "ClockState", "EventLog",
    "GameState", "LeagueConfig", "is_overtime", "overtime_number",
    "RosterMember", "TeamRoster", "CourtLocation", "StatEvent", "Transaction", "new_id"
]

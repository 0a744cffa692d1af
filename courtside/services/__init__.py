"""
Services package for the Courtside game tracker.

This package contains business logic services for recording stats,
aggregating them, and running the clock and rosters.
"""
from .aggregation_service import AggregateCache, aggregate_player, aggregate_team, fold
from .clock_service import ClockService, ManualTicker, ThreadTicker, initial_clock_state
from .errors import ConstraintViolation, GameTrackingError, PersistenceError
from .game_commands import Command, RecordTransactionCommand, UndoController
from .game_tracking_service import GameTrackingService, StatResult
from .pairing_resolver import PAIRING_TABLE, FollowUp, RespondentPool, resolve
from .persistence_service import JsonFileSink, PersistenceService, SaveResult
from .roster_service import RosterService
from .service_factory import ServiceFactory

__all__ = [
    "AggregateCache", "aggregate_player", "aggregate_team", "fold",
    "ClockService", "ManualTicker", "ThreadTicker", "initial_clock_state",
    "ConstraintViolation", "GameTrackingError", "PersistenceError",
    "Command", "RecordTransactionCommand", "UndoController",
    "GameTrackingService", "StatResult",
    "PAIRING_TABLE", "FollowUp", "RespondentPool", "resolve",
    "JsonFileSink", "PersistenceService", "SaveResult",
    "RosterService", "ServiceFactory",
]

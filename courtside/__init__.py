"""
Courtside Stat Tracker

Live game statistics recording for league games: an append-only event log,
paired follow-up questions, derived box scores, foul-out and substitution
rules, single-level undo and a running game clock.

This package provides the tracking core and a Flask JSON API over it.
"""
from .models import GameState, LeagueConfig, StatEvent
from .services import GameTrackingService, PersistenceService, ServiceFactory
from .ui import create_app, run_web_app
from .utils import fmt_mmss, now_ts, APP_TITLE

__version__ = "1.0.0"

__all__ = [
    "GameState", "LeagueConfig", "StatEvent", "GameTrackingService",
    "PersistenceService", "ServiceFactory", "create_app", "run_web_app",
    "fmt_mmss", "now_ts", "APP_TITLE"
]

"""
Service Factory for dependency injection.

This module builds a fully wired GameTrackingService for one game, with the
clock ticker and persistence sink injected so tests and alternative
frontends can swap them.
"""
from typing import Callable, Optional

from ..models import GameState
from .aggregation_service import AggregateCache
from .clock_service import ClockService, ThreadTicker, initial_clock_state
from .game_commands import UndoController
from .game_tracking_service import GameTrackingService
from .persistence_service import JsonFileSink, PersistenceService
from .roster_service import RosterService


class ServiceFactory:
    """
    Factory for creating service instances with proper dependency injection.

    Args:
        save_dir: Directory for the JSON file sink
        ticker_factory: Builds the clock ticker for each session
    """

    def __init__(
        self,
        save_dir: str = "saves",
        ticker_factory: Optional[Callable[[], ThreadTicker]] = None,
    ):
        self.save_dir = save_dir
        self.ticker_factory = ticker_factory or ThreadTicker
        self._persistence_service: Optional[PersistenceService] = None

    def create_aggregate_cache(self, game_state: GameState) -> AggregateCache:
        """Fold the existing log once; later changes are applied incrementally."""
        return AggregateCache.from_events(game_state.event_log, game_state.league, game_state.team_ids)

    def create_roster_service(self, game_state: GameState, aggregates: AggregateCache) -> RosterService:
        roster_service = RosterService(game_state, aggregates)
        roster_service.ensure_starters()
        return roster_service

    def create_clock_service(self, game_state: GameState) -> ClockService:
        """
        Create ClockService, resuming from the log when no clock was saved.

        Args:
            game_state: Game state whose clock is managed

        Returns:
            Configured ClockService instance
        """
        if game_state.clock is None:
            game_state.clock = initial_clock_state(game_state.league, game_state.event_log)
        return ClockService(game_state.clock, game_state.league, ticker=self.ticker_factory())

    def create_tracking_service(self, game_state: GameState) -> GameTrackingService:
        """
        Create a complete tracking session for a game.

        Args:
            game_state: Game state for the session

        Returns:
            Configured GameTrackingService instance
        """
        aggregates = self.create_aggregate_cache(game_state)
        return GameTrackingService(
            game_state=game_state,
            aggregates=aggregates,
            roster_service=self.create_roster_service(game_state, aggregates),
            clock_service=self.create_clock_service(game_state),
            undo_controller=UndoController(),
            persistence_service=self._get_persistence_service(),
        )

    def _get_persistence_service(self) -> PersistenceService:
        """Get singleton persistence service."""
        if self._persistence_service is None:
            self._persistence_service = PersistenceService(JsonFileSink(self.save_dir))
        return self._persistence_service

    def configure_custom_persistence_service(self, service: PersistenceService) -> None:
        self._persistence_service = service

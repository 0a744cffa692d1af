"""
Game tracking service for the Courtside game tracker.

One GameTrackingService drives a single live game: it validates and
records stat actions (asking follow-up questions through the pairing
resolver), keeps the aggregates current, and exposes the clock, roster and
undo commands behind one entry point.
"""
import logging
from dataclasses import dataclass, replace
from typing import Any, Dict, List, Optional

from ..models import (
    BoxScore, ClockState, CourtLocation, GameState, PlayerAggregate,
    RosterMember, StatEvent, TeamScoreState, Transaction, new_id,
)
from ..utils import STAT_LABELS, fmt_mmss, now_ts
from ..utils.constants import MAX_CLOCK_SECONDS, SHOT_STAT_TYPES
from .aggregation_service import AggregateCache
from .clock_service import ClockService
from .errors import (
    FollowUpPendingError, IllegalStatTypeError, IneligibleRespondentError,
    InvalidClockTimeError, InvalidLocationError, InvalidPeriodError,
    NoPendingFollowUpError,
)
from .game_commands import RecordTransactionCommand, UndoController
from .pairing_resolver import FollowUp, resolve, secondary_stat_type
from .persistence_service import PersistenceService, SaveResult
from .roster_service import RosterService

logger = logging.getLogger(__name__)


@dataclass
class StatResult:
    """
    Outcome of recording a primary stat.

    Exactly one field is set: the committed transaction, or the follow-up
    that must be answered before anything is committed.
    """
    transaction: Optional[Transaction] = None
    follow_up: Optional[FollowUp] = None

    @property
    def committed(self) -> bool:
        return self.transaction is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "committed": self.committed,
            "events": [e.to_dict() for e in self.transaction.events] if self.transaction else [],
            "follow_up": self.follow_up.to_dict() if self.follow_up else None,
        }


@dataclass
class _PendingStat:
    primary: StatEvent
    follow_up: FollowUp


class GameTrackingService:
    """
    Session orchestrator for one tracked game.

    All events of a transaction share the stamp taken when the primary
    action was recorded, even if the clock moves or is edited before the
    follow-up is answered.
    """

    def __init__(
        self,
        game_state: GameState,
        aggregates: AggregateCache,
        roster_service: RosterService,
        clock_service: ClockService,
        undo_controller: Optional[UndoController] = None,
        persistence_service: Optional[PersistenceService] = None,
    ):
        self.game_state = game_state
        self.aggregates = aggregates
        self.roster = roster_service
        self.clock = clock_service
        self.undo_controller = undo_controller or UndoController()
        self.persistence_service = persistence_service
        self._pending: Optional[_PendingStat] = None

    @property
    def league(self):
        return self.game_state.league

    @property
    def event_log(self):
        return self.game_state.event_log

    # ------------------------------------------------------------------
    # Stat recording
    # ------------------------------------------------------------------
    @property
    def pending_follow_up(self) -> Optional[FollowUp]:
        return self._pending.follow_up if self._pending else None

    def record_primary_stat(
        self,
        player_id: str,
        stat_type: str,
        period: Optional[str] = None,
        clock_seconds: Optional[int] = None,
        location: Optional[CourtLocation] = None,
    ) -> StatResult:
        """
        Record a primary stat action for an active player.

        Args:
            player_id: Acting player
            stat_type: Primary stat type
            period: Override for the period stamp (defaults to the clock)
            clock_seconds: Override for the clock stamp (defaults to the clock)
            location: Optional shot location

        Returns:
            StatResult with either the committed transaction or a follow-up

        Raises:
            ConstraintViolation: If the action breaks a game rule
        """
        if self._pending is not None:
            raise FollowUpPendingError(
                f"Answer or cancel the pending question first: {self._pending.follow_up.question}"
            )
        if not self.league.is_legal_stat_type(stat_type):
            raise IllegalStatTypeError(f"{stat_type} is not a {self.league.sport_type} stat")
        team = self.roster.ensure_can_record(player_id)
        self._check_location(stat_type, location)

        current_period, current_seconds = self.clock.stamp()
        period = current_period if period is None else period
        if not self.league.is_valid_period(period):
            raise InvalidPeriodError(f"Invalid period: {period}")
        if clock_seconds is None:
            clock_seconds = current_seconds
        if not 0 <= clock_seconds <= MAX_CLOCK_SECONDS:
            raise InvalidClockTimeError(f"Invalid clock time: {clock_seconds}")

        member = team.member(player_id)
        transaction_id = new_id()
        primary = StatEvent(
            id=new_id(),
            player=player_id,
            team=team.team_id,
            stat_type=stat_type,
            period=period,
            clock_seconds=int(clock_seconds),
            recorded_at=now_ts(),
            transaction_id=transaction_id,
            location=location,
            player_name=member.name if member else "",
        )

        follow_up = resolve(stat_type, player_id, self.roster.eligible_roster(), self.league.stat_types)
        if follow_up is None:
            return StatResult(transaction=self._commit(Transaction.build(primary)))

        if not follow_up.respondents and not follow_up.allow_none:
            raise IneligibleRespondentError(f"No eligible players to answer: {follow_up.question}")
        self._pending = _PendingStat(primary=primary, follow_up=follow_up)
        logger.debug("Follow-up pending for %s by %s", stat_type, player_id)
        return StatResult(follow_up=follow_up)

    def resolve_follow_up(self, respondent_id: Optional[str]) -> Transaction:
        """
        Answer the pending follow-up and commit the transaction.

        Args:
            respondent_id: Chosen player, or None for "nobody" where allowed

        Returns:
            The committed transaction (one or two events)

        Raises:
            NoPendingFollowUpError: If nothing is pending
            IneligibleRespondentError: If the answer is not allowed; the
                follow-up stays pending
        """
        if self._pending is None:
            raise NoPendingFollowUpError("No follow-up question is pending")
        pending = self._pending
        follow_up = pending.follow_up

        if not follow_up.accepts(respondent_id):
            if respondent_id is None:
                raise IneligibleRespondentError(f"A player is required: {follow_up.question}")
            raise IneligibleRespondentError(f"Player {respondent_id} cannot answer: {follow_up.question}")

        if respondent_id is None:
            transaction = Transaction.build(pending.primary)
        else:
            respondent_team = self.game_state.team_of_player(respondent_id)
            if respondent_id not in self.roster.eligible_players(respondent_team.team_id):
                raise IneligibleRespondentError(f"Player {respondent_id} is no longer eligible")
            secondary_type = secondary_stat_type(follow_up, respondent_team.team_id)
            if secondary_type is not None and not self.league.is_legal_stat_type(secondary_type):
                raise IllegalStatTypeError(f"{secondary_type} is not a {self.league.sport_type} stat")
            if secondary_type is None:
                primary = replace(pending.primary, related_player=respondent_id)
                transaction = Transaction.build(primary)
            else:
                member = respondent_team.member(respondent_id)
                secondary = StatEvent(
                    id=new_id(),
                    player=respondent_id,
                    team=respondent_team.team_id,
                    stat_type=secondary_type,
                    period=pending.primary.period,
                    clock_seconds=pending.primary.clock_seconds,
                    recorded_at=pending.primary.recorded_at,
                    transaction_id=pending.primary.transaction_id,
                    player_name=member.name if member else "",
                )
                transaction = Transaction.build(pending.primary, secondary)

        self._pending = None
        return self._commit(transaction)

    def cancel_follow_up(self) -> None:
        """Abandon the pending follow-up without recording anything."""
        if self._pending is None:
            raise NoPendingFollowUpError("No follow-up question is pending")
        logger.info("Cancelled %s for %s", self._pending.primary.stat_type, self._pending.primary.player)
        self._pending = None

    def undo(self) -> bool:
        """Remove the most recently committed transaction, if any."""
        return self.undo_controller.undo()

    def _commit(self, transaction: Transaction) -> Transaction:
        command = RecordTransactionCommand(self.event_log, self.aggregates, transaction)
        self.undo_controller.execute_command(command)
        primary = transaction.primary
        logger.info(
            "Recorded %s [%s %s]",
            command.description, primary.period, fmt_mmss(primary.clock_seconds),
        )
        for event in transaction.events:
            if event.stat_type in self.league.foul_stat_types and self.roster.foul_out_status(event.player):
                logger.warning("%s has fouled out", event.player_name or event.player)
        return transaction

    def _check_location(self, stat_type: str, location: Optional[CourtLocation]) -> None:
        if location is None:
            return
        dimensions = self.league.court_dimensions
        if stat_type not in SHOT_STAT_TYPES or dimensions is None:
            raise InvalidLocationError(f"A location cannot be recorded for {stat_type}")
        length, width = dimensions
        if not (0 <= location.x <= length and 0 <= location.y <= width):
            raise InvalidLocationError(f"Location ({location.x}, {location.y}) is off the court")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def player_aggregate(self, player_id: str) -> PlayerAggregate:
        team = self.game_state.team_of_player(player_id)
        return self.aggregates.player(player_id, team.team_id if team else "")

    def team_score(self, team_id: str) -> TeamScoreState:
        return self.aggregates.team(team_id)

    def box_score(self) -> BoxScore:
        return self.aggregates.box_score()

    def play_by_play(
        self,
        team: Optional[str] = None,
        period: Optional[str] = None,
        player: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[StatEvent]:
        return self.event_log.filter(team=team, period=period, player=player, limit=limit)

    def clock_state(self) -> ClockState:
        return self.clock.snapshot()

    def period_options(self) -> List[str]:
        return self.clock.period_options(self.event_log)

    def roster_state(self) -> Dict[str, Any]:
        teams = []
        for team in self.game_state.teams:
            data = team.to_dict()
            data["fouled_out"] = self.roster.fouled_out_players(team.team_id)
            teams.append(data)
        return {
            "starters_count": self.roster.starters_count,
            "substitution_in_progress": self.roster.substitution_in_progress,
            "teams": teams,
        }

    def state(self) -> Dict[str, Any]:
        """Everything a scorekeeper screen needs in one dictionary."""
        clock = self.clock_state()
        return {
            "game_id": self.game_state.game_id,
            "sport_type": self.league.sport_type,
            "clock": dict(clock.to_dict(), display=fmt_mmss(clock.seconds_remaining)),
            "period_options": self.period_options(),
            "roster": self.roster_state(),
            "box_score": self.box_score().to_dict(),
            "pending_follow_up": self.pending_follow_up.to_dict() if self.pending_follow_up else None,
            "can_undo": self.undo_controller.can_undo(),
            "last_action": self.undo_controller.last_description,
            "stat_types": [
                {"stat_type": s, "label": STAT_LABELS.get(s, s)} for s in self.league.stat_types
            ],
        }

    # ------------------------------------------------------------------
    # Clock and roster commands
    # ------------------------------------------------------------------
    def toggle_clock(self) -> ClockState:
        return self.clock.toggle()

    def change_period(self, period: str) -> ClockState:
        return self.clock.change_period(period)

    def edit_time(self, seconds: int) -> ClockState:
        return self.clock.edit_time(seconds)

    def begin_substitution(self) -> None:
        self.roster.begin_substitution()

    def toggle_selected(self, team_id: str, player_id: str) -> List[str]:
        return self.roster.toggle_selected(team_id, player_id)

    def confirm_substitution(self) -> Dict[str, List[str]]:
        return self.roster.confirm_substitution()

    def cancel_substitution(self) -> None:
        self.roster.cancel_substitution()

    def add_ringer(self, team_id: str, member: RosterMember) -> RosterMember:
        return self.roster.add_ringer(team_id, member)

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------
    def save(self) -> SaveResult:
        """Explicit save point; failures are reported in the result."""
        if self.persistence_service is None:
            return SaveResult(success=False, error="No persistence sink configured")
        self.game_state.clock = self.clock.snapshot()
        return self.persistence_service.save(self.game_state, self.box_score())

    def close(self) -> None:
        """Tear down the session and stop the clock ticker."""
        self.clock.shutdown()
        self._pending = None
        logger.info("Closed game %s", self.game_state.game_id)

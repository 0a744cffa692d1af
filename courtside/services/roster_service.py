"""
Roster and eligibility service for the Courtside game tracker.

Tracks which players are active for each team, runs the substitution
workflow and decides whether a player may have a stat recorded.
"""
import logging
from typing import Dict, List, Optional

from ..models import GameState, RosterMember, TeamRoster
from .aggregation_service import AggregateCache
from .errors import (
    DuplicatePlayerError, FouledOutError, IneligiblePlayerError, SelectionLimitError,
    SubstitutionNotInProgress, SubstitutionRejected, UnknownPlayerError,
)

logger = logging.getLogger(__name__)


class RosterService:
    """
    Service for active players, substitutions and foul-out eligibility.

    Foul-out status is read from the aggregate cache, so it always reflects
    the current event log, including after an undo.
    """

    def __init__(self, game_state: GameState, aggregates: AggregateCache):
        self.game_state = game_state
        self.aggregates = aggregates

    @property
    def starters_count(self) -> int:
        return self.game_state.league.starters_count

    @property
    def substitution_in_progress(self) -> bool:
        return self.game_state.substitution_in_progress

    def ensure_starters(self) -> None:
        """Fill empty active lists with each team's default starters."""
        for team in self.game_state.teams:
            if not team.active:
                team.active = team.default_starters(self.starters_count)
                logger.info("Starting lineup for %s: %s", team.team_id, ", ".join(team.active))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def _team(self, team_id: str) -> TeamRoster:
        team = self.game_state.team(team_id)
        if team is None:
            raise UnknownPlayerError(f"Unknown team: {team_id}")
        return team

    def active_players(self, team_id: str) -> List[str]:
        return list(self._team(team_id).active)

    def foul_out_status(self, player_id: str) -> bool:
        return self.aggregates.has_fouled_out(player_id)

    def fouled_out_players(self, team_id: str) -> List[str]:
        team = self._team(team_id)
        return [m.player_id for m in team.members if self.foul_out_status(m.player_id)]

    def eligible_players(self, team_id: str) -> List[str]:
        """Active players who have not fouled out."""
        return [p for p in self._team(team_id).active if not self.foul_out_status(p)]

    def eligible_roster(self) -> Dict[str, List[str]]:
        return {team.team_id: self.eligible_players(team.team_id) for team in self.game_state.teams}

    def ensure_can_record(self, player_id: str) -> TeamRoster:
        """
        Check that a stat may be recorded for the player.

        Returns:
            The player's team

        Raises:
            UnknownPlayerError: Player is on neither roster
            IneligiblePlayerError: Player is not active
            FouledOutError: Player has fouled out
        """
        team = self.game_state.team_of_player(player_id)
        if team is None:
            raise UnknownPlayerError(f"Unknown player: {player_id}")
        if player_id not in team.active:
            raise IneligiblePlayerError(f"Player {player_id} is not on the court")
        if self.foul_out_status(player_id):
            raise FouledOutError(f"Player {player_id} has fouled out")
        return team

    # ------------------------------------------------------------------
    # Substitutions
    # ------------------------------------------------------------------
    def begin_substitution(self) -> None:
        """Enter substitution mode with selected initialised from active."""
        for team in self.game_state.teams:
            team.selected = list(team.active)
        self.game_state.substitution_in_progress = True
        logger.info("Substitutions started")

    def toggle_selected(self, team_id: str, player_id: str) -> List[str]:
        """
        Add or remove a player from a team's working selection.

        Returns:
            The team's selection after the change

        Raises:
            SubstitutionNotInProgress: Substitution mode is off
            SelectionLimitError: Selection is already at the starters count
            FouledOutError: Player has fouled out
        """
        if not self.substitution_in_progress:
            raise SubstitutionNotInProgress("Begin substitutions before selecting players")
        team = self._team(team_id)
        if not team.has_member(player_id):
            raise UnknownPlayerError(f"Player {player_id} is not on team {team_id}")

        if player_id in team.selected:
            team.selected = [p for p in team.selected if p != player_id]
        else:
            if len(team.selected) >= self.starters_count:
                raise SelectionLimitError(
                    f"Cannot select more than {self.starters_count} players for {team.name or team_id}"
                )
            if self.foul_out_status(player_id):
                raise FouledOutError(f"Player {player_id} has fouled out")
            team.selected = team.selected + [player_id]
        return list(team.selected)

    def confirm_substitution(self) -> Dict[str, List[str]]:
        """
        Commit both teams' selections as the new active players.

        Either both teams are updated or neither is.

        Raises:
            SubstitutionRejected: Some team's selection exceeds the limit
        """
        if not self.substitution_in_progress:
            raise SubstitutionNotInProgress("No substitutions in progress")
        over = [t.team_id for t in self.game_state.teams if len(t.selected) > self.starters_count]
        if over:
            logger.warning("Substitutions rejected for %s", ", ".join(over))
            raise SubstitutionRejected(over, self.starters_count)

        for team in self.game_state.teams:
            team.active = list(team.selected)
            team.selected = []
        self.game_state.substitution_in_progress = False
        logger.info("Substitutions confirmed")
        return {team.team_id: list(team.active) for team in self.game_state.teams}

    def cancel_substitution(self) -> None:
        """Leave substitution mode without changing active players."""
        for team in self.game_state.teams:
            team.selected = []
        self.game_state.substitution_in_progress = False
        logger.info("Substitutions cancelled")

    def add_ringer(self, team_id: str, member: RosterMember) -> RosterMember:
        """
        Add a player to a team mid-game.

        The ringer goes straight onto the court when the team has an open
        slot, and into the working selection while substitutions are open.
        """
        team = self._team(team_id)
        if self.game_state.team_of_player(member.player_id) is not None:
            raise DuplicatePlayerError(f"Player {member.player_id} is already on a roster")
        member.is_ringer = True
        team.members.append(member)
        if self.substitution_in_progress:
            if len(team.selected) < self.starters_count:
                team.selected = team.selected + [member.player_id]
        elif len(team.active) < self.starters_count:
            team.active = team.active + [member.player_id]
        logger.info("Added ringer %s (%s) to %s", member.name, member.player_id, team_id)
        return member

    def member(self, player_id: str) -> Optional[RosterMember]:
        team = self.game_state.team_of_player(player_id)
        return team.member(player_id) if team is not None else None

"""
GameState model for the Courtside game tracker.

This module contains the GameState dataclass which represents the complete
state of one tracked game: league settings, both rosters, the event log and
the clock, plus JSON persistence helpers.
"""
from dataclasses import dataclass, field
from typing import List, Optional

from .clock_state import ClockState
from .event_log import EventLog
from .league import LeagueConfig
from .roster import TeamRoster
from .stat_event import StatEvent


@dataclass
class GameState:
    """
    Represents the complete state of a tracked game.

    Attributes:
        game_id: Id of the game being tracked
        league: Sport and league settings
        teams: Exactly two team rosters, home first
        event_log: Recorded stat events
        clock: Clock state
        substitution_in_progress: True between beginning and confirming subs
    """
    game_id: str = ""
    league: LeagueConfig = field(default_factory=LeagueConfig.for_sport)
    teams: List[TeamRoster] = field(default_factory=list)
    event_log: EventLog = field(default_factory=EventLog)
    clock: Optional[ClockState] = None
    substitution_in_progress: bool = False

    def __post_init__(self) -> None:
        if len(self.teams) != 2:
            raise ValueError("A game must have exactly two teams")
        if self.teams[0].team_id == self.teams[1].team_id:
            raise ValueError("A game must have two distinct teams")
        for event in self.event_log:
            team = self.team(event.team)
            if team is None:
                raise ValueError(f"Event {event.id} belongs to unknown team {event.team}")
            if not team.has_member(event.player):
                raise ValueError(f"Event {event.id}: player {event.player} is not on team {event.team}")

    def team(self, team_id: str) -> Optional[TeamRoster]:
        for team in self.teams:
            if team.team_id == team_id:
                return team
        return None

    def opponent_of(self, team_id: str) -> TeamRoster:
        return self.teams[1] if self.teams[0].team_id == team_id else self.teams[0]

    def team_of_player(self, player_id: str) -> Optional[TeamRoster]:
        for team in self.teams:
            if team.has_member(player_id):
                return team
        return None

    @property
    def team_ids(self) -> List[str]:
        return [team.team_id for team in self.teams]

    def to_json(self) -> dict:
        """
        Convert GameState to JSON-serializable dictionary.

        Returns:
            Dictionary representation suitable for JSON serialization
        """
        return {
            "game_id": self.game_id,
            "league": self.league.to_dict(),
            "teams": [team.to_dict() for team in self.teams],
            "event_log": [event.to_dict() for event in self.event_log],
            "clock": self.clock.to_dict() if self.clock else None,
            "substitution_in_progress": self.substitution_in_progress,
        }

    @staticmethod
    def from_json(data: dict) -> "GameState":
        """
        Create GameState from JSON dictionary.

        Accepts both the saved form (``event_log``) and the raw roster feed
        form where teams carry only ``members``.

        Args:
            data: Dictionary with game state data

        Returns:
            New GameState instance
        """
        events: List[StatEvent] = [
            StatEvent.from_dict(e) for e in data.get("event_log", []) or []
        ]
        clock_data = data.get("clock")
        return GameState(
            game_id=str(data.get("game_id", "")),
            league=LeagueConfig.from_dict(data.get("league")),
            teams=[TeamRoster.from_dict(t) for t in data.get("teams", [])],
            event_log=EventLog(events),
            clock=ClockState.from_dict(clock_data) if clock_data else None,
            substitution_in_progress=bool(data.get("substitution_in_progress", False)),
        )

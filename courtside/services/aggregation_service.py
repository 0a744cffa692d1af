"""
Aggregation engine for the Courtside game tracker.

Aggregates are pure folds over the event log. The AggregateCache keeps the
same totals incrementally (apply on append, revert on undo) and is always
equal to a full fold of the current log.
"""
import logging
from typing import Dict, Iterable, Optional

from ..models import BoxScore, LeagueConfig, PlayerAggregate, StatEvent, TeamScoreState
from ..utils.constants import REBOUND_STAT_TYPES

logger = logging.getLogger(__name__)


def _finish_player(aggregate: PlayerAggregate, league: LeagueConfig) -> PlayerAggregate:
    counts = aggregate.stat_counts
    aggregate.points = sum(league.point_value(t) * n for t, n in counts.items())
    aggregate.rebounds = sum(counts.get(t, 0) for t in REBOUND_STAT_TYPES)
    aggregate.fouls = sum(counts.get(t, 0) for t in league.foul_stat_types)
    aggregate.has_fouled_out = (
        league.foul_out_limit is not None and aggregate.fouls >= league.foul_out_limit
    )
    return aggregate


def _finish_team(state: TeamScoreState, players: Iterable[PlayerAggregate]) -> TeamScoreState:
    members = [p for p in players if p.team == state.team]
    state.score = sum(p.points for p in members)
    state.rebounds = sum(p.rebounds for p in members)
    state.assists = sum(p.assists for p in members)
    state.turnovers = sum(p.turnovers for p in members)
    state.fouls = sum(p.fouls for p in members)
    return state


def aggregate_player(
    events: Iterable[StatEvent],
    player_id: str,
    league: LeagueConfig,
    team_id: str = "",
) -> PlayerAggregate:
    """
    Fold the log filtered to one player.

    Args:
        events: Event log (any iterable of StatEvent)
        player_id: Player to aggregate
        league: Supplies scoring weights and foul rules
        team_id: Team reported when the player has no events yet

    Returns:
        PlayerAggregate for the player
    """
    aggregate = PlayerAggregate(player=player_id, team=team_id)
    for event in events:
        if event.player != player_id:
            continue
        aggregate.team = event.team
        aggregate.stat_counts[event.stat_type] = aggregate.stat_counts.get(event.stat_type, 0) + 1
    return _finish_player(aggregate, league)


def aggregate_team(
    events: Iterable[StatEvent],
    team_id: str,
    league: LeagueConfig,
) -> TeamScoreState:
    """Fold the log filtered to one team."""
    box = fold(events, league, [team_id])
    return box.teams[team_id]


def fold(
    events: Iterable[StatEvent],
    league: LeagueConfig,
    team_ids: Optional[Iterable[str]] = None,
) -> BoxScore:
    """
    Full fold of the log into a BoxScore.

    Args:
        events: Event log
        league: Supplies scoring weights and foul rules
        team_ids: Teams always present in the result, even with no events

    Returns:
        BoxScore with one aggregate per player that has events
    """
    players: Dict[str, PlayerAggregate] = {}
    for event in events:
        aggregate = players.get(event.player)
        if aggregate is None:
            aggregate = players[event.player] = PlayerAggregate(player=event.player, team=event.team)
        aggregate.stat_counts[event.stat_type] = aggregate.stat_counts.get(event.stat_type, 0) + 1

    for aggregate in players.values():
        _finish_player(aggregate, league)

    teams: Dict[str, TeamScoreState] = {}
    for team_id in list(team_ids or []) + [p.team for p in players.values()]:
        if team_id not in teams:
            teams[team_id] = _finish_team(TeamScoreState(team=team_id), players.values())
    return BoxScore(players=players, teams=teams)


class AggregateCache:
    """
    Incrementally maintained aggregates.

    Only stat counts are stored; derived totals are recomputed for the
    touched player on every change, and keys whose count drops to zero are
    removed so the cache compares equal to a fresh fold after undo.
    """

    def __init__(self, league: LeagueConfig, team_ids: Iterable[str]):
        self.league = league
        self.team_ids = list(team_ids)
        self._players: Dict[str, PlayerAggregate] = {}

    @classmethod
    def from_events(
        cls,
        events: Iterable[StatEvent],
        league: LeagueConfig,
        team_ids: Iterable[str],
    ) -> "AggregateCache":
        cache = cls(league, team_ids)
        cache.apply(events)
        return cache

    def apply(self, events: Iterable[StatEvent]) -> None:
        """Add appended events to the totals."""
        for event in events:
            aggregate = self._players.get(event.player)
            if aggregate is None:
                aggregate = self._players[event.player] = PlayerAggregate(
                    player=event.player, team=event.team
                )
            counts = aggregate.stat_counts
            counts[event.stat_type] = counts.get(event.stat_type, 0) + 1
            _finish_player(aggregate, self.league)

    def revert(self, events: Iterable[StatEvent]) -> None:
        """Subtract removed events from the totals."""
        for event in events:
            aggregate = self._players.get(event.player)
            if aggregate is None or event.stat_type not in aggregate.stat_counts:
                logger.warning("Reverting event %s that was never applied", event.id)
                continue
            counts = aggregate.stat_counts
            counts[event.stat_type] -= 1
            if counts[event.stat_type] <= 0:
                del counts[event.stat_type]
            if not counts:
                del self._players[event.player]
            else:
                _finish_player(aggregate, self.league)

    def player(self, player_id: str, team_id: str = "") -> PlayerAggregate:
        """Return a copy of the player's aggregate (zeroed if no events)."""
        aggregate = self._players.get(player_id)
        if aggregate is None:
            return PlayerAggregate(player=player_id, team=team_id)
        return PlayerAggregate(
            player=aggregate.player,
            team=aggregate.team,
            stat_counts=dict(aggregate.stat_counts),
            points=aggregate.points,
            rebounds=aggregate.rebounds,
            fouls=aggregate.fouls,
            has_fouled_out=aggregate.has_fouled_out,
        )

    def team(self, team_id: str) -> TeamScoreState:
        return _finish_team(TeamScoreState(team=team_id), self._players.values())

    def box_score(self) -> BoxScore:
        players = {pid: self.player(pid) for pid in self._players}
        teams: Dict[str, TeamScoreState] = {}
        for team_id in self.team_ids + [p.team for p in players.values()]:
            if team_id not in teams:
                teams[team_id] = self.team(team_id)
        return BoxScore(players=players, teams=teams)

    def has_fouled_out(self, player_id: str) -> bool:
        aggregate = self._players.get(player_id)
        return aggregate is not None and aggregate.has_fouled_out

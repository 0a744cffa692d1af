"""Dataclasses representing aggregates derived from the event log."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class PlayerAggregate:
    """Totals for a single player, folded from the event log."""

    player: str
    team: str
    stat_counts: Dict[str, int] = field(default_factory=dict)
    points: int = 0
    rebounds: int = 0
    fouls: int = 0
    has_fouled_out: bool = False

    def count(self, stat_type: str) -> int:
        return self.stat_counts.get(stat_type, 0)

    @property
    def assists(self) -> int:
        return self.count("assist")

    @property
    def steals(self) -> int:
        return self.count("steal")

    @property
    def blocks(self) -> int:
        return self.count("block")

    @property
    def turnovers(self) -> int:
        return self.count("turnover")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "player": self.player,
            "team": self.team,
            "stats": dict(self.stat_counts),
            "points": self.points,
            "rebounds": self.rebounds,
            "fouls": self.fouls,
            "has_fouled_out": self.has_fouled_out,
        }


@dataclass
class TeamScoreState:
    """Score and team totals for one team."""

    team: str
    score: int = 0
    rebounds: int = 0
    assists: int = 0
    turnovers: int = 0
    fouls: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "team": self.team,
            "score": self.score,
            "rebounds": self.rebounds,
            "assists": self.assists,
            "turnovers": self.turnovers,
            "fouls": self.fouls,
        }


@dataclass
class BoxScore:
    """Every player aggregate plus both team score states."""

    players: Dict[str, PlayerAggregate] = field(default_factory=dict)
    teams: Dict[str, TeamScoreState] = field(default_factory=dict)

    def leading_team(self) -> Optional[str]:
        """Team id with the higher score, or None when tied."""
        states: List[TeamScoreState] = list(self.teams.values())
        if len(states) != 2 or states[0].score == states[1].score:
            return None
        return max(states, key=lambda s: s.score).team

    def to_dict(self) -> Dict[str, Any]:
        return {
            "team_scores": [t.to_dict() for t in self.teams.values()],
            "player_stats": [p.to_dict() for p in self.players.values()],
            "leading_team": self.leading_team(),
        }

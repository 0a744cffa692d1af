"""
League configuration model for the Courtside game tracker.

A league supplies everything sport-specific the tracking core needs: the
scoring-weight table, the legal stat types, foul-out rules, the period
structure and the number of starters.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from ..utils.constants import (
    COURT_DIMENSIONS, DEFAULT_OVERTIME_MINUTES, DEFAULT_PERIOD_MINUTES,
    DEFAULT_PERIOD_TYPE, DEFAULT_SPORT, DEFAULT_STARTERS_COUNT,
    FALLBACK_OVERTIME_MINUTES, FALLBACK_PERIOD_MINUTES, FOUL_OUT_LIMIT_BY_SPORT,
    FOUL_STAT_TYPES_BY_SPORT, OVERTIME_PREFIX, PERIOD_LABELS,
    SCORING_RULES_BY_SPORT, STARTERS_BY_SPORT, STAT_TYPES_BY_SPORT,
)


@dataclass
class LeagueConfig:
    """
    Sport and league settings consumed by the tracking core.

    Attributes:
        sport_type: Sport key (e.g. "basketball", "hockey")
        period_type: One of "halves", "quarters" or "periods"
        period_duration_minutes: Regulation period length
        overtime_duration_minutes: Overtime period length
        scoring_rules: Points credited per stat type
        stat_types: Stat types that may be recorded for this sport
        foul_stat_types: Stat types counted towards foul-out
        foul_out_limit: Fouls at which a player fouls out (None disables)
        starters_count: Maximum simultaneously active players per team
    """
    sport_type: str = DEFAULT_SPORT
    period_type: str = "halves"
    period_duration_minutes: int = 24
    overtime_duration_minutes: int = 5
    scoring_rules: Dict[str, int] = field(default_factory=dict)
    stat_types: List[str] = field(default_factory=list)
    foul_stat_types: List[str] = field(default_factory=list)
    foul_out_limit: Optional[int] = None
    starters_count: int = DEFAULT_STARTERS_COUNT

    def __post_init__(self) -> None:
        if self.period_type not in PERIOD_LABELS:
            raise ValueError(f"Unknown period type: {self.period_type}")
        if self.period_duration_minutes <= 0 or self.overtime_duration_minutes <= 0:
            raise ValueError("Period durations must be positive")
        if self.starters_count < 1:
            raise ValueError("starters_count must be at least 1")

    @classmethod
    def for_sport(cls, sport_type: str = DEFAULT_SPORT, **overrides: Any) -> "LeagueConfig":
        """
        Build a configuration from the sport defaults.

        Args:
            sport_type: Sport key
            **overrides: Any field to override; an explicit None is kept

        Returns:
            LeagueConfig instance
        """
        settings: Dict[str, Any] = {
            "sport_type": sport_type,
            "period_type": DEFAULT_PERIOD_TYPE.get(sport_type, "halves"),
            "period_duration_minutes": DEFAULT_PERIOD_MINUTES.get(sport_type, FALLBACK_PERIOD_MINUTES),
            "overtime_duration_minutes": DEFAULT_OVERTIME_MINUTES.get(sport_type, FALLBACK_OVERTIME_MINUTES),
            "scoring_rules": dict(SCORING_RULES_BY_SPORT.get(sport_type, {})),
            "stat_types": list(STAT_TYPES_BY_SPORT.get(sport_type, [])),
            "foul_stat_types": list(FOUL_STAT_TYPES_BY_SPORT.get(sport_type, [])),
            "foul_out_limit": FOUL_OUT_LIMIT_BY_SPORT.get(sport_type),
            "starters_count": STARTERS_BY_SPORT.get(sport_type, DEFAULT_STARTERS_COUNT),
        }
        settings.update(overrides)
        return cls(**settings)

    @property
    def period_seconds(self) -> int:
        return self.period_duration_minutes * 60

    @property
    def overtime_seconds(self) -> int:
        return self.overtime_duration_minutes * 60

    @property
    def regular_periods(self) -> List[str]:
        return list(PERIOD_LABELS[self.period_type])

    @property
    def court_dimensions(self) -> Optional[Tuple[float, float]]:
        return COURT_DIMENSIONS.get(self.sport_type)

    def is_legal_stat_type(self, stat_type: str) -> bool:
        return stat_type in self.stat_types

    def point_value(self, stat_type: str) -> int:
        return int(self.scoring_rules.get(stat_type, 0))

    def duration_for_period(self, period: str) -> int:
        """Return the full clock length, in seconds, for a period label."""
        return self.overtime_seconds if is_overtime(period) else self.period_seconds

    def is_valid_period(self, period: str) -> bool:
        """Accept regular labels for this period type and OT1, OT2, ..."""
        if period in PERIOD_LABELS[self.period_type]:
            return True
        return overtime_number(period) > 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "sport_type": self.sport_type,
            "period_type": self.period_type,
            "period_duration_minutes": self.period_duration_minutes,
            "overtime_duration_minutes": self.overtime_duration_minutes,
            "scoring_rules": dict(self.scoring_rules),
            "stat_types": list(self.stat_types),
            "foul_stat_types": list(self.foul_stat_types),
            "foul_out_limit": self.foul_out_limit,
            "starters_count": self.starters_count,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "LeagueConfig":
        """Create from dictionary, falling back to sport defaults for missing keys."""
        if not data:
            return cls.for_sport()
        sport = data.get("sport_type", DEFAULT_SPORT)
        overrides = {k: v for k, v in data.items() if k in cls.__dataclass_fields__ and k != "sport_type"}
        return cls.for_sport(sport, **overrides)


def is_overtime(period: str) -> bool:
    return overtime_number(period) > 0


def overtime_number(period: str) -> int:
    """Return N for an "OTN" label, 0 for anything else."""
    if not period or not period.startswith(OVERTIME_PREFIX):
        return 0
    suffix = period[len(OVERTIME_PREFIX):]
    if not suffix.isdigit():
        return 0
    return int(suffix)

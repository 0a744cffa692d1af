"""
Pairing resolver for paired stat actions.

Some primary actions imply a second question: a missed shot asks who
rebounded, a made shot may credit an assist, a steal always implies a
turnover on the other team. The whole mapping lives in PAIRING_TABLE and
is consumed by the pure ``resolve`` function.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Collection, Dict, List, Mapping, Optional, Sequence

from ..utils.constants import STAT_LABELS

# Secondary placeholder resolved against the respondent's team
CONTEXTUAL_REBOUND = "rebound"


class RespondentPool(Enum):
    """Which active players may answer a follow-up."""
    BOTH_TEAMS = "both_teams"
    TEAMMATES = "teammates"
    OPPONENTS = "opponents"


@dataclass(frozen=True)
class PairingRule:
    """
    One row of the pairing table.

    Attributes:
        pool: Respondent pool
        allow_none: True when "nobody" is a legal answer
        secondary: Stat type synthesized for the respondent, CONTEXTUAL_REBOUND,
                   or None when the respondent is only recorded on the primary
        question: Prompt shown to the scorekeeper
    """
    pool: RespondentPool
    allow_none: bool
    secondary: Optional[str]
    question: str


_MISSED_SHOT = PairingRule(RespondentPool.BOTH_TEAMS, True, CONTEXTUAL_REBOUND, "Who got the rebound?")
_MADE_SHOT = PairingRule(RespondentPool.TEAMMATES, True, "assist", "Who assisted?")

PAIRING_TABLE: Dict[str, PairingRule] = {
    "twoPointFGA": _MISSED_SHOT,
    "threePointFGA": _MISSED_SHOT,
    "freeThrowA": _MISSED_SHOT,
    "twoPointFGM": _MADE_SHOT,
    "threePointFGM": _MADE_SHOT,
    "offensiveRebound": PairingRule(RespondentPool.TEAMMATES, False, "twoPointFGA", "Who missed the shot?"),
    "assist": PairingRule(RespondentPool.TEAMMATES, False, "twoPointFGM", "Who made the shot?"),
    "defensiveRebound": PairingRule(RespondentPool.OPPONENTS, False, "twoPointFGA", "Who missed the shot?"),
    "personalFoul": PairingRule(RespondentPool.OPPONENTS, False, None, "Who was fouled?"),
    "drawnFoul": PairingRule(RespondentPool.OPPONENTS, False, "personalFoul", "Who committed the foul?"),
    "steal": PairingRule(RespondentPool.OPPONENTS, False, "turnover", "Who turned it over?"),
    "turnover": PairingRule(RespondentPool.OPPONENTS, False, "steal", "Who got the steal?"),
    "block": PairingRule(RespondentPool.OPPONENTS, False, "blockedShotAttempt", "Whose shot was blocked?"),
    "blockedShotAttempt": PairingRule(RespondentPool.OPPONENTS, False, "block", "Who blocked the shot?"),
}


@dataclass(frozen=True)
class FollowUp:
    """
    A pending follow-up question.

    Attributes:
        stat_type: Primary stat type that raised the question
        actor: Player id that performed the primary action
        actor_team: Team id of the actor
        respondents: Player ids allowed to answer, in roster order
        allow_none: True when "nobody" is a legal answer
        secondary: Secondary stat type rule (see PairingRule.secondary)
        question: Prompt shown to the scorekeeper
    """
    stat_type: str
    actor: str
    actor_team: str
    respondents: List[str] = field(default_factory=list)
    allow_none: bool = False
    secondary: Optional[str] = None
    question: str = ""

    def accepts(self, respondent: Optional[str]) -> bool:
        if respondent is None:
            return self.allow_none
        return respondent in self.respondents

    def to_dict(self) -> Dict[str, object]:
        return {
            "stat_type": self.stat_type,
            "stat_label": STAT_LABELS.get(self.stat_type, self.stat_type),
            "actor": self.actor,
            "actor_team": self.actor_team,
            "respondents": list(self.respondents),
            "allow_none": self.allow_none,
            "secondary": self.secondary,
            "question": self.question,
        }


def _rule_is_legal(stat_type: str, rule: PairingRule, legal_stat_types: Collection[str]) -> bool:
    if stat_type not in legal_stat_types:
        return False
    if rule.secondary is None:
        return True
    if rule.secondary == CONTEXTUAL_REBOUND:
        return "offensiveRebound" in legal_stat_types and "defensiveRebound" in legal_stat_types
    return rule.secondary in legal_stat_types


def _team_of(player_id: str, active_roster: Mapping[str, Sequence[str]]) -> str:
    for team_id, players in active_roster.items():
        if player_id in players:
            return team_id
    raise ValueError(f"Player {player_id} is not active on either team")


def resolve(
    stat_type: str,
    actor: str,
    active_roster: Mapping[str, Sequence[str]],
    legal_stat_types: Optional[Collection[str]] = None,
) -> Optional[FollowUp]:
    """
    Decide whether a primary action needs a follow-up.

    Args:
        stat_type: Primary stat type
        actor: Acting player id
        active_roster: Eligible player ids per team id (exactly two teams)
        legal_stat_types: Stat types the league allows; rows whose primary or
                          synthesized secondary falls outside it are skipped

    Returns:
        FollowUp describing the question, or None for single-event actions

    Raises:
        ValueError: If the actor is not in the active roster
    """
    rule = PAIRING_TABLE.get(stat_type)
    if rule is None:
        return None
    if legal_stat_types is not None and not _rule_is_legal(stat_type, rule, legal_stat_types):
        return None

    actor_team = _team_of(actor, active_roster)
    if rule.pool is RespondentPool.TEAMMATES:
        respondents = [p for p in active_roster[actor_team] if p != actor]
    elif rule.pool is RespondentPool.OPPONENTS:
        respondents = [
            p for team_id, players in active_roster.items() if team_id != actor_team
            for p in players
        ]
    else:
        # Rebound pool lists the shooter's team first and includes the shooter
        respondents = list(active_roster[actor_team]) + [
            p for team_id, players in active_roster.items() if team_id != actor_team
            for p in players
        ]

    return FollowUp(
        stat_type=stat_type,
        actor=actor,
        actor_team=actor_team,
        respondents=respondents,
        allow_none=rule.allow_none,
        secondary=rule.secondary,
        question=rule.question,
    )


def secondary_stat_type(follow_up: FollowUp, respondent_team: str) -> Optional[str]:
    """
    Stat type to record for the chosen respondent.

    Rebounds are offensive when the respondent plays for the shooter's team
    and defensive otherwise.
    """
    if follow_up.secondary == CONTEXTUAL_REBOUND:
        if respondent_team == follow_up.actor_team:
            return "offensiveRebound"
        return "defensiveRebound"
    return follow_up.secondary

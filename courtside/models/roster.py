"""
Roster models for the Courtside game tracker.

Each of the two teams in a game carries its season roster (members), the
players currently on the court or field (active), and the working set used
while the scorekeeper edits substitutions (selected).
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class RosterMember:
    """
    A player as delivered by the roster feed.

    Attributes:
        player_id: Unique player id
        name: Display name
        is_active: Season roster flag; inactive members never start
        jersey_number: Optional jersey number
        is_ringer: True for players added to the roster mid-game
    """
    player_id: str
    name: str
    is_active: bool = True
    jersey_number: Optional[str] = ""
    is_ringer: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "player_id": self.player_id,
            "name": self.name,
            "is_active": self.is_active,
            "jersey_number": self.jersey_number,
            "is_ringer": self.is_ringer,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RosterMember":
        """Create from dictionary for JSON deserialization."""
        return cls(
            player_id=str(data["player_id"]),
            name=data.get("name", ""),
            is_active=data.get("is_active", True),
            jersey_number=data.get("jersey_number", ""),
            is_ringer=data.get("is_ringer", False),
        )


@dataclass
class TeamRoster:
    """
    Roster state for one team.

    Attributes:
        team_id: Unique team id
        name: Display name
        members: Season roster in feed order
        active: Player ids currently fielded
        selected: Substitution working set, edited independently of active
    """
    team_id: str
    name: str = ""
    members: List[RosterMember] = field(default_factory=list)
    active: List[str] = field(default_factory=list)
    selected: List[str] = field(default_factory=list)

    def member(self, player_id: str) -> Optional[RosterMember]:
        for member in self.members:
            if member.player_id == player_id:
                return member
        return None

    def has_member(self, player_id: str) -> bool:
        return self.member(player_id) is not None

    def default_starters(self, starters_count: int) -> List[str]:
        """First `starters_count` members flagged active, in roster order."""
        return [m.player_id for m in self.members if m.is_active][:starters_count]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "team_id": self.team_id,
            "name": self.name,
            "members": [m.to_dict() for m in self.members],
            "active": list(self.active),
            "selected": list(self.selected),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TeamRoster":
        """Create from dictionary for JSON deserialization."""
        return cls(
            team_id=str(data["team_id"]),
            name=data.get("name", ""),
            members=[RosterMember.from_dict(m) for m in data.get("members", [])],
            active=[str(p) for p in data.get("active", [])],
            selected=[str(p) for p in data.get("selected", [])],
        )

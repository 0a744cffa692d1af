"""
Stat event models for the Courtside game tracker.

A StatEvent is one immutable recorded game action. Events are only ever
created in groups of one or two by a single scorekeeper action; that group
is a Transaction and is the unit undo works on.
"""
import uuid
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Tuple


def new_id() -> str:
    """Return a fresh opaque identifier for events and transactions."""
    return uuid.uuid4().hex


@dataclass(frozen=True)
class CourtLocation:
    """Shot location in court coordinates (feet from the left baseline / sideline)."""
    x: float
    y: float

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional["CourtLocation"]:
        if not data:
            return None
        return cls(x=float(data["x"]), y=float(data["y"]))


@dataclass(frozen=True)
class StatEvent:
    """
    One immutable recorded game action.

    Attributes:
        id: Unique event id
        player: Player id the stat is credited to
        team: Team id of the player
        stat_type: Stat type key (e.g. "twoPointFGM")
        period: Period label at the time of the action (e.g. "Q2", "OT1")
        clock_seconds: Seconds remaining on the clock at the time of the action
        recorded_at: Wall-clock epoch seconds when the event was recorded
        transaction_id: Id of the transaction that created the event
        related_player: Opponent involved without being credited (fouled player)
        location: Optional shot location
        player_name: Display name captured at record time
    """
    id: str
    player: str
    team: str
    stat_type: str
    period: str
    clock_seconds: int
    recorded_at: float
    transaction_id: str
    related_player: Optional[str] = None
    location: Optional[CourtLocation] = None
    player_name: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "player": self.player,
            "team": self.team,
            "stat_type": self.stat_type,
            "period": self.period,
            "clock_seconds": self.clock_seconds,
            "recorded_at": self.recorded_at,
            "transaction_id": self.transaction_id,
            "related_player": self.related_player,
            "location": self.location.to_dict() if self.location else None,
            "player_name": self.player_name,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StatEvent":
        """Create from dictionary for JSON deserialization."""
        return cls(
            id=data["id"],
            player=data["player"],
            team=data["team"],
            stat_type=data["stat_type"],
            period=data["period"],
            clock_seconds=int(data["clock_seconds"]),
            recorded_at=float(data["recorded_at"]),
            transaction_id=data["transaction_id"],
            related_player=data.get("related_player"),
            location=CourtLocation.from_dict(data.get("location")),
            player_name=data.get("player_name", ""),
        )


@dataclass(frozen=True)
class Transaction:
    """A primary event and, optionally, the secondary event resolved from it."""
    id: str
    events: Tuple[StatEvent, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not 1 <= len(self.events) <= 2:
            raise ValueError("A transaction holds one or two events")
        if any(event.transaction_id != self.id for event in self.events):
            raise ValueError("Every event must carry the transaction id")

    @property
    def primary(self) -> StatEvent:
        return self.events[0]

    @property
    def secondary(self) -> Optional[StatEvent]:
        return self.events[1] if len(self.events) > 1 else None

    @property
    def event_ids(self) -> List[str]:
        return [event.id for event in self.events]

    @classmethod
    def build(
        cls,
        primary: StatEvent,
        secondary: Optional[StatEvent] = None,
    ) -> "Transaction":
        """Group events under the primary's transaction id."""
        events = [primary]
        if secondary is not None:
            events.append(replace(secondary, transaction_id=primary.transaction_id))
        return cls(id=primary.transaction_id, events=tuple(events))

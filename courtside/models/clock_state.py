"""Clock state model for the Courtside game tracker."""
from dataclasses import dataclass
from typing import Any, Dict


@dataclass
class ClockState:
    """
    Game clock state.

    Attributes:
        running: True while the clock counts down
        seconds_remaining: Seconds left in the current period
        period: Current period label (e.g. "H1", "Q3", "OT1")
    """
    running: bool = False
    seconds_remaining: int = 0
    period: str = "H1"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "running": self.running,
            "seconds_remaining": self.seconds_remaining,
            "period": self.period,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ClockState":
        return cls(
            running=bool(data.get("running", False)),
            seconds_remaining=int(data.get("seconds_remaining", 0)),
            period=data.get("period", "H1"),
        )

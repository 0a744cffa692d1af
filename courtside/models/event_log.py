"""
Event log model for the Courtside game tracker.

The event log is the single source of truth for a game: every aggregate,
score and box score is a view computed from it.
"""
from typing import Iterable, Iterator, List, Optional

from .stat_event import StatEvent, Transaction


class EventLog:
    """
    Ordered, append-only sequence of stat events.

    Appending a whole transaction is the only way to grow the log. Removing
    the events of one transaction is the only retroactive mutation and is
    reserved for undo.
    """

    def __init__(self, events: Optional[Iterable[StatEvent]] = None):
        self._events: List[StatEvent] = list(events or [])

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[StatEvent]:
        return iter(list(self._events))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EventLog):
            return NotImplemented
        return self._events == other._events

    @property
    def events(self) -> List[StatEvent]:
        """Return a copy of the events in insertion order."""
        return list(self._events)

    def append(self, transaction: Transaction) -> None:
        """Append every event of the transaction as one unit."""
        self._events = self._events + list(transaction.events)

    def remove_transaction(self, transaction_id: str) -> List[StatEvent]:
        """
        Remove all events belonging to a transaction.

        Args:
            transaction_id: Id of the transaction to remove

        Returns:
            The removed events, in log order (empty if none matched)
        """
        removed = [e for e in self._events if e.transaction_id == transaction_id]
        if removed:
            self._events = [e for e in self._events if e.transaction_id != transaction_id]
        return removed

    def latest(self) -> Optional[StatEvent]:
        """Return the most recently recorded event by timestamp, not position."""
        if not self._events:
            return None
        return max(reversed(self._events), key=lambda e: e.recorded_at)

    # ------------------------------------------------------------------
    # Filtered views
    # ------------------------------------------------------------------
    def for_player(self, player_id: str) -> List[StatEvent]:
        return [e for e in self._events if e.player == player_id]

    def for_team(self, team_id: str) -> List[StatEvent]:
        return [e for e in self._events if e.team == team_id]

    def for_period(self, period: str) -> List[StatEvent]:
        return [e for e in self._events if e.period == period]

    def filter(
        self,
        team: Optional[str] = None,
        period: Optional[str] = None,
        player: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[StatEvent]:
        """
        Play-by-play view: matching events, most recent first.

        Args:
            team: Only events for this team id
            period: Only events in this period label
            player: Only events credited to this player id
            limit: Return at most this many events

        Returns:
            Events sorted newest first by record time
        """
        events = [
            e for e in self._events
            if (team is None or e.team == team)
            and (period is None or e.period == period)
            and (player is None or e.player == player)
        ]
        # Ties on record time keep the later log position first
        events.reverse()
        events.sort(key=lambda e: e.recorded_at, reverse=True)
        if limit is not None:
            events = events[:max(0, limit)]
        return events

    def periods(self) -> List[str]:
        """Return the distinct period labels present in the log, sorted."""
        return sorted({e.period for e in self._events})

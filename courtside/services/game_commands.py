"""
Command pattern implementation for stat recording.

A recorded transaction is wrapped in a command so the undo controller can
remove exactly the events it appended. Only the most recent command is
remembered.
"""
import logging
from abc import ABC, abstractmethod
from typing import Optional

from ..models import EventLog, Transaction
from ..utils.constants import STAT_LABELS
from .aggregation_service import AggregateCache

logger = logging.getLogger(__name__)


class Command(ABC):
    """Abstract base class for all game commands - Command pattern."""

    @abstractmethod
    def execute(self) -> bool:
        """
        Execute the command.

        Returns:
            True if command executed successfully, False otherwise
        """
        pass

    @abstractmethod
    def undo(self) -> bool:
        """
        Undo the command.

        Returns:
            True if command undone successfully, False otherwise
        """
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Get human-readable description of the command."""
        pass


class RecordTransactionCommand(Command):
    """Command to append a transaction to the log and the aggregate cache."""

    def __init__(self, event_log: EventLog, aggregates: AggregateCache, transaction: Transaction):
        self.event_log = event_log
        self.aggregates = aggregates
        self.transaction = transaction
        self._executed = False

    def execute(self) -> bool:
        """Append the transaction's events as one unit."""
        if self._executed:
            return False
        self.event_log.append(self.transaction)
        self.aggregates.apply(self.transaction.events)
        self._executed = True
        return True

    def undo(self) -> bool:
        """Remove every event carrying this transaction's id."""
        if not self._executed:
            return False
        removed = self.event_log.remove_transaction(self.transaction.id)
        self.aggregates.revert(removed)
        self._executed = False
        return bool(removed)

    @property
    def description(self) -> str:
        parts = [
            f"{STAT_LABELS.get(e.stat_type, e.stat_type)} - {e.player_name or e.player}"
            for e in self.transaction.events
        ]
        return " / ".join(parts)


class UndoController:
    """
    Single-level undo over recorded transactions.

    Recording a new command overwrites the previous one; after an undo
    nothing is pending until the next command is recorded.
    """

    def __init__(self):
        self._last: Optional[Command] = None

    def execute_command(self, command: Command) -> bool:
        """
        Execute a command and remember it as the undo target.

        Args:
            command: Command to execute

        Returns:
            True if command executed successfully
        """
        success = command.execute()
        if success:
            self._last = command
        return success

    def undo(self) -> bool:
        """
        Undo the last command.

        Returns:
            True if undo was successful, False when nothing is pending
        """
        if not self.can_undo():
            logger.info("Nothing to undo")
            return False

        command = self._last
        self._last = None
        success = command.undo()
        if success:
            logger.info("Undid %s", command.description)
        else:
            logger.warning("Undo of %s removed nothing", command.description)
        return success

    def can_undo(self) -> bool:
        """Check if undo is available."""
        return self._last is not None

    @property
    def last_description(self) -> Optional[str]:
        return self._last.description if self._last is not None else None

    def clear(self) -> None:
        self._last = None

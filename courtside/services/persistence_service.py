"""
Persistence service for the Courtside game tracker.

This module builds save snapshots of a tracked game and hands them to a
sink. Saves are explicit, never retried, and a failure leaves the in-memory
game untouched.
"""
import datetime
import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..models import BoxScore, GameState
from .errors import PersistenceError

logger = logging.getLogger(__name__)


@dataclass
class SaveResult:
    """Outcome of one save attempt."""
    success: bool
    location: Optional[str] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"success": self.success, "location": self.location, "error": self.error}


class JsonFileSink:
    """
    Sink that writes each snapshot to a timestamped JSON file.

    Args:
        directory: Directory for save files, created on first save
    """

    def __init__(self, directory: str = "saves"):
        self.directory = directory

    def save(self, snapshot: Dict[str, Any]) -> str:
        timestamp = datetime.datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        game_id = snapshot.get("game_id") or "game"
        file_path = os.path.join(self.directory, f"{game_id}_{timestamp}.json")
        PersistenceService.save_snapshot_to_file(snapshot, file_path)
        return file_path


class PersistenceService:
    """
    Service for persisting tracked games.

    The snapshot carries the team scores, player stats and event log plus
    the clock and rosters, so a saved file can be loaded to resume a game.
    """

    def __init__(self, sink: Optional[JsonFileSink] = None):
        self.sink = sink or JsonFileSink()

    @staticmethod
    def create_snapshot(game_state: GameState, box_score: BoxScore) -> Dict[str, Any]:
        """
        Create a snapshot of game state suitable for saving.

        Args:
            game_state: Current game state
            box_score: Aggregates for the current event log

        Returns:
            Dictionary suitable for JSON serialization
        """
        snapshot = game_state.to_json()
        box = box_score.to_dict()
        snapshot["team_scores"] = box["team_scores"]
        snapshot["player_stats"] = box["player_stats"]
        return snapshot

    def save(self, game_state: GameState, box_score: BoxScore) -> SaveResult:
        """
        Save the game through the configured sink.

        Returns:
            SaveResult; failures are reported here rather than raised
        """
        try:
            snapshot = self.create_snapshot(game_state, box_score)
            location = self.sink.save(snapshot)
        except (OSError, TypeError, ValueError, PersistenceError) as e:
            logger.warning("Saving game %s failed: %s", game_state.game_id, e)
            return SaveResult(success=False, error=str(e))
        logger.info("Saved game %s to %s", game_state.game_id, location)
        return SaveResult(success=True, location=location)

    @staticmethod
    def save_snapshot_to_file(snapshot: Dict[str, Any], file_path: str) -> None:
        """
        Write a snapshot to a JSON file.

        Raises:
            OSError: If the file cannot be written
        """
        directory = os.path.dirname(file_path)
        if directory and not os.path.exists(directory):
            os.makedirs(directory)

        with open(file_path, "w", encoding="utf-8") as f:
            json.dump(snapshot, f, indent=2)

    @staticmethod
    def load_game_from_file(file_path: str) -> GameState:
        """
        Load game state from a JSON file.

        Args:
            file_path: Path to the JSON file to load

        Returns:
            GameState instance loaded from file

        Raises:
            FileNotFoundError: If file doesn't exist
            PersistenceError: If the file is not a valid saved game
        """
        if not os.path.exists(file_path):
            raise FileNotFoundError(f"Game file not found: {file_path}")

        with open(file_path, "r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise PersistenceError(f"Invalid game file {file_path}: {e}") from e

        try:
            return GameState.from_json(data)
        except (KeyError, TypeError, ValueError) as e:
            raise PersistenceError(f"Invalid game file {file_path}: {e}") from e

"""
Web application module for the Courtside game tracker.

This module contains the Flask server exposing the tracking commands and
queries as JSON API endpoints for a scorekeeper frontend.
"""
import logging
from typing import Any, Dict, Optional, Tuple

from flask import Flask, jsonify, request

from ..config import Config
from ..models import CourtLocation, GameState, LeagueConfig, RosterMember
from ..services import (
    ConstraintViolation, GameTrackingService, ManualTicker, PersistenceService,
    ServiceFactory, ThreadTicker,
)
from ..services.errors import PersistenceError


class WebAppState:
    """
    State holder for the web application.

    Holds the service factory and the tracking session for the game
    currently loaded, if any.
    """

    def __init__(self, service_factory: ServiceFactory):
        self.service_factory = service_factory
        self.tracking: Optional[GameTrackingService] = None

    def load_game(self, game_state: GameState) -> GameTrackingService:
        """Replace the current session with a new one for the game."""
        if self.tracking is not None:
            self.tracking.close()
        self.tracking = self.service_factory.create_tracking_service(game_state)
        return self.tracking


class NoGameLoaded(Exception):
    pass


def _game_state_from_request(data: Dict[str, Any], default_sport: str) -> GameState:
    """Build a GameState from a roster feed payload."""
    if "league" in data:
        league = LeagueConfig.from_dict(data["league"])
    else:
        league = LeagueConfig.for_sport(data.get("sport_type", default_sport))
    payload = dict(data, league=league.to_dict())
    return GameState.from_json(payload)


def create_app(config_class: type = Config) -> Flask:
    """
    Create and configure the Flask application with API endpoints.

    Args:
        config_class: Settings object loaded into ``app.config``

    Returns:
        Configured Flask application instance
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    ticker_factory = ThreadTicker if app.config["CLOCK_THREAD_ENABLED"] else ManualTicker
    app_state = WebAppState(ServiceFactory(save_dir=app.config["SAVE_DIR"], ticker_factory=ticker_factory))
    app.extensions["courtside"] = app_state

    def _tracking() -> GameTrackingService:
        if app_state.tracking is None:
            raise NoGameLoaded("No game loaded")
        return app_state.tracking

    def _error(e: Exception) -> Tuple[Any, int]:
        if isinstance(e, NoGameLoaded):
            return jsonify({"success": False, "error": str(e)}), 404
        if isinstance(e, ConstraintViolation):
            app.logger.warning("Rejected %s %s: %s", request.method, request.path, e)
            payload: Dict[str, Any] = {"success": False, "error": str(e), "type": type(e).__name__}
            if getattr(e, "teams", None):
                payload["teams"] = e.teams
            return jsonify(payload), 400
        app.logger.exception("Unexpected error on %s %s", request.method, request.path)
        return jsonify({"success": False, "error": str(e)}), 500

    def _json() -> Dict[str, Any]:
        return request.get_json(silent=True) or {}

    # ==================== Game Endpoints ==================== #

    @app.route("/api/state", methods=["GET"])
    def get_state():
        """Get the full scorekeeper view of the current game."""
        try:
            return jsonify({"success": True, "state": _tracking().state()})
        except Exception as e:
            return _error(e)

    @app.route("/api/game/load", methods=["POST"])
    def load_game():
        """Start tracking a game from a roster feed or resume a saved file."""
        try:
            data = _json()
            if data.get("file_path"):
                game_state = PersistenceService.load_game_from_file(data["file_path"])
            else:
                if len(data.get("teams", [])) != 2:
                    return jsonify({"success": False, "error": "Exactly two teams are required"}), 400
                game_state = _game_state_from_request(data, app.config["DEFAULT_SPORT"])
            tracking = app_state.load_game(game_state)
            app.logger.info("Loaded game %s (%d events)", game_state.game_id, len(game_state.event_log))
            return jsonify({"success": True, "state": tracking.state()})
        except FileNotFoundError as e:
            return jsonify({"success": False, "error": str(e)}), 404
        except (PersistenceError, KeyError, TypeError, ValueError) as e:
            return jsonify({"success": False, "error": str(e)}), 400
        except Exception as e:
            return _error(e)

    @app.route("/api/save", methods=["POST"])
    def save_game():
        """Explicit save point; failures are reported, never retried."""
        try:
            result = _tracking().save()
            status = 200 if result.success else 500
            return jsonify(result.to_dict()), status
        except Exception as e:
            return _error(e)

    # ==================== Stat Endpoints ==================== #

    @app.route("/api/stats", methods=["POST"])
    def record_stat():
        """Record a primary stat; may return a follow-up question."""
        try:
            data = _json()
            location = CourtLocation.from_dict(data.get("location"))
            result = _tracking().record_primary_stat(
                str(data.get("player_id", "")),
                data.get("stat_type", ""),
                period=data.get("period"),
                clock_seconds=data.get("clock_seconds"),
                location=location,
            )
            return jsonify(dict(result.to_dict(), success=True))
        except (KeyError, TypeError, ValueError) as e:
            return jsonify({"success": False, "error": f"Invalid request: {e}"}), 400
        except Exception as e:
            return _error(e)

    @app.route("/api/stats/follow-up", methods=["POST"])
    def resolve_follow_up():
        """Answer the pending follow-up; ``player_id`` null means nobody."""
        try:
            respondent = _json().get("player_id")
            transaction = _tracking().resolve_follow_up(str(respondent) if respondent is not None else None)
            return jsonify({"success": True, "events": [e.to_dict() for e in transaction.events]})
        except Exception as e:
            return _error(e)

    @app.route("/api/stats/follow-up/cancel", methods=["POST"])
    def cancel_follow_up():
        try:
            _tracking().cancel_follow_up()
            return jsonify({"success": True, "message": "Follow-up cancelled"})
        except Exception as e:
            return _error(e)

    @app.route("/api/undo", methods=["POST"])
    def undo_action():
        """Undo the last recorded transaction using Command pattern."""
        try:
            if _tracking().undo():
                return jsonify({"success": True, "message": "Action undone"})
            return jsonify({"success": False, "message": "Nothing to undo"}), 400
        except Exception as e:
            return _error(e)

    @app.route("/api/box-score", methods=["GET"])
    def get_box_score():
        try:
            return jsonify({"success": True, "box_score": _tracking().box_score().to_dict()})
        except Exception as e:
            return _error(e)

    @app.route("/api/players/<player_id>/stats", methods=["GET"])
    def get_player_stats(player_id: str):
        try:
            tracking = _tracking()
            if tracking.game_state.team_of_player(player_id) is None:
                return jsonify({"success": False, "error": "Player not found"}), 404
            return jsonify({"success": True, "stats": tracking.player_aggregate(player_id).to_dict()})
        except Exception as e:
            return _error(e)

    @app.route("/api/teams/<team_id>/score", methods=["GET"])
    def get_team_score(team_id: str):
        try:
            tracking = _tracking()
            if tracking.game_state.team(team_id) is None:
                return jsonify({"success": False, "error": "Team not found"}), 404
            return jsonify({"success": True, "score": tracking.team_score(team_id).to_dict()})
        except Exception as e:
            return _error(e)

    @app.route("/api/play-by-play", methods=["GET"])
    def get_play_by_play():
        """Events newest first, filtered by team, period, player and limit."""
        try:
            limit = request.args.get("limit", type=int)
            events = _tracking().play_by_play(
                team=request.args.get("team") or None,
                period=request.args.get("period") or None,
                player=request.args.get("player") or None,
                limit=limit,
            )
            return jsonify({"success": True, "events": [e.to_dict() for e in events]})
        except Exception as e:
            return _error(e)

    # ==================== Clock Endpoints ==================== #

    @app.route("/api/clock/toggle", methods=["POST"])
    def toggle_clock():
        try:
            return jsonify({"success": True, "clock": _tracking().toggle_clock().to_dict()})
        except Exception as e:
            return _error(e)

    @app.route("/api/clock/period", methods=["POST"])
    def change_period():
        try:
            clock = _tracking().change_period(_json().get("period", ""))
            return jsonify({"success": True, "clock": clock.to_dict()})
        except Exception as e:
            return _error(e)

    @app.route("/api/clock/time", methods=["POST"])
    def edit_time():
        """Set the clock from ``seconds`` or ``minutes``/``seconds`` parts."""
        try:
            data = _json()
            if "minutes" in data:
                seconds = int(data.get("minutes") or 0) * 60 + int(data.get("seconds") or 0)
            else:
                seconds = data.get("seconds")
            clock = _tracking().edit_time(seconds)
            return jsonify({"success": True, "clock": clock.to_dict()})
        except (TypeError, ValueError) as e:
            return jsonify({"success": False, "error": f"Invalid time: {e}"}), 400
        except Exception as e:
            return _error(e)

    # ==================== Roster Endpoints ==================== #

    @app.route("/api/substitutions/begin", methods=["POST"])
    def begin_substitution():
        try:
            tracking = _tracking()
            tracking.begin_substitution()
            return jsonify({"success": True, "roster": tracking.roster_state()})
        except Exception as e:
            return _error(e)

    @app.route("/api/substitutions/toggle", methods=["POST"])
    def toggle_selected():
        try:
            data = _json()
            selected = _tracking().toggle_selected(str(data.get("team_id", "")), str(data.get("player_id", "")))
            return jsonify({"success": True, "selected": selected})
        except Exception as e:
            return _error(e)

    @app.route("/api/substitutions/confirm", methods=["POST"])
    def confirm_substitution():
        try:
            active = _tracking().confirm_substitution()
            return jsonify({"success": True, "active": active})
        except Exception as e:
            return _error(e)

    @app.route("/api/substitutions/cancel", methods=["POST"])
    def cancel_substitution():
        try:
            tracking = _tracking()
            tracking.cancel_substitution()
            return jsonify({"success": True, "roster": tracking.roster_state()})
        except Exception as e:
            return _error(e)

    @app.route("/api/roster/ringer", methods=["POST"])
    def add_ringer():
        """Add a player to a team mid-game."""
        try:
            data = _json()
            name = (data.get("name") or "").strip()
            if not name or not data.get("player_id"):
                return jsonify({"success": False, "error": "player_id and name are required"}), 400
            member = RosterMember(
                player_id=str(data["player_id"]),
                name=name,
                jersey_number=data.get("jersey_number", ""),
            )
            member = _tracking().add_ringer(str(data.get("team_id", "")), member)
            return jsonify({"success": True, "player": member.to_dict()})
        except Exception as e:
            return _error(e)

    return app


def run_web_app(host: Optional[str] = None, port: Optional[int] = None) -> None:
    """
    Run the web application.

    Args:
        host: Host address to bind to (default: Config.HOST)
        port: Port number to listen on (default: Config.PORT)
    """
    logging.basicConfig(
        level=getattr(logging, Config.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = create_app()
    app.run(host=host or Config.HOST, port=port or Config.PORT, debug=False)


if __name__ == "__main__":
    run_web_app()

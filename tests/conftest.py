"""
Shared fixtures for the Courtside test suite.

Provides a two-team basketball game with seven players per team (five
starters and two on the bench) and tracking sessions driven by a manual
clock ticker.
"""
import pytest

from courtside.config import Config
from courtside.models import GameState, LeagueConfig, RosterMember, TeamRoster
from courtside.services import ManualTicker, ServiceFactory
from courtside.ui import create_app


def make_team(team_id: str, prefix: str, size: int = 7) -> TeamRoster:
    members = [
        RosterMember(player_id=f"{prefix}{n}", name=f"{prefix.upper()} Player {n}", jersey_number=str(n))
        for n in range(1, size + 1)
    ]
    return TeamRoster(team_id=team_id, name=team_id.title(), members=members)


def make_game_state(sport: str = "basketball", **league_overrides) -> GameState:
    return GameState(
        game_id="g1",
        league=LeagueConfig.for_sport(sport, **league_overrides),
        teams=[make_team("home", "h"), make_team("away", "a")],
    )


def make_tracking(game_state=None, save_dir: str = "saves"):
    factory = ServiceFactory(save_dir=save_dir, ticker_factory=ManualTicker)
    return factory.create_tracking_service(game_state or make_game_state())


def roster_feed(sport: str = "basketball") -> dict:
    """Payload in the shape the roster feed delivers it."""
    return {
        "game_id": "g1",
        "sport_type": sport,
        "teams": [team.to_dict() for team in (make_team("home", "h"), make_team("away", "a"))],
    }


@pytest.fixture
def game_state():
    return make_game_state()


@pytest.fixture
def tracking(tmp_path):
    service = make_tracking(save_dir=str(tmp_path / "saves"))
    yield service
    service.close()


@pytest.fixture
def app(tmp_path):
    class TestingConfig(Config):
        TESTING = True
        CLOCK_THREAD_ENABLED = False
        SAVE_DIR = str(tmp_path / "saves")

    app = create_app(TestingConfig)
    yield app
    state = app.extensions["courtside"]
    if state.tracking is not None:
        state.tracking.close()


@pytest.fixture
def client(app):
    return app.test_client()

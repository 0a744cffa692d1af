"""
Unit tests for GameState and LeagueConfig loading.
"""
import unittest

from conftest import make_game_state, make_tracking

from courtside.models import EventLog, GameState, LeagueConfig, StatEvent, Transaction


def _tx(event_id, player, team, stat_type="freeThrowM"):
    return Transaction.build(StatEvent(
        id=event_id, player=player, team=team, stat_type=stat_type, period="H1",
        clock_seconds=600, recorded_at=1.0, transaction_id=f"t-{event_id}",
    ))


class TestLeagueConfig(unittest.TestCase):

    def test_explicit_none_override_is_kept(self) -> None:
        league = LeagueConfig.for_sport("basketball", foul_out_limit=None)
        self.assertIsNone(league.foul_out_limit)
        self.assertEqual(LeagueConfig.for_sport("basketball").foul_out_limit, 5)

    def test_missing_keys_fall_back_to_sport_defaults(self) -> None:
        league = LeagueConfig.from_dict({"sport_type": "basketball", "starters_count": 4})
        self.assertEqual(league.starters_count, 4)
        self.assertEqual(league.foul_out_limit, 5)
        self.assertEqual(league.period_type, "halves")

    def test_disabled_foul_limit_survives_save_and_load(self) -> None:
        game_state = make_game_state(foul_out_limit=None)
        loaded = GameState.from_json(game_state.to_json())
        self.assertIsNone(loaded.league.foul_out_limit)

        tracking = make_tracking(loaded)
        try:
            for _ in range(6):
                tracking.record_primary_stat("a2", "technicalFoul")
            self.assertEqual(tracking.player_aggregate("a2").fouls, 6)
            self.assertFalse(tracking.player_aggregate("a2").has_fouled_out)
            self.assertTrue(tracking.record_primary_stat("a2", "freeThrowM").committed)
        finally:
            tracking.close()


class TestGameStateEvents(unittest.TestCase):

    def test_events_for_rostered_players_are_accepted(self) -> None:
        log = EventLog()
        log.append(_tx("e1", "h1", "home"))
        log.append(_tx("e2", "a7", "away"))
        game_state = make_game_state()
        game_state.event_log = log

        loaded = GameState.from_json(game_state.to_json())
        self.assertEqual(len(loaded.event_log), 2)

    def test_event_for_unknown_team_is_rejected(self) -> None:
        data = make_game_state().to_json()
        data["event_log"] = [_tx("e1", "h1", "x").primary.to_dict()]
        with self.assertRaises(ValueError):
            GameState.from_json(data)

    def test_event_for_player_off_the_team_is_rejected(self) -> None:
        data = make_game_state().to_json()
        data["event_log"] = [_tx("e1", "a1", "home").primary.to_dict()]
        with self.assertRaises(ValueError):
            GameState.from_json(data)


if __name__ == "__main__":
    unittest.main()

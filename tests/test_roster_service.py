"""
Unit tests for RosterService.

Covers starting lineups, the substitution workflow and its limits, ringers,
and foul-out eligibility.
"""
import unittest

from conftest import make_game_state

from courtside.models import RosterMember, StatEvent, Transaction
from courtside.services import AggregateCache, RosterService
from courtside.services.errors import (
    DuplicatePlayerError, FouledOutError, IneligiblePlayerError, SelectionLimitError,
    SubstitutionNotInProgress, SubstitutionRejected, UnknownPlayerError,
)


class TestRosterService(unittest.TestCase):
    """Test cases for RosterService functionality."""

    def setUp(self) -> None:
        self.game_state = make_game_state()
        self.game_state.teams[0].members[1].is_active = False
        self.aggregates = AggregateCache(self.game_state.league, self.game_state.team_ids)
        self.service = RosterService(self.game_state, self.aggregates)
        self.service.ensure_starters()
        self.home = self.game_state.teams[0]
        self.away = self.game_state.teams[1]

    def _foul(self, player_id: str, team_id: str, count: int) -> None:
        for n in range(count):
            tx = Transaction.build(StatEvent(
                id=f"{player_id}-{n}", player=player_id, team=team_id, stat_type="personalFoul",
                period="H1", clock_seconds=100, recorded_at=float(n), transaction_id=f"{player_id}-t{n}",
            ))
            self.aggregates.apply(tx.events)

    def test_starters_skip_inactive_members(self) -> None:
        self.assertEqual(self.home.active, ["h1", "h3", "h4", "h5", "h6"])
        self.assertEqual(self.away.active, ["a1", "a2", "a3", "a4", "a5"])

    def test_ensure_starters_keeps_existing_lineup(self) -> None:
        self.home.active = ["h7"]
        self.service.ensure_starters()
        self.assertEqual(self.home.active, ["h7"])

    def test_substitution_swaps_players(self) -> None:
        self.service.begin_substitution()
        self.assertEqual(self.home.selected, self.home.active)

        self.service.toggle_selected("home", "h1")
        self.service.toggle_selected("home", "h7")
        active = self.service.confirm_substitution()

        self.assertEqual(active["home"], ["h3", "h4", "h5", "h6", "h7"])
        self.assertEqual(self.home.selected, [])
        self.assertFalse(self.service.substitution_in_progress)

    def test_selection_is_capped_at_starters_count(self) -> None:
        self.service.begin_substitution()
        with self.assertRaises(SelectionLimitError):
            self.service.toggle_selected("away", "a6")
        self.assertEqual(len(self.away.selected), 5)

    def test_confirm_rejects_and_changes_neither_team(self) -> None:
        before = (list(self.home.active), list(self.away.active))
        self.service.begin_substitution()
        self.service.toggle_selected("home", "h1")
        self.service.toggle_selected("home", "h7")
        self.away.selected = self.away.selected + ["a6"]

        with self.assertRaises(SubstitutionRejected) as ctx:
            self.service.confirm_substitution()

        self.assertEqual(ctx.exception.teams, ["away"])
        self.assertEqual((self.home.active, self.away.active), before)
        self.assertTrue(self.service.substitution_in_progress)

    def test_cancel_discards_selection(self) -> None:
        before = list(self.home.active)
        self.service.begin_substitution()
        self.service.toggle_selected("home", "h1")
        self.service.cancel_substitution()

        self.assertEqual(self.home.active, before)
        self.assertEqual(self.home.selected, [])
        with self.assertRaises(SubstitutionNotInProgress):
            self.service.toggle_selected("home", "h1")
        with self.assertRaises(SubstitutionNotInProgress):
            self.service.confirm_substitution()

    def test_toggle_unknown_player(self) -> None:
        self.service.begin_substitution()
        with self.assertRaises(UnknownPlayerError):
            self.service.toggle_selected("home", "a7")

    def test_foul_out_removes_eligibility(self) -> None:
        self._foul("a1", "away", 4)
        self.assertIn("a1", self.service.eligible_players("away"))
        self.assertEqual(self.service.ensure_can_record("a1").team_id, "away")

        self._foul("a1", "away", 1)
        self.assertTrue(self.service.foul_out_status("a1"))
        self.assertNotIn("a1", self.service.eligible_players("away"))
        self.assertIn("a1", self.service.active_players("away"))
        self.assertEqual(self.service.fouled_out_players("away"), ["a1"])
        with self.assertRaises(FouledOutError):
            self.service.ensure_can_record("a1")

    def test_fouled_out_player_cannot_be_selected(self) -> None:
        self._foul("a6", "away", 5)
        self.service.begin_substitution()
        self.service.toggle_selected("away", "a1")
        with self.assertRaises(FouledOutError):
            self.service.toggle_selected("away", "a6")

    def test_bench_and_unknown_players_cannot_record(self) -> None:
        with self.assertRaises(IneligiblePlayerError):
            self.service.ensure_can_record("h7")
        with self.assertRaises(UnknownPlayerError):
            self.service.ensure_can_record("z1")

    def test_ringer_fills_open_slot(self) -> None:
        self.away.active = ["a1", "a2", "a3", "a4"]
        ringer = self.service.add_ringer("away", RosterMember(player_id="r1", name="Ringer"))

        self.assertTrue(ringer.is_ringer)
        self.assertIn("r1", self.away.active)
        self.assertEqual(self.service.member("r1").name, "Ringer")

    def test_ringer_goes_to_bench_when_lineup_full(self) -> None:
        self.service.add_ringer("home", RosterMember(player_id="r1", name="Ringer"))
        self.assertNotIn("r1", self.home.active)
        self.assertTrue(self.home.has_member("r1"))

    def test_ringer_joins_selection_during_substitution(self) -> None:
        self.service.begin_substitution()
        self.service.toggle_selected("home", "h1")
        self.service.add_ringer("home", RosterMember(player_id="r1", name="Ringer"))
        self.assertIn("r1", self.home.selected)
        self.assertNotIn("r1", self.home.active)

    def test_duplicate_ringer_is_rejected(self) -> None:
        with self.assertRaises(DuplicatePlayerError):
            self.service.add_ringer("home", RosterMember(player_id="a1", name="Copy"))


if __name__ == "__main__":
    unittest.main()

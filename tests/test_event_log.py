"""
Unit tests for the event log and stat event models.
"""
import unittest

from courtside.models import EventLog, StatEvent, Transaction, CourtLocation


def _event(event_id, player="h1", team="home", stat_type="twoPointFGM", period="H1",
           clock_seconds=1000, recorded_at=1.0, transaction_id="t1", **kwargs):
    return StatEvent(
        id=event_id, player=player, team=team, stat_type=stat_type, period=period,
        clock_seconds=clock_seconds, recorded_at=recorded_at,
        transaction_id=transaction_id, **kwargs
    )


class TestTransaction(unittest.TestCase):

    def test_build_groups_secondary_under_primary_id(self) -> None:
        primary = _event("e1", transaction_id="t1")
        secondary = _event("e2", player="h2", stat_type="assist", transaction_id="other")
        tx = Transaction.build(primary, secondary)

        self.assertEqual(tx.id, "t1")
        self.assertEqual(tx.event_ids, ["e1", "e2"])
        self.assertEqual(tx.secondary.transaction_id, "t1")

    def test_transaction_rejects_mismatched_ids(self) -> None:
        with self.assertRaises(ValueError):
            Transaction(id="t1", events=(_event("e1", transaction_id="t2"),))
        with self.assertRaises(ValueError):
            Transaction(id="t1", events=())

    def test_stat_event_dict_round_trip_keeps_optional_fields(self) -> None:
        event = _event("e1", related_player="a3", location=CourtLocation(10.5, 20.0), player_name="H Player 1")
        self.assertEqual(StatEvent.from_dict(event.to_dict()), event)


class TestEventLog(unittest.TestCase):

    def setUp(self) -> None:
        self.log = EventLog()
        self.log.append(Transaction.build(_event("e1", recorded_at=10.0, transaction_id="t1")))
        self.log.append(Transaction.build(
            _event("e2", stat_type="twoPointFGA", recorded_at=20.0, transaction_id="t2"),
            _event("e3", player="a1", team="away", stat_type="defensiveRebound",
                   recorded_at=20.0, transaction_id="t2"),
        ))
        self.log.append(Transaction.build(
            _event("e4", player="a2", team="away", stat_type="steal", period="H2",
                   recorded_at=15.0, transaction_id="t3")
        ))

    def test_append_keeps_insertion_order(self) -> None:
        self.assertEqual([e.id for e in self.log], ["e1", "e2", "e3", "e4"])
        self.assertEqual(len(self.log), 4)

    def test_remove_transaction_removes_every_event_of_it(self) -> None:
        removed = self.log.remove_transaction("t2")
        self.assertEqual([e.id for e in removed], ["e2", "e3"])
        self.assertEqual([e.id for e in self.log], ["e1", "e4"])

    def test_remove_unknown_transaction_is_a_no_op(self) -> None:
        self.assertEqual(self.log.remove_transaction("missing"), [])
        self.assertEqual(len(self.log), 4)

    def test_latest_uses_record_time_not_position(self) -> None:
        # e4 was appended last but recorded before t2
        self.assertEqual(self.log.latest().id, "e3")
        self.assertIsNone(EventLog().latest())

    def test_filter_returns_newest_first(self) -> None:
        self.assertEqual([e.id for e in self.log.filter()], ["e3", "e2", "e4", "e1"])
        self.assertEqual([e.id for e in self.log.filter(team="away")], ["e3", "e4"])
        self.assertEqual([e.id for e in self.log.filter(period="H2")], ["e4"])
        self.assertEqual([e.id for e in self.log.filter(player="h1", limit=1)], ["e2"])

    def test_periods_and_player_views(self) -> None:
        self.assertEqual(self.log.periods(), ["H1", "H2"])
        self.assertEqual([e.id for e in self.log.for_player("h1")], ["e1", "e2"])
        self.assertEqual([e.id for e in self.log.for_team("away")], ["e3", "e4"])

    def test_iteration_returns_a_copy(self) -> None:
        events = self.log.events
        events.clear()
        self.assertEqual(len(self.log), 4)


if __name__ == "__main__":
    unittest.main()

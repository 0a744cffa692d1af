"""Tests for the aggregation engine and its incremental cache."""

import pytest

from courtside.models import EventLog, LeagueConfig, StatEvent, Transaction
from courtside.services import AggregateCache, aggregate_player, aggregate_team, fold

BASKETBALL = LeagueConfig.for_sport("basketball")


def _tx(tx_id, *specs):
    events = [
        StatEvent(
            id=f"{tx_id}-{n}", player=player, team=team, stat_type=stat_type,
            period="H1", clock_seconds=600, recorded_at=float(n), transaction_id=tx_id,
        )
        for n, (player, team, stat_type) in enumerate(specs)
    ]
    return Transaction.build(*events)


def test_points_rebounds_and_fouls_follow_league_rules():
    events = list(_tx("t1", ("h1", "home", "twoPointFGM"), ("h2", "home", "assist")).events)
    events += _tx("t2", ("h1", "home", "threePointFGM")).events
    events += _tx("t3", ("h1", "home", "freeThrowM")).events
    events += _tx("t4", ("h1", "home", "offensiveRebound")).events
    events += _tx("t5", ("h1", "home", "defensiveRebound")).events
    events += _tx("t6", ("h1", "home", "personalFoul")).events
    events += _tx("t7", ("h1", "home", "technicalFoul")).events
    events += _tx("t8", ("h1", "home", "drawnFoul")).events

    aggregate = aggregate_player(events, "h1", BASKETBALL)

    assert aggregate.points == 2 + 3 + 1
    assert aggregate.rebounds == 2
    assert aggregate.fouls == 2
    assert aggregate.count("drawnFoul") == 1
    assert not aggregate.has_fouled_out
    assert aggregate_player(events, "h2", BASKETBALL).assists == 1


def test_player_without_events_is_zeroed():
    aggregate = aggregate_player([], "h9", BASKETBALL, team_id="home")
    assert aggregate.team == "home"
    assert aggregate.points == 0
    assert aggregate.stat_counts == {}


def test_foul_out_at_limit():
    events = []
    for n in range(5):
        events += _tx(f"f{n}", ("a1", "away", "personalFoul")).events
        assert aggregate_player(events, "a1", BASKETBALL).has_fouled_out == (n == 4)


def test_league_without_foul_limit_never_fouls_out():
    hockey = LeagueConfig.for_sport("hockey")
    events = []
    for n in range(10):
        events += _tx(f"p{n}", ("a1", "away", "penaltyMinute")).events
    assert not aggregate_player(events, "a1", hockey).has_fouled_out


def test_team_totals_and_leading_team():
    events = list(_tx("t1", ("h1", "home", "threePointFGM"), ("h2", "home", "assist")).events)
    events += _tx("t2", ("a1", "away", "steal"), ("h3", "home", "turnover")).events
    events += _tx("t3", ("a1", "away", "twoPointFGM")).events

    home = aggregate_team(events, "home", BASKETBALL)
    assert (home.score, home.assists, home.turnovers) == (3, 1, 1)

    box = fold(events, BASKETBALL, ["home", "away"])
    assert box.teams["away"].score == 2
    assert box.leading_team() == "home"


def test_fold_always_reports_both_teams():
    box = fold([], BASKETBALL, ["home", "away"])
    assert set(box.teams) == {"home", "away"}
    assert box.leading_team() is None


@pytest.mark.parametrize("undo_after", [1, 2, 3])
def test_incremental_cache_matches_full_fold(undo_after):
    log = EventLog()
    cache = AggregateCache(BASKETBALL, ["home", "away"])
    transactions = [
        _tx("t1", ("h1", "home", "twoPointFGA"), ("a1", "away", "defensiveRebound")),
        _tx("t2", ("a1", "away", "threePointFGM"), ("a2", "away", "assist")),
        _tx("t3", ("h2", "home", "personalFoul")),
        _tx("t4", ("h1", "home", "steal"), ("a3", "away", "turnover")),
    ]

    for n, tx in enumerate(transactions, start=1):
        log.append(tx)
        cache.apply(tx.events)
        assert cache.box_score() == fold(log, BASKETBALL, ["home", "away"])
        if n == undo_after:
            cache.revert(log.remove_transaction(tx.id))
            assert cache.box_score() == fold(log, BASKETBALL, ["home", "away"])


def test_revert_removes_players_with_no_remaining_events():
    tx = _tx("t1", ("h1", "home", "block"), ("a1", "away", "blockedShotAttempt"))
    cache = AggregateCache.from_events(tx.events, BASKETBALL, ["home", "away"])
    cache.revert(tx.events)

    assert cache.box_score().players == {}
    assert cache.player("h1", "home").stat_counts == {}

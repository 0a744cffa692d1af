from conftest import roster_feed


def _load(client, sport="basketball"):
    res = client.post('/api/game/load', json=roster_feed(sport))
    assert res.status_code == 200
    return res.get_json()


def test_state_requires_loaded_game(client):
    res = client.get('/api/state')
    assert res.status_code == 404
    assert res.get_json()['success'] is False


def test_load_game_sets_starters_and_clock(client):
    body = _load(client)
    state = body['state']
    assert state['clock'] == {'running': False, 'seconds_remaining': 1440, 'period': 'H1', 'display': '24:00'}
    home = state['roster']['teams'][0]
    assert home['active'] == ['h1', 'h2', 'h3', 'h4', 'h5']
    assert state['roster']['starters_count'] == 5


def test_load_game_requires_two_teams(client):
    feed = roster_feed()
    feed['teams'] = feed['teams'][:1]
    res = client.post('/api/game/load', json=feed)
    assert res.status_code == 400


def test_load_game_rejects_events_off_the_rosters(client):
    feed = roster_feed()
    feed['event_log'] = [{
        'id': 'e1', 'player': 'h1', 'team': 'x', 'stat_type': 'freeThrowM', 'period': 'H1',
        'clock_seconds': 600, 'recorded_at': 1.0, 'transaction_id': 't1',
    }]
    res = client.post('/api/game/load', json=feed)
    assert res.status_code == 400
    assert res.get_json()['success'] is False
    assert client.get('/api/state').status_code == 404


def test_record_assist_flow_and_undo(client):
    _load(client)
    res = client.post('/api/stats', json={'player_id': 'h1', 'stat_type': 'threePointFGM'})
    body = res.get_json()
    assert body['success'] is True
    assert body['committed'] is False
    assert body['follow_up']['respondents'] == ['h2', 'h3', 'h4', 'h5']

    res = client.post('/api/stats/follow-up', json={'player_id': 'h3'})
    assert [e['stat_type'] for e in res.get_json()['events']] == ['threePointFGM', 'assist']

    score = client.get('/api/teams/home/score').get_json()['score']
    assert score['score'] == 3 and score['assists'] == 1
    assert client.get('/api/players/h3/stats').get_json()['stats']['stats'] == {'assist': 1}

    assert client.post('/api/undo').status_code == 200
    res = client.post('/api/undo')
    assert res.status_code == 400
    assert res.get_json()['message'] == 'Nothing to undo'
    assert client.get('/api/teams/home/score').get_json()['score']['score'] == 0


def test_constraint_violations_return_400(client):
    _load(client)
    res = client.post('/api/stats', json={'player_id': 'h6', 'stat_type': 'steal'})
    assert res.status_code == 400
    assert res.get_json()['type'] == 'IneligiblePlayerError'

    res = client.post('/api/stats/follow-up', json={'player_id': 'a1'})
    assert res.status_code == 400
    assert res.get_json()['type'] == 'NoPendingFollowUpError'

    client.post('/api/stats', json={'player_id': 'h1', 'stat_type': 'steal'})
    res = client.post('/api/stats/follow-up', json={'player_id': None})
    assert res.status_code == 400
    assert client.post('/api/stats/follow-up/cancel').status_code == 200


def test_unknown_player_and_team_lookups(client):
    _load(client)
    assert client.get('/api/players/zz/stats').status_code == 404
    assert client.get('/api/teams/zz/score').status_code == 404


def test_play_by_play_filters(client):
    _load(client)
    client.post('/api/stats', json={'player_id': 'h1', 'stat_type': 'freeThrowM'})
    client.post('/api/stats', json={'player_id': 'a1', 'stat_type': 'freeThrowM'})
    client.post('/api/stats', json={'player_id': 'a2', 'stat_type': 'freeThrowM', 'period': 'H2'})

    events = client.get('/api/play-by-play?team=away').get_json()['events']
    assert [e['player'] for e in events] == ['a2', 'a1']
    events = client.get('/api/play-by-play?period=H2').get_json()['events']
    assert [e['player'] for e in events] == ['a2']
    assert len(client.get('/api/play-by-play?limit=1').get_json()['events']) == 1

    box = client.get('/api/box-score').get_json()['box_score']
    assert box['leading_team'] == 'away'


def test_clock_endpoints(client):
    _load(client)
    assert client.post('/api/clock/toggle').get_json()['clock']['running'] is True
    clock = client.post('/api/clock/period', json={'period': 'OT1'}).get_json()['clock']
    assert clock == {'running': False, 'seconds_remaining': 300, 'period': 'OT1'}

    clock = client.post('/api/clock/time', json={'minutes': 2, 'seconds': 30}).get_json()['clock']
    assert clock['seconds_remaining'] == 150
    assert client.post('/api/clock/time', json={'minutes': 100}).status_code == 400
    assert client.post('/api/clock/period', json={'period': 'Q1'}).status_code == 400

    client.post('/api/clock/time', json={'seconds': 0})
    assert client.post('/api/clock/toggle').status_code == 400


def test_substitution_endpoints(client):
    _load(client)
    assert client.post('/api/substitutions/toggle', json={'team_id': 'home', 'player_id': 'h6'}).status_code == 400

    client.post('/api/substitutions/begin')
    res = client.post('/api/substitutions/toggle', json={'team_id': 'home', 'player_id': 'h6'})
    assert res.status_code == 400
    assert res.get_json()['type'] == 'SelectionLimitError'

    client.post('/api/substitutions/toggle', json={'team_id': 'home', 'player_id': 'h1'})
    client.post('/api/substitutions/toggle', json={'team_id': 'home', 'player_id': 'h6'})
    active = client.post('/api/substitutions/confirm').get_json()['active']
    assert active['home'] == ['h2', 'h3', 'h4', 'h5', 'h6']
    assert active['away'] == ['a1', 'a2', 'a3', 'a4', 'a5']


def test_add_ringer(client):
    _load(client)
    res = client.post('/api/roster/ringer', json={'team_id': 'away', 'player_id': 'r1', 'name': 'Late Arrival'})
    assert res.status_code == 200
    assert res.get_json()['player']['is_ringer'] is True
    assert client.post('/api/roster/ringer', json={'team_id': 'away', 'player_id': 'r2'}).status_code == 400
    assert client.post('/api/roster/ringer', json={'team_id': 'away', 'player_id': 'r1', 'name': 'Again'}).status_code == 400


def test_save_and_resume_from_file(client):
    _load(client)
    client.post('/api/stats', json={'player_id': 'h1', 'stat_type': 'freeThrowM'})
    saved = client.post('/api/save').get_json()
    assert saved['success'] is True

    body = client.post('/api/game/load', json={'file_path': saved['location']}).get_json()
    assert body['state']['box_score']['leading_team'] == 'home'
    assert client.post('/api/game/load', json={'file_path': '/nonexistent/game.json'}).status_code == 404


def test_hockey_game_uses_sport_defaults(client):
    state = _load(client, 'hockey')['state']
    assert state['clock']['period'] == 'P1'
    assert state['clock']['seconds_remaining'] == 1200
    assert len(state['roster']['teams'][1]['active']) == 6

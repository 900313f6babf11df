"""
Tests for the Socket.IO events and HTTP API using Flask-SocketIO's test client.
"""

import random

import pytest

from app import create_app


@pytest.fixture
def server():
    app, socketio = create_app(rng=random.Random(8), async_mode='threading')
    app.config['TESTING'] = True
    return app, socketio


@pytest.fixture
def moderator(server):
    app, socketio = server
    client = socketio.test_client(app)
    ack = client.emit('create-game', callback=True)
    assert ack['success']
    client.code = ack['gameId']
    client.get_received()
    return client


def events(client, name):
    return [msg['args'][0] for msg in client.get_received() if msg['name'] == name]


def join_player(server, code, name):
    app, socketio = server
    client = socketio.test_client(app)
    ack = client.emit('join-game', {'gameId': code.lower(), 'playerName': name}, callback=True)
    assert ack['success'], ack
    client.player_id = ack['playerId']
    return client, ack


def test_connect_greets_client(server):
    app, socketio = server
    client = socketio.test_client(app)

    assert client.is_connected()
    assert events(client, 'connected')


def test_create_and_join(server, moderator):
    app, socketio = server
    host = socketio.test_client(app)
    ack = host.emit('join-host', {'gameId': moderator.code}, callback=True)
    assert ack == {'success': True, 'gameId': moderator.code}
    assert events(host, 'game-state')[0]['players'] == []

    client, ack = join_player(server, moderator.code, 'Ann')

    assert ack['gameId'] == moderator.code
    assert ack['reconnected'] is False
    assert ack['playerState']['me']['name'] == 'Ann'

    received = host.get_received()
    joined = [m['args'][0] for m in received if m['name'] == 'player-joined']
    assert joined == [{'name': 'Ann', 'total_players': 1}]
    states = [m['args'][0] for m in received if m['name'] == 'game-state']
    assert states[-1]['players'][0]['name'] == 'Ann'

    moderator_states = events(moderator, 'game-state')
    assert moderator_states[-1]['players'][0]['name'] == 'Ann'


def test_join_unknown_room(server):
    app, socketio = server
    client = socketio.test_client(app)
    client.get_received()

    ack = client.emit('join-game', {'gameId': 'ZZZZ', 'playerName': 'Ann'}, callback=True)

    assert ack['success'] is False
    assert ack['code'] == 'session_not_found'
    assert ack['error'] == 'Game not found. Check the room code.'
    assert events(client, 'error-msg')[0]['code'] == 'session_not_found'


def test_duplicate_name_rejected(server, moderator):
    join_player(server, moderator.code, 'Ann')
    app, socketio = server
    other = socketio.test_client(app)

    ack = other.emit('join-game', {'gameId': moderator.code, 'playerName': 'ann'}, callback=True)

    assert ack['code'] == 'name_taken'


def test_round_flow_over_sockets(server, moderator):
    code = moderator.code
    players = [join_player(server, code, name)[0] for name in ('Ann', 'Bob', 'Cy', 'Dee')]
    for client in players:
        client.get_received()

    ack = moderator.emit('start-round', {'gameId': code}, callback=True)
    assert ack['success']
    assert ack['round'] == 1
    assert ack['imposter_count'] == 1

    words = []
    for client in players:
        reveals = events(client, 'word-reveal')
        assert len(reveals) == 1
        assert reveals[0]['round'] == 1
        words.append(reveals[0]['word'])
    assert len(set(words)) == 2

    assert moderator.emit('start-clue-circle', {'gameId': code}, callback=True)['success']
    step = moderator.emit('next-clue-player', {'gameId': code}, callback=True)
    assert step['success'] and step['done'] is False
    assert moderator.emit('start-discussion', {'gameId': code}, callback=True)['success']
    assert moderator.emit('start-voting', {'gameId': code}, callback=True)['success']

    ballot = events(players[0], 'voting-open')[0]
    assert players[0].player_id not in [p['id'] for p in ballot['alive_players']]
    assert len(ballot['alive_players']) == 3

    self_vote = players[0].emit('cast-vote', {'gameId': code, 'targetId': players[0].player_id}, callback=True)
    assert self_vote['code'] == 'self_vote'

    # Bob gets three votes, Cy one
    targets = [players[1], players[2], players[1], players[1]]
    for client, target in zip(players, targets):
        vote = client.emit('cast-vote', {'gameId': code, 'targetId': target.player_id}, callback=True)
        assert vote['success'], vote
    assert vote['voted_count'] == 4 and vote['total_alive'] == 4

    again = players[0].emit('cast-vote', {'gameId': code, 'targetId': players[2].player_id}, callback=True)
    assert again['code'] == 'already_voted'

    tally = moderator.emit('close-voting', {'gameId': code}, callback=True)
    assert tally['success']
    assert tally['to_eliminate'][0]['id'] == players[1].player_id

    for client in players:
        client.get_received()
    result = moderator.emit('execute-eliminations', {'gameId': code}, callback=True)
    assert result['success']
    assert result['remaining_players'] == 3
    assert result['game_over'] is None

    gone = events(players[1], 'you-eliminated')
    assert len(gone) == 1
    assert 'was_imposter' in gone[0]
    assert not events(players[0], 'you-eliminated')


def test_commands_out_of_order(server, moderator):
    ack = moderator.emit('start-voting', {'gameId': moderator.code}, callback=True)

    assert ack['success'] is False
    assert ack['code'] == 'wrong_phase'
    assert events(moderator, 'error-msg')[0]['code'] == 'wrong_phase'


def test_start_round_needs_players(server, moderator):
    join_player(server, moderator.code, 'Ann')

    ack = moderator.emit('start-round', {'gameId': moderator.code}, callback=True)

    assert ack['code'] == 'not_enough_players'


def test_update_settings_event(server, moderator):
    client, _ = join_player(server, moderator.code, 'Ann')
    client.get_received()

    ack = moderator.emit('update-settings', {'gameId': moderator.code, 'settings': {'discussionTime': 75}},
                         callback=True)

    assert ack['success']
    assert ack['settings']['discussion_time'] == 75
    assert events(client, 'player-state')[-1]['settings']['discussion_time'] == 75

    bad = moderator.emit('update-settings', {'gameId': moderator.code, 'settings': {'votingTime': 0}},
                         callback=True)
    assert bad['code'] == 'invalid_setting'


def test_kick_and_restart(server, moderator):
    code = moderator.code
    players = [join_player(server, code, name)[0] for name in ('Ann', 'Bob', 'Cy', 'Dee')]
    players[2].get_received()

    ack = moderator.emit('kick-player', {'gameId': code, 'playerId': players[2].player_id}, callback=True)
    assert ack['success']
    kicked = events(players[2], 'you-eliminated')
    assert kicked[0]['kicked'] is True

    assert moderator.emit('kick-player', {'gameId': code, 'playerId': players[2].player_id},
                          callback=True)['code'] == 'player_not_alive'

    for client in players:
        client.get_received()
    app, _ = server
    web = app.test_client()

    # Already in the lobby: nothing to restart
    ack = moderator.emit('restart-game', {'gameId': code}, callback=True)
    assert ack == {'success': True, 'restarted': False}
    assert events(players[0], 'game-restart') == []
    assert web.get(f'/api/rooms/{code}').get_json()['alive_count'] == 3

    assert moderator.emit('start-round', {'gameId': code}, callback=True)['success']
    for client in players:
        client.get_received()

    ack = moderator.emit('restart-game', {'gameId': code}, callback=True)
    assert ack == {'success': True, 'restarted': True}
    assert events(players[0], 'game-restart') == [{}]

    room = web.get(f'/api/rooms/{code}').get_json()
    assert room['alive_count'] == 4
    assert room['phase'] == 'LOBBY'


def test_disconnect_and_rejoin(server, moderator):
    code = moderator.code
    client, ack = join_player(server, code, 'Ann')
    player_id = ack['playerId']
    client.disconnect()

    app, socketio = server
    room = app.test_client().get(f'/api/rooms/{code}').get_json()
    assert room['players'][0]['is_connected'] is False
    assert room['players'][0]['is_alive'] is True

    again = socketio.test_client(app)
    ack = again.emit('join-game', {'gameId': code, 'playerName': 'Ann', 'playerId': player_id}, callback=True)
    assert ack['success']
    assert ack['reconnected'] is True
    assert ack['playerId'] == player_id


def test_health_endpoint(server):
    app, _ = server
    response = app.test_client().get('/api/health')

    assert response.status_code == 200
    assert response.get_json()['status'] == 'healthy'


def test_room_endpoint(server, moderator):
    app, _ = server
    web = app.test_client()

    response = web.get(f'/api/rooms/{moderator.code.lower()}')
    assert response.status_code == 200
    assert response.get_json()['code'] == moderator.code

    missing = web.get('/api/rooms/ZZZZ')
    assert missing.status_code == 404
    assert missing.get_json()['code'] == 'session_not_found'

    rooms = web.get('/api/rooms').get_json()['rooms']
    assert [r['code'] for r in rooms] == [moderator.code]


def test_events_without_payload(server, moderator):
    client, _ = join_player(server, moderator.code, 'Ann')

    vote = client.emit('cast-vote', callback=True)
    assert vote['code'] == 'wrong_phase'

    settings = moderator.emit('update-settings', callback=True)
    assert settings['code'] == 'session_not_found'

    kick = moderator.emit('kick-player', callback=True)
    assert kick['code'] == 'session_not_found'


def test_abandoned_room_is_removed(server, moderator):
    app, socketio = server
    code = moderator.code
    client, _ = join_player(server, code, 'Ann')
    web = app.test_client()

    client.disconnect()
    assert web.get(f'/api/rooms/{code}').status_code == 200

    moderator.disconnect()
    missing = web.get(f'/api/rooms/{code}')
    assert missing.status_code == 404
    assert missing.get_json()['code'] == 'session_not_found'
    assert web.get('/api/rooms').get_json()['rooms'] == []

    late = socketio.test_client(app)
    ack = late.emit('join-game', {'gameId': code, 'playerName': 'Bob'}, callback=True)
    assert ack['code'] == 'session_not_found'

from scorekeeper import create_app
from scorekeeper.services.games.registry import clear_games, get_game
from conftest import TestConfig


def _connected(sio_client):
    if not sio_client.is_connected('/ws'):
        sio_client.connect(namespace='/ws')
    assert sio_client.is_connected('/ws')
    sio_client.get_received('/ws')  # flush
    return sio_client


def _play_round(client, code):
    for name in ('Ann', 'Bob'):
        client.post(f'/api/games/{code}/players', json={'name': name})
    return client.post(f'/api/games/{code}/round').get_json()


def test_socket_connect_and_join(sio_client):
    _connected(sio_client)
    sio_client.emit('join_game', {'game_code': 'abcd'}, namespace='/ws')
    received = sio_client.get_received('/ws')
    assert any(pkt['name'] == 'joined' and pkt['args'][0]['room'] == 'game:ABCD' for pkt in received)


def test_join_without_code_reports_error(sio_client):
    _connected(sio_client)
    sio_client.emit('join_game', {}, namespace='/ws')
    received = sio_client.get_received('/ws')
    assert any(pkt['name'] == 'error' for pkt in received)


def test_ping_pong(sio_client):
    _connected(sio_client)
    sio_client.emit('ping', {'n': 1}, namespace='/ws')
    received = sio_client.get_received('/ws')
    assert any(pkt['name'] == 'pong' and pkt['args'][0] == {'n': 1} for pkt in received)


def test_round_computed_is_broadcast_to_table(client, sio_client):
    code = client.post('/api/games/create').get_json()['game_code']
    _connected(sio_client)
    sio_client.emit('join_game', {'game_code': code}, namespace='/ws')
    sio_client.get_received('/ws')

    state = _play_round(client, code)
    assert state['computed'] is True

    events = sio_client.get_received('/ws')
    names = [e['name'] for e in events]
    assert 'state_update' in names
    computed = [e for e in events if e['name'] == 'round_computed']
    assert len(computed) == 1
    payload = computed[0]['args'][0]
    assert payload['round'] == 1
    assert payload['flash_ms'] == 600
    assert sorted(payload['updated_player_ids']) == sorted(p['id'] for p in state['players'])

    # Leaving the room stops further updates
    sio_client.emit('leave_game', {'game_code': code}, namespace='/ws')
    assert any(e['name'] == 'left' for e in sio_client.get_received('/ws'))
    client.post(f'/api/games/{code}/undo')
    assert sio_client.get_received('/ws') == []


class FlashConfig(TestConfig):
    ENABLE_SCHEDULER_IN_TESTS = True
    SCORE_FLASH_MS = 0


def test_flash_flag_cleared_by_scheduler():
    application = create_app(FlashConfig)
    try:
        with application.app_context():
            client = application.test_client()
            code = client.post('/api/games/create').get_json()['game_code']
            state = _play_round(client, code)
            assert state['computed'] is True
            # The scheduler runs inline in tests, so the flag is already gone
            assert not any(p.just_updated for p in get_game(code).players)
    finally:
        clear_games()


def test_join_and_leave_with_non_string_code_report_error(sio_client):
    _connected(sio_client)
    for event in ('join_game', 'leave_game'):
        sio_client.emit(event, {'game_code': 1234}, namespace='/ws')
        received = sio_client.get_received('/ws')
        assert [pkt['name'] for pkt in received] == ['error']


def test_end_game_notifies_table(client, sio_client):
    code = client.post('/api/games/create').get_json()['game_code']
    _connected(sio_client)
    sio_client.emit('join_game', {'game_code': code}, namespace='/ws')
    sio_client.get_received('/ws')

    assert client.post(f'/api/games/{code}/end').status_code == 200
    events = sio_client.get_received('/ws')
    assert any(e['name'] == 'session_ended' and e['args'][0] == {'game_code': code} for e in events)

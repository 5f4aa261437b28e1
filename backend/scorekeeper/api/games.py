from flask import Blueprint, jsonify, request, current_app
from scorekeeper import socketio
from scorekeeper.services.games.registry import create_game as svc_create_game, drop_game, get_game
from scorekeeper.services.games.scheduler import schedule_flash_clear as svc_schedule_flash_clear


games = Blueprint('games', __name__)


def _game_not_found():
    return jsonify({'error': 'Game not found'}), 404


def _emit_state_update(game_code: str) -> None:
    socketio.emit('state_update', {'game_code': game_code}, to=f"game:{game_code}", namespace='/ws')


def _json_body():
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _state_payload(game, **extra):
    payload = game.to_dict()
    payload.update(extra)
    return payload


@games.route('/create', methods=['POST'])
def create_game():
    cfg = current_app.config
    game = svc_create_game(
        bust_threshold=int(cfg.get('BUST_THRESHOLD', 100)),
        max_round_score=int(cfg.get('MAX_ROUND_SCORE', 999)),
        min_players=int(cfg.get('MIN_PLAYERS', 2)),
    )
    current_app.logger.info(f"[create] game={game.game_code}")
    return jsonify(_state_payload(game, message='New game created!')), 201


@games.route('/<string:game_code>/state', methods=['GET'])
def get_game_state(game_code):
    game = get_game(game_code)
    if not game:
        return _game_not_found()
    return jsonify(game.to_dict())


@games.route('/<string:game_code>/players', methods=['POST'])
def add_player(game_code):
    game = get_game(game_code)
    if not game:
        return _game_not_found()
    data = _json_body()
    name = data.get('name')
    player = game.add_player(name if isinstance(name, str) else None)
    if player is None:
        # Blank or duplicate names are ignored, the table stays as it was
        return jsonify(_state_payload(game, added=False))
    _emit_state_update(game.game_code)
    return jsonify(_state_payload(game, added=True, player=player.to_dict())), 201


@games.route('/<string:game_code>/players/<string:player_id>/score', methods=['POST'])
def set_pending_score(game_code, player_id):
    game = get_game(game_code)
    if not game:
        return _game_not_found()
    if not game.get_player(player_id):
        return jsonify({'error': 'Player not found'}), 404
    data = _json_body()
    updated = game.set_pending_score(player_id, data.get('score'))
    if updated:
        _emit_state_update(game.game_code)
    return jsonify(_state_payload(game, updated=updated))


@games.route('/<string:game_code>/round', methods=['POST'])
def compute_round(game_code):
    game = get_game(game_code)
    if not game:
        return _game_not_found()
    record = game.compute_round()
    if record is None:
        return jsonify(_state_payload(game, computed=False))

    scored_names = {entry.name for entry in record.players}
    updated_ids = [p.id for p in game.players if p.name in scored_names]
    flash_ms = int(current_app.config.get('SCORE_FLASH_MS', 600))
    socketio.emit('round_computed', {
        'game_code': game.game_code,
        'round': record.round_number,
        'updated_player_ids': updated_ids,
        'flash_ms': flash_ms,
    }, to=f"game:{game.game_code}", namespace='/ws')
    _emit_state_update(game.game_code)
    svc_schedule_flash_clear(current_app._get_current_object(), game.game_code, updated_ids)
    return jsonify(_state_payload(game, computed=True, round=record.to_dict()))


@games.route('/<string:game_code>/undo', methods=['POST'])
def undo_last_round(game_code):
    game = get_game(game_code)
    if not game:
        return _game_not_found()
    undone = game.undo_last_round()
    if undone:
        _emit_state_update(game.game_code)
    return jsonify(_state_payload(game, undone=undone))


@games.route('/<string:game_code>/reset', methods=['POST'])
def reset_game(game_code):
    game = get_game(game_code)
    if not game:
        return _game_not_found()
    data = _json_body()
    reset = game.reset_game(confirmed=data.get('confirmed') is True)
    if reset:
        _emit_state_update(game.game_code)
    return jsonify(_state_payload(game, reset=reset))


@games.route('/<string:game_code>/end', methods=['POST'])
def end_game(game_code):
    game = drop_game(game_code)
    if not game:
        return _game_not_found()
    # Tell connected clients the table is gone; its state is released
    socketio.emit('session_ended', {'game_code': game.game_code}, to=f"game:{game.game_code}", namespace='/ws')
    current_app.logger.info(f"[end] game={game.game_code}")
    return jsonify({'ended': True, 'game_code': game.game_code})

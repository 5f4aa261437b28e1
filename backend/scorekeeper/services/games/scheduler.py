import time
from typing import Iterable

from scorekeeper import socketio
from .registry import get_game


def schedule_flash_clear(app, game_code: str, player_ids: Iterable[str]) -> None:
    """Clear the "just updated" flag on the given players after SCORE_FLASH_MS.

    - No-ops in TESTING mode unless ENABLE_SCHEDULER_IN_TESTS is set
    - Runs as a Socket.IO background task; inline when testing
    - A stale timer firing after a newer round only clears a cosmetic flag
    """
    if app.config.get('TESTING') and not app.config.get('ENABLE_SCHEDULER_IN_TESTS'):
        return

    ids = list(player_ids)
    try:
        delay = max(0, int(app.config.get('SCORE_FLASH_MS', 600))) / 1000.0
    except (TypeError, ValueError):
        delay = 0.6

    def _worker(code: str, pids: list, wait: float):
        if wait:
            time.sleep(wait)
        game = get_game(code)
        if game is None:
            app.logger.debug(f"[flash-abort] game={code} no longer exists")
            return
        game.clear_just_updated(pids)
        app.logger.debug(f"[flash-clear] game={code} players={len(pids)}")
        socketio.emit('state_update', {'game_code': code}, to=f"game:{code}", namespace='/ws')

    if app.config.get('TESTING'):
        _worker(game_code, ids, delay)
    else:
        socketio.start_background_task(_worker, game_code, ids, delay)

import random
import string
from typing import Dict, Optional

from .session import GameSession

# Live score tables keyed by game code; lost when the process exits
_games: Dict[str, GameSession] = {}


def generate_game_code(length=4):
    """Generate a unique, short game code."""
    while True:
        code = ''.join(random.choices(string.ascii_uppercase + string.digits, k=length))
        if code not in _games:
            return code


def create_game(**rules) -> GameSession:
    game = GameSession(game_code=generate_game_code(), **rules)
    _games[game.game_code] = game
    return game


def get_game(game_code: Optional[str]) -> Optional[GameSession]:
    if not game_code:
        return None
    return _games.get(game_code.upper())


def clear_games() -> None:
    _games.clear()


def drop_game(game_code: Optional[str]) -> Optional[GameSession]:
    """Forget a table; returns it, or None if the code was unknown."""
    if not game_code:
        return None
    return _games.pop(game_code.upper(), None)

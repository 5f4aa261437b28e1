import re
from typing import Any, Iterable, Sequence

MAX_ROUND_SCORE = 999
BUST_THRESHOLD = 100
MIN_PLAYERS = 2

_LEADING_INT = re.compile(r'^\s*([+-]?)([0-9]+)')
# Longer digit runs are far past any score cap and would trip int()'s digit limit
_MAX_SIGNIFICANT_DIGITS = 9


def _parse_int(value: Any) -> int:
    """Leniently read an integer out of a form value; anything unreadable is 0."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        # NaN and infinities carry no score
        if value != value or value in (float('inf'), float('-inf')):
            return 0
        return int(value)
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        if not match:
            return 0
        sign = -1 if match.group(1) == '-' else 1
        digits = match.group(2).lstrip('0') or '0'
        if len(digits) > _MAX_SIGNIFICANT_DIGITS:
            return sign * 10 ** _MAX_SIGNIFICANT_DIGITS
        return sign * int(digits)
    return 0


def normalize_score_entry(value: Any, max_score: int = MAX_ROUND_SCORE) -> int:
    """Turn a raw score entry into an integer in [0, max_score].

    Empty or missing entries count as 0, as does anything that does not
    start with digits ("12abc" reads as 12).
    """
    if value is None or value == '':
        return 0
    return max(0, min(max_score, _parse_int(value)))


def is_score_entered(value: Any) -> bool:
    return value is not None and value != ''


def round_baseline(scores: Iterable[int]) -> int:
    """The lowest submitted score; it is subtracted from everyone's score."""
    return min(scores)


def derive_status(player_count: int, active_names: Sequence[str], current_round: int,
                  min_players: int = MIN_PLAYERS) -> str:
    """Status line shown above the score table.

    Pure function of the roster size, the names of the players still in,
    and how many rounds have been played.
    """
    if player_count < min_players:
        return ''
    active_count = len(active_names)
    if active_count == 0:
        return 'All players are busted! Game over!'
    if active_count == 1 and current_round > 0:
        return f'Winner: {active_names[0]}!'
    if current_round > 0:
        return f'{active_count} players remaining. Game continues!'
    return f'Ready to start! {active_count} players in the game.'

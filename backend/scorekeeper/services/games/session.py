"""Round scoring and elimination state machine for one score table.

Each player's round score is reduced by the lowest score entered that
round before it is added to their total. A total above the bust threshold
knocks the player out for the rest of the game. The last computed round
can be undone once.
"""
import logging
from typing import Any, Dict, List, Optional

from scorekeeper.models import Player, RoundEntry, RoundRecord, Snapshot, find_player
from .scoring import (
    BUST_THRESHOLD,
    MAX_ROUND_SCORE,
    MIN_PLAYERS,
    derive_status,
    is_score_entered,
    normalize_score_entry,
    round_baseline,
)

logger = logging.getLogger(__name__)


class GameSession:

    def __init__(self, game_code: str = '', bust_threshold: int = BUST_THRESHOLD,
                 max_round_score: int = MAX_ROUND_SCORE, min_players: int = MIN_PLAYERS):
        self.game_code = game_code
        self.bust_threshold = bust_threshold
        self.max_round_score = max_round_score
        self.min_players = min_players
        self.players: List[Player] = []
        self.current_round: int = 0
        self.lowest_score: int = 0
        self.history: List[RoundRecord] = []
        self._last_round_state: Optional[Snapshot] = None

    # ---- Derived state (recomputed on every read) ----

    @property
    def active_players(self) -> List[Player]:
        return [p for p in self.players if not p.is_busted]

    @property
    def active_players_count(self) -> int:
        return len(self.active_players)

    @property
    def busted_players_count(self) -> int:
        return sum(1 for p in self.players if p.is_busted)

    @property
    def can_compute_round(self) -> bool:
        if len(self.players) < self.min_players:
            return False
        active = self.active_players
        return len(active) >= self.min_players and all(
            is_score_entered(p.pending_score) for p in active
        )

    @property
    def can_undo(self) -> bool:
        return self._last_round_state is not None

    @property
    def winner(self) -> Optional[Player]:
        active = self.active_players
        return active[0] if len(active) == 1 else None

    @property
    def status(self) -> str:
        return derive_status(
            len(self.players),
            [p.name for p in self.active_players],
            self.current_round,
            self.min_players,
        )

    def get_player(self, player_id: str) -> Optional[Player]:
        return find_player(self.players, player_id)

    # ---- Operations ----

    def add_player(self, name: Optional[str]) -> Optional[Player]:
        """Add a player; blank or case-insensitively duplicate names are ignored."""
        trimmed = (name or '').strip()
        if not trimmed:
            return None
        lowered = trimmed.lower()
        if any(p.name.lower() == lowered for p in self.players):
            logger.debug(f"[add-skip] game={self.game_code} duplicate name={trimmed!r}")
            return None
        player = Player(name=trimmed)
        self.players.append(player)
        logger.info(f"[add] game={self.game_code} player={player.id} name={trimmed!r} roster={len(self.players)}")
        return player

    def normalize_score_entry(self, player: Player) -> int:
        player.pending_score = normalize_score_entry(player.pending_score, self.max_round_score)
        return player.pending_score

    def set_pending_score(self, player_id: str, value: Any) -> bool:
        """Record a score entry for an active player and clamp it into range."""
        player = self.get_player(player_id)
        if player is None or player.is_busted:
            return False
        player.pending_score = value
        self.normalize_score_entry(player)
        return True

    def compute_round(self) -> Optional[RoundRecord]:
        """Score one round for every active player; no-op when not eligible."""
        if not self.can_compute_round:
            return None

        self._last_round_state = Snapshot.capture(
            self.players, self.current_round, self.lowest_score, self.history
        )

        active = self.active_players
        for p in active:
            self.normalize_score_entry(p)
        self.lowest_score = round_baseline(p.pending_score for p in active)

        record = RoundRecord(
            round_number=self.current_round + 1,
            players=tuple(RoundEntry(name=p.name, score=p.pending_score) for p in active),
        )

        busted_now = []
        for p in active:
            p.total_score += p.pending_score - self.lowest_score
            p.pending_score = 0
            p.just_updated = True
            if p.total_score > self.bust_threshold:
                p.is_busted = True
                busted_now.append(p.name)

        self.history.append(record)
        self.current_round += 1
        logger.info(
            f"[round] game={self.game_code} round={self.current_round} baseline={self.lowest_score} "
            f"busted={busted_now} active={self.active_players_count}"
        )
        return record

    def undo_last_round(self) -> bool:
        snapshot = self._last_round_state
        if snapshot is None:
            return False
        self.players = snapshot.restore_players()
        self.current_round = snapshot.current_round
        self.lowest_score = snapshot.lowest_score
        self.history = list(snapshot.history)
        self._last_round_state = None
        logger.info(f"[undo] game={self.game_code} back to round={self.current_round}")
        return True

    def reset_game(self, confirmed: bool = False) -> bool:
        """Clear everything. With players on the table the caller must confirm."""
        if self.players and not confirmed:
            return False
        self.players = []
        self.current_round = 0
        self.lowest_score = 0
        self.history = []
        self._last_round_state = None
        logger.info(f"[reset] game={self.game_code}")
        return True

    def clear_just_updated(self, player_ids) -> None:
        for pid in player_ids:
            p = self.get_player(pid)
            if p is not None:
                p.just_updated = False

    def to_dict(self) -> Dict[str, Any]:
        winner = self.winner
        return {
            'game_code': self.game_code,
            'players': [p.to_dict() for p in self.players],
            'active_players_count': self.active_players_count,
            'busted_players_count': self.busted_players_count,
            'current_round': self.current_round,
            'lowest_score': self.lowest_score,
            'status': self.status,
            'history': [r.to_dict() for r in self.history],
            'can_compute_round': self.can_compute_round,
            'can_undo': self.can_undo,
            'winner': winner.to_dict() if winner else None,
            'bust_threshold': self.bust_threshold,
        }

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple
import copy
import uuid


def generate_player_id() -> str:
    """Generate a unique id for a player row (used as a stable UI key)."""
    return uuid.uuid4().hex


@dataclass
class Player:
    name: str
    id: str = field(default_factory=generate_player_id)
    # Raw entry until normalized; None or '' means nothing entered yet
    pending_score: Any = 0
    total_score: int = 0
    is_busted: bool = False
    # Presentation-only: row animation after a round, ignored by equality
    just_updated: bool = field(default=False, compare=False)

    @property
    def is_active(self) -> bool:
        return not self.is_busted

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'pending_score': self.pending_score,
            'total_score': self.total_score,
            'is_busted': self.is_busted,
            'just_updated': self.just_updated,
        }


@dataclass(frozen=True)
class RoundEntry:
    name: str
    score: int

    def to_dict(self) -> Dict[str, Any]:
        return {'name': self.name, 'score': self.score}


@dataclass(frozen=True)
class RoundRecord:
    round_number: int
    players: Tuple[RoundEntry, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            'round_number': self.round_number,
            'players': [p.to_dict() for p in self.players],
        }


@dataclass(frozen=True)
class Snapshot:
    """State captured right before a round is computed, for one-level undo."""
    players: Tuple[Player, ...]
    current_round: int
    lowest_score: int
    history: Tuple[RoundRecord, ...]

    @classmethod
    def capture(cls, players: List[Player], current_round: int,
                lowest_score: int, history: List[RoundRecord]) -> 'Snapshot':
        return cls(
            players=tuple(copy.deepcopy(players)),
            current_round=current_round,
            lowest_score=lowest_score,
            # Round records are frozen, a shallow copy of the list is enough
            history=tuple(history),
        )

    def restore_players(self) -> List[Player]:
        # Hand out fresh copies so the snapshot itself is never mutated
        return copy.deepcopy(list(self.players))


def find_player(players: List[Player], player_id: str) -> Optional[Player]:
    for p in players:
        if p.id == player_id:
            return p
    return None

import copy
import uuid
from typing import List, Optional

from .errors import InvalidState
from .player import Player
from .round import MAX_DEAL_SIZE, Round

MAX_ROUNDS = 10
# Eight players share one deck, so deals stop growing at eight cards
FULL_TABLE = 8
FULL_TABLE_DEAL_SIZE = 8


def deal_size(round_number: int, player_count: int) -> int:
    cap = FULL_TABLE_DEAL_SIZE if player_count == FULL_TABLE else MAX_DEAL_SIZE
    return min(round_number, cap)


class PlayerRounds:
    """One player's round history. Only the last round is ever edited."""

    def __init__(self, player: Player, id: Optional[str] = None, rounds: Optional[List[Round]] = None):
        self.id = id or str(uuid.uuid4())
        self._player = player
        self._rounds: List[Round] = list(rounds or [])

    @property
    def player(self) -> Player:
        return self._player

    @property
    def rounds(self) -> tuple:
        return tuple(self._rounds)

    @property
    def current_round(self) -> Round:
        if not self._rounds:
            raise InvalidState('No rounds have been dealt')
        return self._rounds[-1]

    def add_round(self, player_count: int) -> Round:
        if len(self._rounds) >= MAX_ROUNDS:
            raise InvalidState(f"Cannot have more than {MAX_ROUNDS} rounds")
        new_round = Round(deal_size(len(self._rounds) + 1, player_count))
        self._rounds.append(new_round)
        return new_round

    def remove_last_round(self) -> None:
        if len(self._rounds) <= 1:
            raise InvalidState('Cannot remove the only round')
        self._rounds.pop()

    def set_bid(self, bid: int) -> Round:
        return self.current_round.set_bid(bid)

    def clear_bid(self) -> Round:
        return self.current_round.clear_bid()

    def set_score(self, tricks_taken: int, bonus: int) -> Round:
        # Apply to a copy so a rejected bonus leaves tricks taken untouched
        scored = copy.copy(self.current_round)
        scored.set_tricks_taken(tricks_taken)
        scored.set_bonus(bonus)
        self._rounds[-1] = scored
        return scored

    def clear_score(self) -> Round:
        return self.current_round.clear_tricks_taken()

    def total_score(self) -> int:
        return sum(r.get_score() for r in self._rounds)

    def __eq__(self, other):
        if not isinstance(other, PlayerRounds):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return f"PlayerRounds(player={self._player!r}, rounds={len(self._rounds)})"

    def to_dict(self):
        return {
            'id': self.id,
            'player': self._player.to_dict(),
            'rounds': [r.to_dict() for r in self._rounds],
        }

    @classmethod
    def from_dict(cls, data) -> 'PlayerRounds':
        return cls(
            Player.from_dict(data['player']),
            id=data['id'],
            rounds=[Round.from_dict(r) for r in data.get('rounds', [])],
        )

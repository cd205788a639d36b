import uuid
from typing import Optional

from .errors import ValidationError

MAX_DEAL_SIZE = 10


def _check_int(name: str, value) -> int:
    # bool is an int subclass; True is not a bid
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{name} must be an integer")
    return value


class Round:
    """One deal for one player: bid, tricks taken and bonus.

    Fields left unset are None. Tricks taken need a bid and a non-zero bonus
    needs tricks taken equal to the bid, so clearing a field also clears the
    fields that depend on it.
    """

    def __init__(self, max_bid: int, id: Optional[str] = None):
        max_bid = _check_int('Max bid', max_bid)
        if not 0 < max_bid <= MAX_DEAL_SIZE:
            raise ValidationError(f"Max bid must be between 1 and {MAX_DEAL_SIZE}")
        self.id = id or str(uuid.uuid4())
        self.max_bid = max_bid
        self.bid: Optional[int] = None
        self.tricks_taken: Optional[int] = None
        self.bonus: Optional[int] = None

    def set_bid(self, bid: int) -> 'Round':
        bid = _check_int('Bid', bid)
        if bid < 0 or bid > self.max_bid:
            raise ValidationError('Bid must be between 0 and the max bid')
        if self.bid != bid:
            self.tricks_taken = None
            self.bonus = None
        self.bid = bid
        return self

    def clear_bid(self) -> 'Round':
        self.bid = None
        self.tricks_taken = None
        self.bonus = None
        return self

    def set_tricks_taken(self, tricks_taken: int) -> 'Round':
        tricks_taken = _check_int('Tricks taken', tricks_taken)
        if self.bid is None:
            raise ValidationError('Cannot set tricks taken without a bid')
        if tricks_taken < 0 or tricks_taken > self.max_bid:
            raise ValidationError('Tricks taken must be between 0 and the max bid')
        if tricks_taken != self.bid:
            self.bonus = None
        self.tricks_taken = tricks_taken
        return self

    def clear_tricks_taken(self) -> 'Round':
        self.tricks_taken = None
        self.bonus = None
        return self

    def set_bonus(self, bonus: int) -> 'Round':
        bonus = _check_int('Bonus', bonus)
        if bonus != 0:
            if self.bid is None:
                raise ValidationError('Cannot set a bonus without a bid')
            if self.bid != self.tricks_taken:
                raise ValidationError('Cannot set bonus without matching bid and tricks taken')
            if bonus < 0 or bonus % 10 != 0:
                raise ValidationError('Bonus must be a positive multiple of 10')
        self.bonus = bonus
        return self

    def clear_bonus(self) -> 'Round':
        self.bonus = None
        return self

    @property
    def is_scored(self) -> bool:
        return self.tricks_taken is not None

    def get_score(self) -> int:
        if not self.is_scored:
            return 0
        bid = self.bid or 0
        tricks_taken = self.tricks_taken or 0
        bonus = self.bonus or 0

        if bid != tricks_taken:
            return -abs(bid - tricks_taken) * 10 if bid != 0 else -self.max_bid * 10
        return tricks_taken * 20 + bonus if bid != 0 else self.max_bid * 10 + bonus

    def __eq__(self, other):
        if not isinstance(other, Round):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return (f"Round(max_bid={self.max_bid}, bid={self.bid}, "
                f"tricks_taken={self.tricks_taken}, bonus={self.bonus})")

    def to_dict(self):
        return {
            'id': self.id,
            'maxBid': self.max_bid,
            'bid': self.bid,
            'tricksTaken': self.tricks_taken,
            'bonus': self.bonus,
        }

    @classmethod
    def from_dict(cls, data) -> 'Round':
        r = cls(data['maxBid'], id=data['id'])
        r.bid = data.get('bid')
        r.tricks_taken = data.get('tricksTaken')
        r.bonus = data.get('bonus')
        return r

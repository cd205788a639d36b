import random
from enum import IntEnum
from typing import List, Optional

from .errors import ValidationError


class Difficulty(IntEnum):
    EASY = 0
    MEDIUM = 1
    HARD = 2

    @property
    def tolerance(self) -> int:
        """How far the table's total bid may drift from the deal size."""
        return int(self)

    @classmethod
    def parse(cls, raw) -> 'Difficulty':
        if isinstance(raw, cls):
            return raw
        text = str(raw).strip()
        try:
            if isinstance(raw, int) and not isinstance(raw, bool):
                return cls(raw)
            if text.lstrip('-').isdigit():
                return cls(int(text))
            return cls[text.upper()]
        except (KeyError, ValueError):
            raise ValidationError(f"Unknown difficulty {raw!r}") from None


def generate_random_bids(deal_size: int, player_count: int,
                         difficulty: Difficulty = Difficulty.EASY,
                         rng: Optional[random.Random] = None) -> List[int]:
    """Split a deal among the table.

    Easy bids always add up to the deal size; Medium and Hard land within
    one and two tricks of it. Seats are filled in random order and the last
    seat filled takes whatever is left, so no bid leaves [0, deal_size].
    """
    rng = rng or random
    tolerance = Difficulty.parse(difficulty).tolerance
    target = deal_size + rng.randint(-tolerance, tolerance)
    target = max(0, min(target, deal_size * player_count))

    bids = [0] * player_count
    seats = list(range(player_count))
    rng.shuffle(seats)

    remaining = target
    for filled, seat in enumerate(seats[:-1]):
        seats_after = player_count - filled - 1
        low = max(0, remaining - deal_size * seats_after)
        high = min(deal_size, remaining)
        bids[seat] = rng.randint(low, high)
        remaining -= bids[seat]
    bids[seats[-1]] = remaining
    return bids

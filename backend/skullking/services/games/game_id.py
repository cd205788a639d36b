import random
import re
from typing import Optional

from .errors import FormatError

ALPHABET = 'ABCDEFGHJKLMNPQRSTUVWXYZ0123456789'
_VALID = re.compile(r'^[A-HJ-NP-Z0-9]{4}$')


def normalize_game_id(raw) -> str:
    """Uppercase, keep the first four characters and swap O/I for 0/1.

    Raises FormatError when the result is not four characters from
    ALPHABET.
    """
    if not isinstance(raw, str):
        raise FormatError(raw)
    normalized = raw.upper()[:4].replace('O', '0').replace('I', '1')
    if not _VALID.match(normalized):
        raise FormatError(raw)
    return normalized


class GameId:
    """Join code and storage key of a game."""

    __slots__ = ('_value',)

    def __init__(self, raw):
        if isinstance(raw, GameId):
            raw = raw.value
        object.__setattr__(self, '_value', normalize_game_id(raw))

    @classmethod
    def create_random(cls, rng: Optional[random.Random] = None) -> 'GameId':
        rng = rng or random
        return cls(''.join(rng.choices(ALPHABET, k=4)))

    @classmethod
    def try_parse(cls, raw) -> Optional['GameId']:
        try:
            return cls(raw)
        except FormatError:
            return None

    @property
    def value(self) -> str:
        return self._value

    def __setattr__(self, name, value):
        raise AttributeError('GameId is immutable')

    def __eq__(self, other):
        if isinstance(other, GameId):
            return self._value == other._value
        return NotImplemented

    def __hash__(self):
        return hash(self._value)

    def __str__(self):
        return self._value

    def __repr__(self):
        return f"GameId({self._value!r})"

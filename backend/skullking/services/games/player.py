import uuid
from typing import Optional

from .errors import ValidationError


def _check_name(name) -> str:
    if not isinstance(name, str) or not name.strip():
        raise ValidationError('Player name is required')
    return name.strip()


class Player:
    """A seat at the table. Equality is by id so renames keep identity."""

    def __init__(self, name: str, id: Optional[str] = None, is_ghost: bool = False):
        self.id = id or str(uuid.uuid4())
        self.name = _check_name(name)
        self.is_ghost = is_ghost

    @classmethod
    def ghost(cls) -> 'Player':
        return cls('Ghost', is_ghost=True)

    def rename(self, name: str) -> None:
        self.name = _check_name(name)

    def __eq__(self, other):
        if isinstance(other, Player):
            return self.id == other.id
        return NotImplemented

    def __hash__(self):
        return hash(self.id)

    def __repr__(self):
        return f"Player(id={self.id!r}, name={self.name!r})"

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'isGhost': self.is_ghost,
        }

    @classmethod
    def from_dict(cls, data) -> 'Player':
        return cls(data['name'], id=data['id'], is_ghost=bool(data.get('isGhost', False)))

"""Game domain: rounds, player histories and the game state machine.

This package holds the pure game rules and the storage helpers around them,
imported by the HTTP routes so transport concerns stay separate from core
game mechanics.
"""

from .errors import (
    DuplicatePlayer,
    FormatError,
    GameExists,
    InvalidState,
    NotAuthorized,
    NotFound,
    ProtectedPlayer,
    RosterFull,
    SkullKingError,
    StaleFingerprint,
    ValidationError,
)
from .game import Game, GameStatus
from .game_id import GameId
from .player import Player
from .player_rounds import PlayerRounds
from .random_bids import Difficulty
from .round import Round

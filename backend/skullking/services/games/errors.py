"""Errors raised by the game domain and the layers wrapping it.

Routes translate these into HTTP status codes, so every rejected operation
maps to one class here.
"""


class SkullKingError(Exception):
    """Base class for all game errors"""
    pass


# ============ Input errors ============

class FormatError(SkullKingError):
    """Game id could not be normalized"""
    def __init__(self, raw):
        self.raw = raw
        super().__init__(f"Could not normalize game id {raw!r}")


class ValidationError(SkullKingError):
    """Bid, tricks taken, bonus, deal size or name out of range"""
    pass


# ============ Roster errors ============

class DuplicatePlayer(SkullKingError):
    def __init__(self, player_id):
        self.player_id = player_id
        super().__init__(f"Player {player_id} already in game")


class RosterFull(SkullKingError):
    pass


class ProtectedPlayer(SkullKingError):
    """The controlling player cannot be removed or moved"""
    pass


class NotFound(SkullKingError):
    def __init__(self, what):
        self.what = what
        super().__init__(f"{what} not found")


# ============ State errors ============

class InvalidState(SkullKingError):
    """Operation attempted in the wrong phase or past the round limit"""
    pass


# ============ Boundary errors ============

class StaleFingerprint(SkullKingError):
    """The caller's known hash no longer matches the stored game"""
    def __init__(self, game_id):
        self.game_id = game_id
        super().__init__(f"Game {game_id} has changed since it was last fetched")


class NotAuthorized(SkullKingError):
    pass


class GameExists(SkullKingError):
    def __init__(self, game_id):
        self.game_id = game_id
        super().__init__(f"Game {game_id} already exists")

"""Persistence for game aggregates.

A game row holds the serialized aggregate and its fingerprint. Writes are a
compare-and-swap on the fingerprint: an update only lands if the stored
fingerprint is still the one the caller loaded, so two requests racing on
the same game cannot both win.
"""

import json
import logging
import random
from typing import Optional, Tuple

from sqlalchemy.exc import IntegrityError

from skullking import db
from skullking.models import GameRecord, utcnow
from .errors import GameExists, NotFound, StaleFingerprint
from .game import Game
from .game_id import GameId

logger = logging.getLogger(__name__)


def _serialize(game: Game) -> str:
    return json.dumps(game.to_dict())


def load_game(game_id: GameId) -> Tuple[Game, str]:
    """Return the stored game and the fingerprint it was saved with."""
    record = db.session.get(GameRecord, str(game_id))
    if record is None:
        raise NotFound(f"Game {game_id}")
    return Game.from_dict(record.load_state()), record.fingerprint


def current_fingerprint(game_id: GameId) -> Optional[str]:
    row = db.session.query(GameRecord.fingerprint).filter(GameRecord.id == str(game_id)).first()
    return row[0] if row else None


def game_exists(game_id: GameId) -> bool:
    return current_fingerprint(game_id) is not None


def allocate_game_id(rng: Optional[random.Random] = None) -> GameId:
    """Generate a random game id that is not in use yet."""
    game_id = GameId.create_random(rng)
    while game_exists(game_id):
        logger.warning(f"Game id collision detected, regenerating: {game_id}")
        game_id = GameId.create_random(rng)
    return game_id


def create_game(game: Game) -> str:
    if game_exists(game.id):
        raise GameExists(game.id)

    fp = game.get_hash_code()
    db.session.add(GameRecord(id=str(game.id), state=_serialize(game), fingerprint=fp))
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise GameExists(game.id)
    return fp


def save_game(game: Game, expected_fingerprint: str) -> str:
    """Persist a mutated game, failing if someone else saved it first."""
    fp = game.get_hash_code()
    updated = GameRecord.query.filter_by(id=str(game.id), fingerprint=expected_fingerprint).update({
        'state': _serialize(game),
        'fingerprint': fp,
        'updated_at': utcnow(),
    })
    if updated != 1:
        db.session.rollback()
        logger.info(f"[conflict] game={game.id} expected={expected_fingerprint}")
        raise StaleFingerprint(game.id)
    db.session.commit()
    return fp


def single_game_id() -> Optional[str]:
    """The id of the only stored game, or None unless exactly one exists."""
    ids = db.session.query(GameRecord.id).limit(2).all()
    return ids[0][0] if len(ids) == 1 else None

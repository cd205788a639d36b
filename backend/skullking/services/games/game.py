import logging
import random
from enum import IntEnum
from typing import Iterable, List, Optional, Union

from .errors import DuplicatePlayer, InvalidState, NotFound, ProtectedPlayer, RosterFull, ValidationError
from .fingerprint import fingerprint
from .game_id import GameId
from .player import Player
from .player_rounds import MAX_ROUNDS, PlayerRounds
from .random_bids import Difficulty, generate_random_bids

logger = logging.getLogger(__name__)

MIN_PLAYERS = 2
MAX_PLAYERS = 8
# Random bids are split three ways at least; a ghost fills the third seat
RANDOM_BID_MIN_PLAYERS = 3

PlayerRef = Union[Player, str]


class GameStatus(IntEnum):
    ACCEPTING_PLAYERS = 0
    BIDDING_OPEN = 1
    BIDDING_CLOSED = 2
    GAME_OVER = 3


class Game:
    """The game aggregate and its phase state machine.

    AcceptingPlayers -> BiddingOpen <-> BiddingClosed -> ... -> GameOver

    Index 0 of the roster is the controlling player for the whole game.
    Every player's round history moves in lock-step: rounds are only ever
    added or removed for the whole table at once. Each operation checks its
    preconditions before touching any field, so a raised error means the
    game is unchanged.
    """

    def __init__(self, id: GameId, player_round_info: List[PlayerRounds],
                 status: GameStatus = GameStatus.ACCEPTING_PLAYERS,
                 is_random_bid: bool = False, difficulty: Optional[Difficulty] = None):
        self.id = GameId(id)
        self.status = GameStatus(status)
        self.is_random_bid = is_random_bid
        self.difficulty = difficulty
        self._player_round_info = list(player_round_info)

    @classmethod
    def create(cls, founder: Player, game_id: Optional[GameId] = None) -> 'Game':
        game = cls(game_id or GameId.create_random(), [PlayerRounds(founder)])
        logger.info(f"[create] game={game.id} founder={founder.id}")
        return game

    # ---- Roster ----

    @property
    def player_round_info(self) -> tuple:
        return tuple(self._player_round_info)

    @property
    def players(self) -> List[Player]:
        return [pr.player for pr in self._player_round_info]

    @property
    def controlling_player(self) -> Player:
        return self._player_round_info[0].player

    def _index_of(self, player: PlayerRef) -> int:
        player_id = player.id if isinstance(player, Player) else player
        for idx, pr in enumerate(self._player_round_info):
            if pr.player.id == player_id:
                return idx
        raise NotFound(f"Player {player_id}")

    def player_rounds_for(self, player: PlayerRef) -> PlayerRounds:
        return self._player_round_info[self._index_of(player)]

    def is_controlling_player(self, player: PlayerRef) -> bool:
        player_id = player.id if isinstance(player, Player) else player
        return player_id == self.controlling_player.id

    def add_player(self, player: Player) -> PlayerRounds:
        if player in self.players:
            raise DuplicatePlayer(player.id)
        if len(self._player_round_info) >= MAX_PLAYERS:
            raise RosterFull(f"A game cannot have more than {MAX_PLAYERS} players")
        if self.status != GameStatus.ACCEPTING_PLAYERS:
            raise InvalidState('Players can only join before the game starts')

        player_rounds = PlayerRounds(player)
        self._player_round_info.append(player_rounds)
        logger.info(f"[add_player] game={self.id} player={player.id} count={len(self._player_round_info)}")
        return player_rounds

    def remove_player(self, player: PlayerRef) -> None:
        idx = self._index_of(player)
        if idx == 0:
            raise ProtectedPlayer('Cannot remove the controlling player')
        if self.status != GameStatus.ACCEPTING_PLAYERS:
            raise InvalidState('Players can only be removed before the game starts')

        removed = self._player_round_info.pop(idx)
        logger.info(f"[remove_player] game={self.id} player={removed.player.id}")

    def rename_player(self, player: PlayerRef, name: str) -> Player:
        target = self.player_rounds_for(player).player
        target.rename(name)
        return target

    def set_player_order(self, player_ids: Iterable[str]) -> None:
        new_order = list(player_ids)
        if self.status != GameStatus.ACCEPTING_PLAYERS:
            raise InvalidState('Players can only be reordered before the game starts')

        current_ids = [pr.player.id for pr in self._player_round_info]
        if not all(isinstance(pid, str) for pid in new_order) \
                or len(new_order) != len(current_ids) or len(set(new_order)) != len(new_order) \
                or set(new_order) != set(current_ids):
            raise ValidationError('Player order must list every player exactly once')
        if new_order[0] != current_ids[0]:
            raise ProtectedPlayer('The controlling player must stay first')

        by_id = {pr.player.id: pr for pr in self._player_round_info}
        self._player_round_info = [by_id[pid] for pid in new_order]
        logger.info(f"[reorder] game={self.id} order={new_order}")

    # ---- Phases ----

    @property
    def round_number(self) -> int:
        return len(self._player_round_info[0].rounds)

    @property
    def deal_size(self) -> Optional[int]:
        if not self.round_number:
            return None
        return self._player_round_info[0].current_round.max_bid

    def _deal_round(self) -> None:
        player_count = len(self._player_round_info)
        for pr in self._player_round_info:
            pr.add_round(player_count)

    def start_game(self, is_random_bid: bool = False, difficulty=Difficulty.EASY,
                   rng: Optional[random.Random] = None) -> None:
        if self.status != GameStatus.ACCEPTING_PLAYERS:
            raise InvalidState('Game has already started')
        if len(self._player_round_info) < MIN_PLAYERS:
            raise InvalidState(f"At least {MIN_PLAYERS} players are required to start")
        difficulty = Difficulty.parse(difficulty)

        if is_random_bid and len(self._player_round_info) < RANDOM_BID_MIN_PLAYERS:
            self._player_round_info.append(PlayerRounds(Player.ghost()))

        self.is_random_bid = bool(is_random_bid)
        self.difficulty = difficulty if is_random_bid else None
        self._deal_round()
        self.status = GameStatus.BIDDING_OPEN
        logger.info(
            f"[start] game={self.id} players={len(self._player_round_info)} "
            f"random_bid={self.is_random_bid} difficulty={self.difficulty}"
        )
        if self.is_random_bid:
            self._close_bidding_with_random_bids(rng)

    def _close_bidding_with_random_bids(self, rng: Optional[random.Random]) -> None:
        self.set_random_bids(rng)
        self.status = GameStatus.BIDDING_CLOSED

    def set_random_bids(self, rng: Optional[random.Random] = None) -> List[int]:
        bids = generate_random_bids(
            self.deal_size,
            len(self._player_round_info),
            self.difficulty if self.difficulty is not None else Difficulty.EASY,
            rng,
        )
        for pr, bid in zip(self._player_round_info, bids):
            pr.set_bid(bid)
        logger.debug(f"[random_bids] game={self.id} round={self.round_number} bids={bids}")
        return bids

    def move_to_next_phase(self, rng: Optional[random.Random] = None) -> GameStatus:
        if self.status == GameStatus.ACCEPTING_PLAYERS:
            raise InvalidState('Game has not started')
        if self.status == GameStatus.GAME_OVER:
            raise InvalidState('Game is over')

        prev = self.status
        if self.status == GameStatus.BIDDING_OPEN:
            for pr in self._player_round_info:
                if pr.current_round.bid is None:
                    pr.set_bid(0)
            self.status = GameStatus.BIDDING_CLOSED
        else:
            for pr in self._player_round_info:
                current = pr.current_round
                pr.set_score(current.tricks_taken or 0, current.bonus or 0)
            if self.round_number >= MAX_ROUNDS:
                self.status = GameStatus.GAME_OVER
            else:
                self._deal_round()
                self.status = GameStatus.BIDDING_OPEN
                if self.is_random_bid:
                    self._close_bidding_with_random_bids(rng)

        logger.info(f"[next_phase] game={self.id} round={self.round_number} {prev.name} -> {self.status.name}")
        return self.status

    def move_to_previous_phase(self) -> GameStatus:
        if self.status == GameStatus.ACCEPTING_PLAYERS:
            raise InvalidState('Game has not started')
        if self.status == GameStatus.BIDDING_OPEN and self.round_number <= 1:
            raise InvalidState('Cannot move back before the first round')

        prev = self.status
        if self.status == GameStatus.BIDDING_CLOSED:
            for pr in self._player_round_info:
                pr.clear_score()
            self.status = GameStatus.BIDDING_OPEN
        elif self.status == GameStatus.BIDDING_OPEN:
            for pr in self._player_round_info:
                pr.remove_last_round()
            self.status = GameStatus.BIDDING_CLOSED
        else:
            self.status = GameStatus.BIDDING_CLOSED

        logger.info(f"[previous_phase] game={self.id} round={self.round_number} {prev.name} -> {self.status.name}")
        return self.status

    # ---- Per-player entry ----

    def _require_status(self, status: GameStatus, action: str) -> None:
        if self.status != status:
            raise InvalidState(f"Cannot {action} while the game is {self.status.name}")

    def set_bid(self, player: PlayerRef, bid: int):
        player_rounds = self.player_rounds_for(player)
        self._require_status(GameStatus.BIDDING_OPEN, 'set a bid')
        return player_rounds.set_bid(bid)

    def clear_bid(self, player: PlayerRef):
        player_rounds = self.player_rounds_for(player)
        self._require_status(GameStatus.BIDDING_OPEN, 'clear a bid')
        return player_rounds.clear_bid()

    def set_score(self, player: PlayerRef, tricks_taken: int, bonus: int = 0):
        player_rounds = self.player_rounds_for(player)
        self._require_status(GameStatus.BIDDING_CLOSED, 'set a score')
        return player_rounds.set_score(tricks_taken, bonus)

    def clear_score(self, player: PlayerRef):
        player_rounds = self.player_rounds_for(player)
        self._require_status(GameStatus.BIDDING_CLOSED, 'clear a score')
        return player_rounds.clear_score()

    # ---- Scores / serialization ----

    def scores(self) -> dict:
        return {pr.player.id: pr.total_score() for pr in self._player_round_info}

    def get_hash_code(self) -> str:
        return fingerprint(self.to_dict())

    def __eq__(self, other):
        if not isinstance(other, Game):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return f"Game(id={self.id}, status={self.status.name}, players={len(self._player_round_info)})"

    def to_dict(self):
        return {
            'id': str(self.id),
            'status': int(self.status),
            'isRandomBid': self.is_random_bid,
            'difficulty': int(self.difficulty) if self.difficulty is not None else None,
            'playerRoundInfo': [pr.to_dict() for pr in self._player_round_info],
        }

    @classmethod
    def from_dict(cls, data) -> 'Game':
        difficulty = data.get('difficulty')
        return cls(
            GameId(data['id']),
            [PlayerRounds.from_dict(pr) for pr in data.get('playerRoundInfo', [])],
            status=GameStatus(data.get('status', GameStatus.ACCEPTING_PLAYERS)),
            is_random_bid=bool(data.get('isRandomBid', False)),
            difficulty=Difficulty(difficulty) if difficulty is not None else None,
        )

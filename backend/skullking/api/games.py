from flask import Blueprint, jsonify, request, current_app
from skullking.services.games import (
    Game,
    GameExists,
    GameId,
    InvalidState,
    NotAuthorized,
    NotFound,
    Player,
    SkullKingError,
    StaleFingerprint,
    ValidationError,
    DuplicatePlayer,
    FormatError,
    ProtectedPlayer,
    RosterFull,
)
from skullking.services.games import store


games = Blueprint('games', __name__)

_ERROR_STATUS = {
    StaleFingerprint: 412,
    GameExists: 409,
    NotFound: 404,
    NotAuthorized: 401,
    ValidationError: 400,
    FormatError: 400,
    DuplicatePlayer: 400,
    RosterFull: 400,
    ProtectedPlayer: 400,
    InvalidState: 400,
}


@games.errorhandler(SkullKingError)
def handle_game_error(exc):
    status = next((code for cls, code in _ERROR_STATUS.items() if isinstance(exc, cls)), 400)
    current_app.logger.info(f"[rejected] {request.method} {request.path} status={status} error={exc}")
    return jsonify({'error': str(exc)}), status


def _parse_game_id(game_code: str) -> GameId:
    game_id = GameId.try_parse(game_code)
    if game_id is None:
        raise NotFound(f"Game {game_code}")
    return game_id


def _game_payload(game: Game, fingerprint: str) -> dict:
    payload = game.to_dict()
    payload['hash'] = fingerprint
    for entry, player_rounds in zip(payload['playerRoundInfo'], game.player_round_info):
        entry['totalScore'] = player_rounds.total_score()
    return payload


def _json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _int_arg(args, name: str, default=None) -> int:
    raw = args.get(name)
    if raw is None or raw == '':
        if default is not None:
            return default
        raise ValidationError(f"{name} is required")
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ValidationError(f"{name} must be an integer") from None


def _bool_arg(args, name: str) -> bool:
    return str(args.get(name, '')).strip().lower() in ('1', 'true', 'yes')


def _check_known_hash(game: Game, known_hash, stored_hash: str) -> None:
    if not known_hash:
        raise ValidationError('knownHash is required')
    if known_hash != stored_hash:
        raise StaleFingerprint(game.id)


def _require_controller(game: Game, player_id) -> None:
    if not player_id or not game.is_controlling_player(player_id):
        raise NotAuthorized('Only the controlling player may do that')


def _require_member(game: Game, player_id) -> None:
    if not player_id:
        raise NotAuthorized('playerId is required')
    game.player_rounds_for(player_id)


def _controller_action(game_code: str, data, action, tag: str):
    """Load, check hash and role, apply `action` and save with compare-and-swap."""
    game, stored_hash = store.load_game(_parse_game_id(game_code))
    _check_known_hash(game, data.get('knownHash'), stored_hash)
    _require_controller(game, data.get('playerId'))
    action(game)
    new_hash = store.save_game(game, stored_hash)
    current_app.logger.info(f"[{tag}] game={game.id} status={game.status.name} round={game.round_number}")
    return jsonify(_game_payload(game, new_hash))


@games.route('', methods=['POST'])
def create_game():
    data = _json_body()
    player_name = data.get('playerName')
    if not isinstance(player_name, str) or not player_name.strip():
        return jsonify({'error': 'playerName is required'}), 400

    # Well-known demo games get fixed codes
    sample_code = current_app.config.get('SAMPLE_GAMES', {}).get(player_name)
    game_id = GameId(sample_code) if sample_code else store.allocate_game_id()

    game = Game.create(Player(player_name), game_id)
    fingerprint = store.create_game(game)
    current_app.logger.info(f"[create] game={game.id}")
    return jsonify(_game_payload(game, fingerprint)), 201


@games.route('/getid', methods=['GET'])
def get_single_game_id():
    game_id = store.single_game_id()
    if game_id is None:
        return '', 204
    return jsonify({'id': game_id})


@games.route('/<string:game_code>', methods=['GET'])
@games.route('/<string:game_code>/', methods=['GET'])
def get_game(game_code):
    game_id = _parse_game_id(game_code)
    known_hash = request.args.get('knownHash')
    if known_hash and known_hash == store.current_fingerprint(game_id):
        return '', 304

    game, fingerprint = store.load_game(game_id)
    return jsonify(_game_payload(game, fingerprint))


@games.route('/<string:game_code>/players', methods=['PUT'])
def upsert_player(game_code):
    data = _json_body()
    name = data.get('name')
    player_id = data.get('id')

    game, stored_hash = store.load_game(_parse_game_id(game_code))
    if player_id:
        player = game.rename_player(player_id, name)
        tag = 'rename_player'
    else:
        player = Player(name)
        game.add_player(player)
        tag = 'add_player'
    store.save_game(game, stored_hash)
    current_app.logger.info(f"[{tag}] game={game.id} player={player.id}")
    return jsonify(player.to_dict())


@games.route('/<string:game_code>/players/reorder', methods=['PUT'])
def reorder_players(game_code):
    data = _json_body()
    order = data.get('playerOrder')
    if not isinstance(order, list):
        return jsonify({'error': 'playerOrder must be a list of player ids'}), 400
    return _controller_action(game_code, data, lambda game: game.set_player_order(order), 'reorder')


@games.route('/<string:game_code>/players/<string:player_id>', methods=['DELETE'])
def remove_player(game_code, player_id):
    return _controller_action(game_code, request.args, lambda game: game.remove_player(player_id), 'remove_player')


@games.route('/<string:game_code>/start', methods=['GET'])
def start_game(game_code):
    args = request.args
    is_random_bid = _bool_arg(args, 'randomBidMode')
    difficulty = args.get('gameDifficulty') or 'Easy'
    return _controller_action(
        game_code, args,
        lambda game: game.start_game(is_random_bid=is_random_bid, difficulty=difficulty),
        'start',
    )


@games.route('/<string:game_code>/movenext', methods=['GET'])
def move_next(game_code):
    return _controller_action(game_code, request.args, lambda game: game.move_to_next_phase(), 'next_phase')


@games.route('/<string:game_code>/moveprevious', methods=['GET'])
def move_previous(game_code):
    return _controller_action(game_code, request.args, lambda game: game.move_to_previous_phase(), 'previous_phase')


@games.route('/<string:game_code>/setbid', methods=['GET'])
def set_bid(game_code):
    args = request.args
    bid = _int_arg(args, 'bid')
    player_id = args.get('playerId')

    game, stored_hash = store.load_game(_parse_game_id(game_code))
    _check_known_hash(game, args.get('knownHash'), stored_hash)
    _require_member(game, player_id)
    game.set_bid(player_id, bid)
    new_hash = store.save_game(game, stored_hash)
    current_app.logger.info(f"[set_bid] game={game.id} player={player_id} bid={bid}")
    return jsonify(_game_payload(game, new_hash))


@games.route('/<string:game_code>/setscore', methods=['GET'])
def set_score(game_code):
    args = request.args
    tricks_taken = _int_arg(args, 'trickstaken')
    bonus = _int_arg(args, 'bonus', default=0)
    player_id = args.get('playerId')

    game, stored_hash = store.load_game(_parse_game_id(game_code))
    _check_known_hash(game, args.get('knownHash'), stored_hash)
    _require_member(game, player_id)
    game.set_score(player_id, tricks_taken, bonus)
    new_hash = store.save_game(game, stored_hash)
    current_app.logger.info(
        f"[set_score] game={game.id} player={player_id} tricks_taken={tricks_taken} bonus={bonus}"
    )
    return jsonify(_game_payload(game, new_hash))

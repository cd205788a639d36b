import os
import sys
import pytest

# Ensure the backend root (containing the `skullking` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from skullking import create_app, db
from skullking.services.games import Game, Player


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    CORS_ORIGINS = ['http://localhost:5173']
    LOG_LEVEL = 'DEBUG'
    SAMPLE_GAMES = {
        '__Sample Game 1__': 'ABCD',
        '__Sample Game 2__': '1234',
    }


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        # Ensure models are imported so tables are created
        import skullking.models  # noqa: F401
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def ryan():
    return Player('Ryan')


@pytest.fixture()
def two_player_game(ryan):
    game = Game.create(ryan)
    game.add_player(Player('Bob'))
    return game

from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
from flask_migrate import Migrate
import logging
import click
from .config import Config

db = SQLAlchemy()
migrate = Migrate()

def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    log_level = flask_app.config.get('LOG_LEVEL', 'INFO')
    flask_app.logger.setLevel(log_level)
    logging.getLogger('skullking').setLevel(log_level)

    db.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, origins=flask_app.config.get('CORS_ORIGINS', []))

    # Import and register blueprints here
    from skullking.main import main
    flask_app.register_blueprint(main)

    from skullking.api.games import games
    flask_app.register_blueprint(games, url_prefix='/games')

    @click.command('db-reset')
    def db_reset_command():
        """Drops, recreates, and seeds the database with the sample games."""
        from skullking.services.games import Game, GameId, Player
        from skullking.services.games.store import create_game
        with flask_app.app_context():
            db.drop_all()
            db.create_all()

            for name, code in flask_app.config.get('SAMPLE_GAMES', {}).items():
                create_game(Game.create(Player(name), GameId(code)))

            print('Database has been reset and seeded!')

    flask_app.cli.add_command(db_reset_command)

    return flask_app

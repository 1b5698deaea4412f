from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_socketio import SocketIO
import click
from config import Config

db = SQLAlchemy()
migrate = Migrate()
# Only used to run background timer workers; Slack never talks websockets
socketio = SocketIO(async_mode=None)

def create_app(config_class=Config, provider=None, directory=None, delivery=None):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    db.init_app(flask_app)
    migrate.init_app(flask_app, db)
    socketio.init_app(flask_app)

    # Ensure models are registered before the store touches them
    from trebekbot import models  # noqa: F401

    # Import and register blueprints here
    from trebekbot.webhook import webhook
    flask_app.register_blueprint(webhook)

    # One game per process; state lives in the store, never on this object
    from trebekbot.services.game.session import build_game
    flask_app.extensions['trebekbot'] = build_game(
        flask_app, provider=provider, directory=directory, delivery=delivery
    )

    @click.command('flush-state')
    def flush_state_command():
        """Creates the state table if needed and wipes every game, score and cache."""
        with flask_app.app_context():
            db.create_all()
            flask_app.extensions['trebekbot'].store.flush()
            print('Game state has been flushed!')

    flask_app.cli.add_command(flush_state_command)

    return flask_app

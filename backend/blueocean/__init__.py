from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
import random
import click
import logging
from config import Config

socketio = SocketIO(async_mode=None)


def _allowed_origins(config):
    raw = config.get('CORS_ORIGINS') or '*'
    if raw == '*':
        return '*'
    return [o.strip() for o in raw.split(',') if o.strip()]


def build_router(config):
    from blueocean.services.game import EventRouter, GameSession
    seed = config.get('RANDOM_SEED')
    rng = random.Random(seed) if seed not in (None, '') else random.Random()
    session = GameSession(game_code=config.get('GAME_CODE') or 'RSU150')
    return EventRouter(session, rng=rng)


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(getattr(logging, str(flask_app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO))

    allowed_origins = _allowed_origins(flask_app.config)
    CORS(flask_app, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # One session per process, owned by the router
    flask_app.extensions['blueocean'] = build_router(flask_app.config)

    # Import and register blueprints here
    from blueocean.main import main
    flask_app.register_blueprint(main)

    from blueocean.socketio_events import make_broadcaster, register_socketio_handlers
    namespace = flask_app.config.get('SOCKETIO_NAMESPACE', '/')
    flask_app.extensions['blueocean_broadcaster'] = make_broadcaster(namespace)
    register_socketio_handlers(namespace=namespace)

    @click.command('decks')
    def decks_command():
        """Prints the customer, pain and event cards."""
        from blueocean.services.game.decks import DECKS
        for name, cards in DECKS.items():
            click.echo(f"[{name}]")
            for card in cards:
                click.echo(f"  {card}")

    flask_app.cli.add_command(decks_command)

    return flask_app

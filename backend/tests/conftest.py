import os
import sys
import random
import pytest

# Ensure the backend root (containing the `blueocean` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from blueocean import create_app, socketio
from blueocean.services.game import EventRouter, GameSession

FIXED_NOW_MS = 1_700_000_000_000


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    GAME_CODE = 'TEST01'
    CORS_ORIGINS = '*'
    SOCKETIO_NAMESPACE = '/'
    LOG_LEVEL = 'DEBUG'
    RANDOM_SEED = '7'


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=flask_app.test_client(),
    )
    yield test_client
    try:
        test_client.disconnect()
    except Exception:
        pass


@pytest.fixture()
def session():
    return GameSession()


@pytest.fixture()
def router(session):
    return EventRouter(session, rng=random.Random(1234), clock=lambda: FIXED_NOW_MS)

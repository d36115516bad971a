import os
import sys
import pytest

# Ensure the backend root (containing the `blindtest` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from blindtest import create_app, db, socketio
from blindtest.services.blindtest.playback import NullPlayback


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    ADD_EVERY_USER = False
    CHAT_NOTIFICATIONS = True
    DEVICE_ID = 'test-device'
    TWITCH_CHANNEL = 'testchannel'
    DISPLAYED_USER_LIMIT = 70
    CONTROLLER_DEBOUNCE_MS = 0


TRACKS = [
    {
        'uri': 'spotify:track:bohemian',
        'offset_ms': 30000,
        'title': 'Bohemian Rhapsody - Remastered 2011',
        'artists': ['Queen'],
        'img': 'https://img.example/queen.jpg',
    },
    {
        'uri': 'spotify:track:lucky',
        'title': 'Get Lucky (feat. Pharrell Williams)',
        'artists': ['Daft Punk', 'Pharrell Williams'],
        'img': 'https://img.example/ram.jpg',
    },
]


@pytest.fixture()
def playback():
    return NullPlayback()


@pytest.fixture()
def make_app():
    """Build extra apps (other config or playback); tables are created and dropped around the test."""
    created = []

    def _make(config_class=TestConfig, playback=None):
        application = create_app(config_class, playback=playback)
        with application.app_context():
            import blindtest.models  # noqa: F401
            db.create_all()
        created.append(application)
        return application

    yield _make
    for application in created:
        with application.app_context():
            db.session.remove()
            db.drop_all()


@pytest.fixture()
def flask_app(playback):
    application = create_app(TestConfig, playback=playback)
    with application.app_context():
        # Ensure models are imported so tables are created
        import blindtest.models  # noqa: F401
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=flask_app.test_client(),
        namespace='/ws'
    )
    yield test_client
    try:
        test_client.disconnect(namespace='/ws')
    except Exception:
        pass

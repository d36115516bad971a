from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
import json
import click
from config import Config

db = SQLAlchemy()
migrate = Migrate()
allowed_origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:5174",
    "http://127.0.0.1:5174",
]
socketio = SocketIO(cors_allowed_origins=allowed_origins, async_mode=None)


def create_app(config_class=Config, playback=None):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    db.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, supports_credentials=True, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    from blindtest.api.blindtest import blindtest
    flask_app.register_blueprint(blindtest, url_prefix='/api/blindtest')

    # Collaborators; the session itself is built lazily from storage by get_session()
    from blindtest.services.blindtest.chat import SocketIOChatSource
    from blindtest.services.blindtest.playback import NullPlayback
    flask_app.extensions['blindtest_chat'] = SocketIOChatSource(channel=flask_app.config.get('TWITCH_CHANNEL'))
    flask_app.extensions['blindtest_playback'] = playback or NullPlayback()

    # Register Socket.IO event handlers
    from blindtest.socketio_events import register_socketio_handlers
    register_socketio_handlers(testing=flask_app.config.get('TESTING', False))

    @click.command('db-reset')
    def db_reset_command():
        """Drops and recreates the database tables."""
        import blindtest.models  # noqa: F401
        with flask_app.app_context():
            db.drop_all()
            db.create_all()
            print('Database has been reset!')

    @click.command('import-tracks')
    @click.argument('path', type=click.Path(exists=True, dir_okay=False))
    def import_tracks_command(path):
        """Replaces the track list with a JSON file and restarts from the first track."""
        from blindtest.services.blindtest import storage
        with open(path, encoding='utf-8') as fh:
            items = json.load(fh)
        if isinstance(items, dict):
            items = items.get('tracks', [])
        with flask_app.app_context():
            tracks = storage.replace_tracks(items)
            print(f'Imported {len(tracks)} tracks.')

    flask_app.cli.add_command(db_reset_command)
    flask_app.cli.add_command(import_tracks_command)

    return flask_app

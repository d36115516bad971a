import logging
import threading
from dataclasses import dataclass
from typing import Iterable, List, Mapping, Optional

from flask import current_app

from . import storage
from .chat import announcement
from .engine import Award, BlindTestEngine
from .errors import NoTracksLeftError, PlaybackError
from .leaderboard import DEFAULT_DISPLAY_LIMIT
from .ledger import ScoreLedger
from .playback import NullPlayback
from .targets import build_target, build_targets

logger = logging.getLogger('blindtest')

_init_lock = threading.Lock()


@dataclass
class BlindTestSettings:
    add_every_user: bool = False
    chat_notifications: bool = False
    device_id: Optional[str] = None
    twitch_channel: Optional[str] = None
    displayed_user_limit: int = DEFAULT_DISPLAY_LIMIT

    @classmethod
    def from_config(cls, config: Mapping) -> 'BlindTestSettings':
        return cls(
            add_every_user=bool(config.get('ADD_EVERY_USER', False)),
            chat_notifications=bool(config.get('CHAT_NOTIFICATIONS', False)),
            device_id=config.get('DEVICE_ID'),
            twitch_channel=config.get('TWITCH_CHANNEL'),
            displayed_user_limit=int(config.get('DISPLAYED_USER_LIMIT', DEFAULT_DISPLAY_LIMIT)),
        )


class BlindTestSession:
    """One blind-test: the track list, where we are in it, and the engine.

    State is handed to ``store`` after every state-changing operation. All
    methods are serialized by ``lock``.
    """

    def __init__(self, engine: BlindTestEngine, playback, settings: BlindTestSettings,
                 tracks: Optional[List[dict]] = None, done_tracks: int = 0, store=storage):
        self.lock = threading.RLock()
        self.engine = engine
        self.playback = playback
        self.settings = settings
        self.tracks = list(tracks or [])
        self.done_tracks = done_tracks
        self.store = store
        self.playing = False
        self.paused = False
        self.cover_uri: Optional[str] = None
        self.chat = None

    # ---- round lifecycle ----

    def next_track(self) -> dict:
        with self.lock:
            self._backup()
            if self.done_tracks >= len(self.tracks):
                raise NoTracksLeftError('No tracks left')
            track = self.tracks[self.done_tracks]
            # The previous round is over even when the next track fails to start
            self.playing = False
            device = self.settings.device_id
            try:
                self.playback.start(track['uri'], int(track.get('offset_ms') or 0), device)
                self.playback.set_repeat(True, device)
            except PlaybackError as exc:
                logger.warning(f"[next-track] playback failed track={track.get('uri')}: {exc}")
                raise
            self.done_tracks += 1
            self.engine.start_round(build_targets(track['title'], track.get('artists') or []))
            self.cover_uri = track.get('img')
            self.playing = True
            self.paused = False
            self.store.save_progress(self.done_tracks)
            logger.info(f"[next-track] #{self.done_tracks}/{len(self.tracks)} uri={track['uri']}")
            return track

    def start_round(self, title: Optional[str], artists: Iterable[str] = (), cover_uri: Optional[str] = None) -> None:
        """Round for a track played outside of the track list; no playback command is sent."""
        artists = [a for a in artists if a]
        targets = build_targets(title, artists) if title else [build_target(a) for a in artists]
        with self.lock:
            self.engine.start_round(targets)
            self.cover_uri = cover_uri
            self.playing = True
            self.paused = False

    def reveal(self) -> List[int]:
        with self.lock:
            if not self.playing:
                return []
            opened = self.engine.reveal()
            self._backup()
            return opened

    def pause(self) -> bool:
        with self.lock:
            if not self.playing:
                return False
            self.playback.pause(self.settings.device_id)
            self.paused = True
            return True

    def resume(self) -> bool:
        with self.lock:
            if not self.playing:
                return False
            self.playback.resume(self.settings.device_id)
            self.paused = False
            return True

    def replace_tracks(self, items: Iterable[Mapping]) -> int:
        with self.lock:
            tracks = self.store.replace_tracks(items)
            self.tracks = [t.to_dict() for t in tracks]
            self.done_tracks = 0
            self.playing = False
            self.paused = False
            return len(self.tracks)

    # ---- scores ----

    def adjust(self, nick: str, delta: int) -> int:
        with self.lock:
            score = self.engine.adjust(nick, delta)
            self.store.save_scores(self.engine.ledger.snapshot())
            return score

    def handle_chat(self, nick: str, message: str) -> List[Award]:
        with self.lock:
            known = nick in self.engine.ledger
            if self.playing:
                awards = self.engine.submit(nick, message)
            else:
                awards = []
                if self.engine.add_every_user:
                    self.engine.register(nick)
            if awards or (not known and nick in self.engine.ledger):
                self.store.save_scores(self.engine.ledger.snapshot())
            return awards

    # ---- chat wiring ----

    def attach_chat(self, source) -> None:
        self.chat = source
        source.on_message(self.handle_chat)
        source.connect()

    def close(self) -> None:
        if self.chat is not None:
            self.chat.disconnect()
            self.chat = None

    # ---- views ----

    def subtitle(self) -> str:
        total = len(self.tracks)
        if self.playing:
            return f"Playing song #{self.done_tracks} out of {total}"
        if total - self.done_tracks > 0:
            return f"{total - self.done_tracks} tracks left"
        return 'Blind-test is finished !'

    def to_dict(self, nick_filter: Optional[str] = None, limit: Optional[int] = None):
        limit = self.settings.displayed_user_limit if limit is None else limit
        with self.lock:
            complete = self.playing and self.engine.is_complete()
            slots = []
            if self.playing:
                round_state = self.engine.round
                for i, (target, outcome) in enumerate(zip(round_state.targets, round_state.outcomes)):
                    slot = {
                        'label': 'title' if i == 0 else 'artist',
                        'guessed': outcome.guessed,
                        'guessed_by': outcome.guessed_by,
                        'points': outcome.points,
                    }
                    if outcome.guessed:
                        slot['original'] = target.original
                        slot['to_guess'] = target.to_guess
                    slots.append(slot)
            return {
                'playing': self.playing,
                'paused': self.paused,
                'done_tracks': self.done_tracks,
                'total_tracks': len(self.tracks),
                'subtitle': self.subtitle(),
                'slots': slots,
                'complete': complete,
                'cover_uri': self.cover_uri if complete else None,
                'leaderboard': self.engine.leaderboard(nick_filter).to_dict(limit),
            }

    def _backup(self) -> None:
        self.store.save_progress(self.done_tracks)
        self.store.save_scores(self.engine.ledger.snapshot())


def build_session(app) -> BlindTestSession:
    settings = BlindTestSettings.from_config(app.config)
    chat = app.extensions.get('blindtest_chat')
    notifier = None
    if settings.chat_notifications and chat is not None:
        def notifier(nick, original, points):
            chat.say(announcement(nick, original, points))
    engine = BlindTestEngine(
        ledger=ScoreLedger(storage.load_scores()),
        add_every_user=settings.add_every_user,
        notifier=notifier,
    )
    session = BlindTestSession(
        engine,
        app.extensions.get('blindtest_playback') or NullPlayback(),
        settings,
        tracks=[t.to_dict() for t in storage.load_tracks()],
        done_tracks=storage.load_progress(),
    )
    if chat is not None:
        session.attach_chat(chat)
    return session


def get_session(app=None) -> BlindTestSession:
    """Session of ``app`` (default: current app), restored from storage on first use."""
    app = app or current_app._get_current_object()
    session = app.extensions.get('blindtest')
    if session is None:
        with _init_lock:
            session = app.extensions.get('blindtest')
            if session is None:
                session = build_session(app)
                app.extensions['blindtest'] = session
    return session

from flask import Blueprint, jsonify, request, current_app
from blindtest import socketio
from blindtest.models import NICK_MAX_LENGTH
from blindtest.services.blindtest.errors import InvalidRoundError, NoTracksLeftError, PlaybackError
from blindtest.services.blindtest.session import get_session
import time


blindtest = Blueprint('blindtest', __name__)

ROOM = 'blindtest'

_last_controller_action: dict[str, float] = {}


def emit_state() -> None:
    socketio.emit('state_update', {}, to=ROOM, namespace='/ws')


def emit_awards(awards) -> None:
    for award in awards:
        socketio.emit('guess', award.to_dict(), to=ROOM, namespace='/ws')
    if awards:
        emit_state()


def _debounced(action: str) -> bool:
    try:
        debounce_ms = int(current_app.config.get('CONTROLLER_DEBOUNCE_MS', 0))
    except (TypeError, ValueError):
        debounce_ms = 0
    if debounce_ms <= 0:
        return False
    now = time.time() * 1000.0
    last = _last_controller_action.get(action, 0)
    if now - last < debounce_ms:
        return True
    _last_controller_action[action] = now
    return False


def _nick_filter():
    value = (request.args.get('filter') or '').strip()
    return value.lower() or None


@blindtest.route('/state', methods=['GET'])
def get_state():
    return jsonify(get_session().to_dict(nick_filter=_nick_filter()))


@blindtest.route('/leaderboard', methods=['GET'])
def get_leaderboard():
    session = get_session()
    limit = request.args.get('limit', type=int)
    if limit is None or limit < 0:
        limit = session.settings.displayed_user_limit
    view = session.engine.leaderboard(_nick_filter())
    return jsonify(view.to_dict(limit))


@blindtest.route('/tracks', methods=['POST'])
def import_tracks():
    data = request.get_json(silent=True) or {}
    items = data.get('tracks')
    if not isinstance(items, list):
        return jsonify({'error': 'tracks must be a list'}), 400
    for item in items:
        if not isinstance(item, dict) or not item.get('uri') or not item.get('title'):
            return jsonify({'error': 'Each track needs a uri and a title'}), 400
    count = get_session().replace_tracks(items)
    current_app.logger.info(f"[tracks] imported {count} tracks")
    emit_state()
    return jsonify({'message': 'Tracks imported', 'count': count}), 201


@blindtest.route('/next', methods=['POST'])
def next_track():
    if _debounced('next'):
        return jsonify({'message': 'debounced'}), 202
    session = get_session()
    try:
        session.next_track()
    except NoTracksLeftError as exc:
        return jsonify({'error': str(exc)}), 400
    except PlaybackError as exc:
        return jsonify({'error': f'Playback failed: {exc}'}), 502
    emit_state()
    return jsonify(session.to_dict())


@blindtest.route('/rounds', methods=['POST'])
def start_round():
    data = request.get_json(silent=True) or {}
    artists = data.get('artists') or []
    if not isinstance(artists, list):
        return jsonify({'error': 'artists must be a list'}), 400
    session = get_session()
    try:
        session.start_round(data.get('title'), artists, cover_uri=data.get('img'))
    except InvalidRoundError as exc:
        return jsonify({'error': str(exc)}), 400
    emit_state()
    return jsonify(session.to_dict()), 201


@blindtest.route('/reveal', methods=['POST'])
def reveal():
    if _debounced('reveal'):
        return jsonify({'message': 'debounced'}), 202
    session = get_session()
    opened = session.reveal()
    if opened:
        emit_state()
    payload = session.to_dict()
    payload['revealed'] = opened
    return jsonify(payload)


@blindtest.route('/pause', methods=['POST'])
def pause():
    session = get_session()
    try:
        changed = session.pause()
    except PlaybackError as exc:
        return jsonify({'error': f'Playback failed: {exc}'}), 502
    if not changed:
        return jsonify({'error': 'Nothing is playing'}), 400
    emit_state()
    return jsonify(session.to_dict())


@blindtest.route('/resume', methods=['POST'])
def resume():
    session = get_session()
    try:
        changed = session.resume()
    except PlaybackError as exc:
        return jsonify({'error': f'Playback failed: {exc}'}), 502
    if not changed:
        return jsonify({'error': 'Nothing is playing'}), 400
    emit_state()
    return jsonify(session.to_dict())


@blindtest.route('/propositions', methods=['POST'])
def submit_proposition():
    data = request.get_json(silent=True) or {}
    nick = data.get('nick')
    message = data.get('message')
    if not nick or message is None:
        return jsonify({'error': 'nick and message are required'}), 400
    if len(str(nick)) > NICK_MAX_LENGTH:
        return jsonify({'error': f'nick must be at most {NICK_MAX_LENGTH} characters'}), 400
    awards = get_session().handle_chat(str(nick), str(message))
    emit_awards(awards)
    return jsonify({'awards': [a.to_dict() for a in awards]})


@blindtest.route('/scores/<string:nick>', methods=['POST'])
def adjust_score(nick):
    if len(nick) > NICK_MAX_LENGTH:
        return jsonify({'error': f'nick must be at most {NICK_MAX_LENGTH} characters'}), 400
    data = request.get_json(silent=True) or {}
    delta = data.get('delta')
    if isinstance(delta, bool) or not isinstance(delta, int):
        return jsonify({'error': 'delta must be an integer'}), 400
    score = get_session().adjust(nick, delta)
    emit_state()
    return jsonify({'nick': nick, 'score': score})

from flask_socketio import join_room, leave_room, emit
from flask import current_app
from blindtest.api.blindtest import ROOM, emit_awards
from blindtest.models import NICK_MAX_LENGTH
from blindtest.services.blindtest.chat import CHAT_ROOM
from blindtest.services.blindtest.session import get_session


def _room_for(data) -> str:
    # Chat bridges listen for announcements; every other client follows the game
    return CHAT_ROOM if (data or {}).get('role') == 'chat' else ROOM


def handle_connect(auth=None):
    emit('connected', {'message': 'Connected to /ws'})


def handle_join_blindtest(data=None):
    room = _room_for(data)
    join_room(room)
    emit('joined', {'room': room})


def handle_leave_blindtest(data=None):
    room = _room_for(data)
    leave_room(room)
    emit('left', {'room': room})


def handle_chat_message(data):
    nick = (data or {}).get('nick')
    message = (data or {}).get('message')
    if not nick or message is None:
        emit('error', {'message': 'nick and message are required'})
        return
    if len(str(nick)) > NICK_MAX_LENGTH:
        emit('error', {'message': f'nick must be at most {NICK_MAX_LENGTH} characters'})
        return
    # Make sure the session exists so its chat handler is attached
    get_session()
    awards = current_app.extensions['blindtest_chat'].deliver(str(nick), str(message))
    if awards:
        emit_awards(awards)


def handle_ping(data):
    emit('pong', data or {})


def register_socketio_handlers(testing: bool = False) -> None:
    """Register Socket.IO event handlers.

    Always register on namespace '/ws'. When testing is True, also mirror
    handlers on the default namespace '/' to accommodate the test harness.
    """
    from blindtest import socketio

    namespaces = ['/ws', '/'] if testing else ['/ws']
    for namespace in namespaces:
        socketio.on_event('connect', handle_connect, namespace=namespace)
        socketio.on_event('join_blindtest', handle_join_blindtest, namespace=namespace)
        socketio.on_event('leave_blindtest', handle_leave_blindtest, namespace=namespace)
        socketio.on_event('chat_message', handle_chat_message, namespace=namespace)
        socketio.on_event('ping', handle_ping, namespace=namespace)

import logging
from typing import Any, Callable, Optional, Protocol

from blindtest import socketio

logger = logging.getLogger('blindtest')

MessageHandler = Callable[[str, str], Any]

CHAT_ROOM = 'chat'


def announcement(nick: str, original: str, points: int) -> str:
    return f"✅ {nick} correctly guessed [{original}] +{points}"


class ChatSource(Protocol):
    """Delivers ``(nickname, raw_message)`` events in arrival order."""

    def connect(self) -> None: ...

    def disconnect(self) -> None: ...

    def on_message(self, handler: MessageHandler) -> None: ...


class SocketIOChatSource:
    """Chat relayed over Socket.IO by a bridge process connected to the channel.

    The bridge joins the ``chat`` room on ``/ws``, forwards each channel
    message as a ``chat_message`` event and posts whatever it receives as
    ``chat_say`` back to the channel.
    """

    def __init__(self, channel: Optional[str] = None, namespace: str = '/ws'):
        self.channel = channel
        self.namespace = namespace
        self.connected = False
        self._handler: Optional[MessageHandler] = None

    def connect(self) -> None:
        self.connected = True
        logger.info(f"[chat] listening channel={self.channel}")

    def disconnect(self) -> None:
        self.connected = False
        self._handler = None
        logger.info(f"[chat] stopped channel={self.channel}")

    def on_message(self, handler: MessageHandler) -> None:
        self._handler = handler

    def deliver(self, nick: str, message: str):
        """Hand one inbound message to the handler; None when nobody listens."""
        if not self.connected or self._handler is None:
            return None
        return self._handler(nick, message)

    def say(self, text: str) -> None:
        socketio.emit(
            'chat_say',
            {'channel': self.channel, 'message': text},
            to=CHAT_ROOM,
            namespace=self.namespace,
        )

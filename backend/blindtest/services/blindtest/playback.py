import logging
from typing import List, Optional, Protocol, Tuple

logger = logging.getLogger('blindtest')


class PlaybackController(Protocol):
    """What the session needs from a media player. Failures raise PlaybackError."""

    def start(self, uri: str, offset_ms: int, device_id: Optional[str]) -> None: ...

    def pause(self, device_id: Optional[str]) -> None: ...

    def resume(self, device_id: Optional[str]) -> None: ...

    def set_repeat(self, enabled: bool, device_id: Optional[str]) -> None: ...


class NullPlayback:
    """Player stand-in for hosts that drive the music themselves; logs and records each call."""

    def __init__(self):
        self.calls: List[Tuple] = []

    def start(self, uri, offset_ms, device_id):
        self.calls.append(('start', uri, offset_ms, device_id))
        logger.info(f"[playback] start uri={uri} offset_ms={offset_ms} device={device_id}")

    def pause(self, device_id):
        self.calls.append(('pause', device_id))
        logger.info(f"[playback] pause device={device_id}")

    def resume(self, device_id):
        self.calls.append(('resume', device_id))
        logger.info(f"[playback] resume device={device_id}")

    def set_repeat(self, enabled, device_id):
        self.calls.append(('set_repeat', enabled, device_id))
        logger.info(f"[playback] repeat={enabled} device={device_id}")

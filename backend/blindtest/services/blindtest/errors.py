class BlindTestError(Exception):
    """Base class for blind-test errors surfaced to callers."""


class InvalidRoundError(BlindTestError):
    """A round was started without any guessable target."""


class NoTracksLeftError(BlindTestError):
    """Every track of the blind-test has already been played."""


class PlaybackError(BlindTestError):
    """The playback collaborator failed to honour a command."""

import logging
from dataclasses import dataclass
from typing import Iterable, List

from .normalizer import normalize_answer

logger = logging.getLogger('blindtest')

# One tolerated edit per this many characters of the normalized answer
CHARS_PER_TOLERATED_EDIT = 5


@dataclass(frozen=True)
class GuessTarget:
    original: str
    to_guess: str
    max_distance: int

    def to_dict(self):
        return {
            'original': self.original,
            'to_guess': self.to_guess,
            'max_distance': self.max_distance,
        }


def max_distance_for(to_guess: str) -> int:
    return len(to_guess) // CHARS_PER_TOLERATED_EDIT


def build_target(original: str) -> GuessTarget:
    to_guess = normalize_answer(original)
    if not to_guess:
        logger.warning(f"[target] {original!r} normalizes to nothing; only a reveal can solve it")
    return GuessTarget(original=original, to_guess=to_guess, max_distance=max_distance_for(to_guess))


def build_targets(title: str, artists: Iterable[str]) -> List[GuessTarget]:
    """Slot 0 is the title, slots 1..N the artists, in the given order."""
    return [build_target(title)] + [build_target(a) for a in artists]

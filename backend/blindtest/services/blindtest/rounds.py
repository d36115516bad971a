import logging
from dataclasses import dataclass, replace
from typing import Callable, List, Optional, Sequence

from .errors import InvalidRoundError
from .matcher import is_match
from .normalizer import normalize
from .targets import GuessTarget

logger = logging.getLogger('blindtest')

FIRST_GUESS_POINTS = 1
STREAK_POINTS = 2

MatchCallback = Callable[[str, GuessTarget, int], None]


@dataclass(frozen=True)
class GuessOutcome:
    guessed: bool = False
    guessed_by: Optional[str] = None
    points: Optional[int] = None

    @property
    def solved(self) -> bool:
        """Guessed by a player, as opposed to forced open by a reveal."""
        return self.guessed and self.guessed_by is not None

    def to_dict(self):
        return {
            'guessed': self.guessed,
            'guessed_by': self.guessed_by,
            'points': self.points,
        }


class RoundState:
    """Targets of the playing track and the guess outcome of each slot.

    Slot 0 is the title, slots 1..N are the artists. Outcomes only ever move
    from unguessed to guessed. ``on_match(nickname, target, points)`` is
    invoked once per slot a proposition solves.
    """

    def __init__(self, on_match: Optional[MatchCallback] = None):
        self._targets: List[GuessTarget] = []
        self._outcomes: List[GuessOutcome] = []
        self.on_match = on_match

    @property
    def active(self) -> bool:
        return bool(self._targets)

    @property
    def targets(self) -> List[GuessTarget]:
        return list(self._targets)

    @property
    def outcomes(self) -> List[GuessOutcome]:
        return list(self._outcomes)

    def start_round(self, targets: Sequence[GuessTarget]) -> None:
        targets = list(targets)
        if not targets:
            raise InvalidRoundError('A round needs at least one target')
        self._targets = targets
        self._outcomes = [GuessOutcome() for _ in targets]
        logger.info(f"[round-start] targets={[t.to_guess for t in targets]}")

    def is_complete(self) -> bool:
        self._check_invariant()
        return self.active and all(o.guessed for o in self._outcomes)

    def points_for(self, nickname: str) -> int:
        if any(o.guessed_by == nickname for o in self._outcomes):
            return STREAK_POINTS
        return FIRST_GUESS_POINTS

    def submit_proposition(self, nickname: str, raw_message: str) -> List[int]:
        """Apply one chat message to every unguessed slot; returns solved slot indices."""
        if not self.active or self.is_complete():
            return []
        proposition = normalize(raw_message)
        if not proposition:
            return []
        matched = []
        # Streak status is read before this message writes any slot
        points = self.points_for(nickname)
        for i, target in enumerate(self._targets):
            if self._outcomes[i].guessed:
                continue
            if not is_match(proposition, target):
                continue
            self._outcomes[i] = GuessOutcome(guessed=True, guessed_by=nickname, points=points)
            matched.append(i)
            logger.info(f"[guess] nick={nickname} slot={i} target={target.to_guess!r} points={points}")
            if self.on_match is not None:
                self.on_match(nickname, target, points)
        return matched

    def reveal(self) -> List[int]:
        """Force every unguessed slot open with no guesser; returns the slots it changed."""
        opened = [i for i, o in enumerate(self._outcomes) if not o.guessed]
        for i in opened:
            self._outcomes[i] = replace(self._outcomes[i], guessed=True)
        if opened:
            logger.info(f"[reveal] slots={opened}")
        return opened

    def to_dict(self):
        self._check_invariant()
        return {
            'targets': [t.to_dict() for t in self._targets],
            'outcomes': [o.to_dict() for o in self._outcomes],
            'complete': self.is_complete(),
        }

    def _check_invariant(self) -> None:
        assert len(self._outcomes) == len(self._targets), 'outcomes out of step with targets'

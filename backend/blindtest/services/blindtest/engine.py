import logging
import threading
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from .ledger import ScoreLedger
from .leaderboard import LeaderboardView, compute_view
from .rounds import RoundState
from .targets import GuessTarget

logger = logging.getLogger('blindtest')

Notifier = Callable[[str, str, int], None]


@dataclass(frozen=True)
class Award:
    index: int
    nick: str
    original: str
    points: int

    def to_dict(self):
        return {
            'index': self.index,
            'nick': self.nick,
            'original': self.original,
            'points': self.points,
        }


class BlindTestEngine:
    """Single-writer controller over the current round and the score ledger.

    Every mutation holds ``lock`` so that propositions coming from several
    threads are applied one at a time, in the order they acquire it.
    ``notifier(nick, original, points)`` is called for each award when set.
    """

    def __init__(
        self,
        ledger: Optional[ScoreLedger] = None,
        add_every_user: bool = False,
        notifier: Optional[Notifier] = None,
    ):
        self.lock = threading.RLock()
        self.ledger = ledger if ledger is not None else ScoreLedger()
        self.round = RoundState(on_match=self._on_match)
        self.add_every_user = add_every_user
        self.notifier = notifier

    def start_round(self, targets: Sequence[GuessTarget]) -> None:
        with self.lock:
            self.round.start_round(targets)

    def reveal(self) -> List[int]:
        with self.lock:
            return self.round.reveal()

    def is_complete(self) -> bool:
        with self.lock:
            return self.round.is_complete()

    def register(self, nick: str) -> bool:
        with self.lock:
            return self.ledger.ensure_registered(nick)

    def submit(self, nick: str, message: str) -> List[Award]:
        """Apply one chat message: optional registration, matching, scoring, notification."""
        with self.lock:
            if self.add_every_user:
                self.ledger.ensure_registered(nick)
            matched = self.round.submit_proposition(nick, message)
            targets, outcomes = self.round.targets, self.round.outcomes
            return [
                Award(index=i, nick=nick, original=targets[i].original, points=outcomes[i].points)
                for i in matched
            ]

    def adjust(self, nick: str, delta: int) -> int:
        with self.lock:
            score = self.ledger.add_points(nick, delta)
        logger.info(f"[score-adjust] nick={nick} delta={delta} score={score}")
        return score

    def leaderboard(self, nick_filter: Optional[str] = None) -> LeaderboardView:
        with self.lock:
            entries = self.ledger.entries()
        return compute_view(entries, nick_filter)

    def snapshot(self):
        with self.lock:
            return {
                'round': self.round.to_dict(),
                'scores': self.ledger.snapshot(),
            }

    def _on_match(self, nick: str, target: GuessTarget, points: int) -> None:
        self.ledger.add_points(nick, points)
        if self.notifier is not None:
            self.notifier(nick, target.original, points)

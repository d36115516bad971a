"""Ranked, tie-aware leaderboard derived from a score ledger.

Rows are ordered by score descending, nickname ascending within a tie.
Ranks are dense over the distinct scores of the rows actually returned,
so a nickname filter can change the rank a player is shown with. Only the
first row of each score group carries a rank.
"""

import unicodedata
from dataclasses import dataclass
from typing import Iterable, List, Mapping, Optional, Tuple, Union

from .ledger import ScoreLedger

DEFAULT_DISPLAY_LIMIT = 70


@dataclass
class LeaderboardRow:
    nick: str
    score: int
    rank: Optional[int] = None

    def to_dict(self):
        row = {'nick': self.nick, 'score': self.score}
        if self.rank is not None:
            row['rank'] = self.rank
        return row


@dataclass
class LeaderboardView:
    rows: List[LeaderboardRow]

    @property
    def total(self) -> int:
        return len(self.rows)

    def head(self, limit: int = DEFAULT_DISPLAY_LIMIT) -> List[LeaderboardRow]:
        return self.rows[:limit]

    def more(self, limit: int = DEFAULT_DISPLAY_LIMIT) -> int:
        """How many rows a display capped at ``limit`` leaves out."""
        return max(0, self.total - limit)

    def to_dict(self, limit: int = DEFAULT_DISPLAY_LIMIT):
        return {
            'rows': [r.to_dict() for r in self.head(limit)],
            'total': self.total,
            'more': self.more(limit),
        }


def collation_key(nick: str) -> Tuple[str, str]:
    folded = unicodedata.normalize('NFKD', nick)
    folded = ''.join(c for c in folded if not unicodedata.combining(c)).casefold()
    return folded, nick


def compute_view(
    scores: Union[ScoreLedger, Mapping[str, int], Iterable[Tuple[str, int]]],
    nick_filter: Optional[str] = None,
) -> LeaderboardView:
    if isinstance(scores, ScoreLedger):
        pairs = scores.entries()
    elif isinstance(scores, Mapping):
        pairs = list(scores.items())
    else:
        pairs = list(scores)

    rows = [LeaderboardRow(nick=nick, score=score) for nick, score in pairs]
    rows.sort(key=lambda r: collation_key(r.nick))
    # list.sort is stable: nick order survives inside each score group
    rows.sort(key=lambda r: r.score, reverse=True)

    if nick_filter:
        needle = nick_filter.lower()
        rows = [r for r in rows if needle in r.nick.lower()]

    distinct = sorted({r.score for r in rows}, reverse=True)
    previous = None
    for i, row in enumerate(rows):
        if i == 0 or row.score != previous:
            row.rank = 1 + distinct.index(row.score)
        previous = row.score
    return LeaderboardView(rows=rows)

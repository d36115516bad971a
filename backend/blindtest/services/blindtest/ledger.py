from typing import Dict, List, Mapping, Optional, Tuple


class ScoreLedger:
    """Cumulative score per nickname for the whole blind-test session.

    Nicknames are case-sensitive identities as received from chat. Entries
    are never removed and scores may go negative after manual corrections.
    """

    def __init__(self, initial: Optional[Mapping[str, int]] = None):
        self._scores: Dict[str, int] = dict(initial or {})

    def add_points(self, nickname: str, delta: int) -> int:
        self._scores[nickname] = self._scores.get(nickname, 0) + int(delta)
        return self._scores[nickname]

    def ensure_registered(self, nickname: str) -> bool:
        """Create the entry at 0 if absent; returns True when it was created."""
        if nickname in self._scores:
            return False
        self._scores[nickname] = 0
        return True

    def get(self, nickname: str) -> int:
        return self._scores.get(nickname, 0)

    def entries(self) -> List[Tuple[str, int]]:
        return list(self._scores.items())

    def snapshot(self) -> Dict[str, int]:
        return dict(self._scores)

    def __contains__(self, nickname) -> bool:
        return nickname in self._scores

    def __len__(self) -> int:
        return len(self._scores)

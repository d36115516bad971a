"""Persistence collaborator: commits session state to the database.

The engine never writes anything itself; the session hands it the
progress counter and a ledger snapshot after each state-changing
operation.
"""

import json
from typing import Dict, Iterable, List, Mapping

from blindtest import db
from blindtest.models import Progress, Score, Track


def load_tracks() -> List[Track]:
    return Track.query.order_by(Track.position).all()


def replace_tracks(items: Iterable[Mapping]) -> List[Track]:
    """Swap the whole track list and reset progress to the first track."""
    Track.query.delete()
    tracks = []
    for position, item in enumerate(items):
        track = Track(
            position=position,
            uri=item['uri'],
            offset_ms=int(item.get('offset_ms') or item.get('offset') or 0),
            title=item['title'],
            artists=json.dumps(list(item.get('artists') or [])),
            img=item.get('img'),
        )
        db.session.add(track)
        tracks.append(track)
    _progress_row().done_tracks = 0
    db.session.commit()
    return tracks


def load_progress() -> int:
    row = Progress.query.first()
    return int(row.done_tracks) if row else 0


def save_progress(done_tracks: int) -> None:
    row = _progress_row()
    row.done_tracks = int(done_tracks)
    db.session.add(row)
    db.session.commit()


def load_scores() -> Dict[str, int]:
    return {s.nick: int(s.score) for s in Score.query.all()}


def save_scores(scores: Mapping[str, int]) -> None:
    existing = {s.nick: s for s in Score.query.all()}
    for nick, value in scores.items():
        row = existing.get(nick)
        if row is None:
            row = Score(nick=nick, score=value)
        elif row.score == value:
            continue
        row.score = value
        db.session.add(row)
    db.session.commit()


def reset() -> None:
    """Forget scores and progress; the track list is kept."""
    Score.query.delete()
    _progress_row().done_tracks = 0
    db.session.commit()


def _progress_row() -> Progress:
    row = Progress.query.first()
    if row is None:
        row = Progress(done_tracks=0)
        db.session.add(row)
    return row

from blindtest import db
import json

NICK_MAX_LENGTH = 64


class Track(db.Model):
    __tablename__ = 'track'
    id = db.Column(db.Integer, primary_key=True)
    position = db.Column(db.Integer, nullable=False, index=True)
    uri = db.Column(db.String(256), nullable=False)
    offset_ms = db.Column(db.Integer, default=0, nullable=False)
    title = db.Column(db.String(256), nullable=False)
    artists = db.Column(db.Text, nullable=False, default='[]')  # JSON-encoded list of artist names
    img = db.Column(db.String(512), nullable=True)

    def artist_list(self):
        try:
            return list(json.loads(self.artists or '[]'))
        except ValueError:
            return []

    def to_dict(self):
        return {
            'id': self.id,
            'position': self.position,
            'uri': self.uri,
            'offset_ms': self.offset_ms,
            'title': self.title,
            'artists': self.artist_list(),
            'img': self.img,
        }


class Progress(db.Model):
    __tablename__ = 'progress'
    id = db.Column(db.Integer, primary_key=True)
    done_tracks = db.Column(db.Integer, default=0, nullable=False)

    def to_dict(self):
        return {'done_tracks': self.done_tracks}


class Score(db.Model):
    __tablename__ = 'score'
    id = db.Column(db.Integer, primary_key=True)
    nick = db.Column(db.String(NICK_MAX_LENGTH), unique=True, nullable=False, index=True)
    score = db.Column(db.Integer, default=0, nullable=False)

    def to_dict(self):
        return {
            'nick': self.nick,
            'score': self.score,
        }

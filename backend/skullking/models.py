from skullking import db
from datetime import datetime, timezone
import json


def utcnow():
    return datetime.now(timezone.utc)


class GameRecord(db.Model):
    """A stored game aggregate.

    The whole game is kept as one JSON document next to its fingerprint so
    both are written by the same statement.
    """
    __tablename__ = 'game'
    id = db.Column(db.String(4), primary_key=True)
    state = db.Column(db.Text, nullable=False)
    fingerprint = db.Column(db.String(64), nullable=False, index=True)
    updated_at = db.Column(db.DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    def load_state(self):
        return json.loads(self.state)

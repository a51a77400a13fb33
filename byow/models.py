"""
project: BYOW World Server
module: models.py
License: MIT

Database models. Saved worlds are stored as opaque bytes exactly as the client
sent them; the server never parses or rewrites a saved payload.
"""

import datetime

from byow import db


class SavedWorld(db.Model):
    __tablename__ = "saved_worlds"
    id = db.Column(db.Integer, primary_key=True)
    payload = db.Column(db.LargeBinary, nullable=False)
    content_type = db.Column(db.String(120), nullable=False, default="application/json")
    created_at = db.Column(db.DateTime, default=lambda: datetime.datetime.now(datetime.timezone.utc))

    @classmethod
    def latest(cls):
        return db.session.execute(db.select(cls).order_by(cls.id.desc()).limit(1)).scalar_one_or_none()

    def __repr__(self):
        return f"<SavedWorld {self.id} bytes={len(self.payload or b'')}>"

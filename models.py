from datetime import datetime, timezone

from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()


class Snapshot(db.Model):
    """One serialized game state per browser session."""

    __tablename__ = "snapshot"

    # random key kept in the Flask session cookie
    key = db.Column(db.String(64), primary_key=True)
    payload = db.Column(db.Text, nullable=False)
    # Use timezone-aware UTC timestamps to avoid deprecation warnings and ambiguity
    updated_at = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

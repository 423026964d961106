# services/state_store.py - load/save the per-session GameState snapshot
import json
import logging

from models import Snapshot, db
from services.exceptions import ValidationError
from services.trivia_types import INITIAL_STATE, GameState

logger = logging.getLogger(__name__)


class SnapshotStore:
    """Stores each session's GameState as a single JSON blob in the snapshot table."""

    def load(self, key: str) -> GameState:
        """Return the saved state, or the initial state when absent or malformed."""
        # populate_existing re-reads a row another request may have rewritten
        row = db.session.get(Snapshot, key, populate_existing=True)
        if row is None:
            return INITIAL_STATE
        try:
            try:
                data = json.loads(row.payload)
            except (TypeError, ValueError) as e:
                raise ValidationError(f"snapshot is not valid JSON: {e}") from e
            return GameState.from_dict(data)
        except ValidationError as e:
            logger.warning("snapshot_discarded key=%s reason=%s", key, e)
            db.session.delete(row)
            db.session.commit()
            return INITIAL_STATE

    def save(self, key: str, state: GameState) -> None:
        payload = json.dumps(state.to_dict())
        row = db.session.get(Snapshot, key)
        if row is None:
            db.session.add(Snapshot(key=key, payload=payload))
        else:
            row.payload = payload
        try:
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

    def clear(self) -> int:
        """Delete every stored snapshot; returns the number of rows removed."""
        removed = Snapshot.query.delete()
        db.session.commit()
        return removed

# services/session_helper.py - ties a browser session to its stored snapshot
import uuid

SNAPSHOT_KEY = "snapshot_key"


class SessionHelper:
    @staticmethod
    def snapshot_key(session) -> str:
        """Return this session's snapshot key, minting one on first visit."""
        key = session.get(SNAPSHOT_KEY)
        if not key:
            key = uuid.uuid4().hex
            session[SNAPSHOT_KEY] = key
        return key

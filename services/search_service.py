# services/search_service.py - run one category search against the stored game state
import logging
import time
import uuid
from datetime import datetime
from typing import Optional

from services.category_resolver import CategoryResolver
from services.exceptions import RetrievalError, ValidationError
from services.game_state import (
    DEFAULT_SEARCH_LOCK_SECONDS,
    begin_search,
    complete_search,
    fail_search,
)
from services.state_store import SnapshotStore
from services.trivia_types import GameState

logger = logging.getLogger(__name__)

RETRIEVAL_ERROR_MESSAGE = "Could not reach the trivia service. Please try again later."


class SearchService:
    def __init__(
        self,
        resolver: Optional[CategoryResolver] = None,
        store: Optional[SnapshotStore] = None,
        lock_seconds: float = DEFAULT_SEARCH_LOCK_SECONDS,
    ):
        self.resolver = resolver or CategoryResolver()
        self.store = store or SnapshotStore()
        self.lock_seconds = lock_seconds

    def run(self, key: str, text: str, now: Optional[datetime] = None) -> GameState:
        """
        Mark the state as searching, resolve categories, then commit the outcome.

        The searching flag and a fresh token are saved before any network call.
        Results (or the failure) are applied to the state as it is *after* the
        lookup, and only if our token is still the current one.
        Raises SearchInProgressError if another search holds the flag and
        RetrievalError when the lookup failed (after recording it on the state).
        """
        text = (text or "").strip()
        if not text:
            raise ValidationError("Please enter a category to search.")
        token = uuid.uuid4().hex
        state = self.store.load(key)
        state = begin_search(state, text, token, now=time.time(), lock_seconds=self.lock_seconds)
        self.store.save(key, state)

        try:
            categories = self.resolver.resolve(text, state.filters, now=now)
        except RetrievalError as e:
            logger.warning("search_failed query=%s error=%s", text, e)
            latest = fail_search(self.store.load(key), token, RETRIEVAL_ERROR_MESSAGE)
            self.store.save(key, latest)
            raise
        except Exception:
            # never leave the board stuck in the searching state
            self.store.save(key, fail_search(self.store.load(key), token, RETRIEVAL_ERROR_MESSAGE))
            raise

        latest = self.store.load(key)
        if latest.search_token != token:
            logger.info("search_superseded query=%s", text)
            return latest
        latest = complete_search(latest, token, categories)
        self.store.save(key, latest)
        logger.info("search_complete query=%s categories=%d", text, len(categories))
        return latest

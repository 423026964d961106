"""Pure transitions on GameState.

Each function takes a state and returns a new one; persisting the result is
the caller's job. Search results are only committed by the search whose token
still matches ``state.search_token``, so an older overlapping search cannot
overwrite newer results.
"""

import time
from dataclasses import replace
from typing import Iterable, Optional

from services.exceptions import SearchInProgressError, ValidationError
from services.scoring import clue_status, toggle_favorite
from services.trivia_types import AnswerRecord, CategoryRecord, Clue, Filters, GameState

DEFAULT_SEARCH_LOCK_SECONDS = 120


def search_is_stale(state: GameState, now: float, lock_seconds: float) -> bool:
    """A searching flag older than lock_seconds belongs to a request that never finished."""
    if not state.searching:
        return True
    if state.searching_since is None:
        return True
    return now - state.searching_since >= lock_seconds


def begin_search(
    state: GameState,
    text: str,
    token: str,
    now: Optional[float] = None,
    lock_seconds: float = DEFAULT_SEARCH_LOCK_SECONDS,
) -> GameState:
    if now is None:
        now = time.time()
    if state.searching and not search_is_stale(state, now, lock_seconds):
        raise SearchInProgressError("A search is already running. Please wait for it to finish.")
    return replace(
        state,
        search_text=text,
        searching=True,
        search_token=token,
        searching_since=now,
        last_error=None,
    )


def complete_search(state: GameState, token: str, categories: Iterable[CategoryRecord]) -> GameState:
    if state.search_token != token:
        return state
    return replace(
        state,
        categories=tuple(categories),
        searching=False,
        search_token=None,
        searching_since=None,
        last_error=None,
        results_for=state.search_text,
    )


def fail_search(state: GameState, token: str, message: str) -> GameState:
    """Clear the searching flag and record the error; previous categories stay on the board."""
    if state.search_token != token:
        return state
    return replace(
        state,
        searching=False,
        search_token=None,
        searching_since=None,
        last_error=message,
    )


def update_filters(state: GameState, filters: Filters) -> GameState:
    return replace(state, filters=filters)


def find_clue(state: GameState, clue_id: int) -> Optional[Clue]:
    """Look a clue up on the board first, then among favorites."""
    for category in state.categories:
        for clue in category.clues:
            if clue.id == clue_id:
                return clue
    for clue in state.favorites:
        if clue.id == clue_id:
            return clue
    return None


def record_answer(state: GameState, clue: Clue, answer: str) -> GameState:
    if clue_status(clue, state.answered) != "primary":
        raise ValidationError("You already answered this clue.")
    return replace(state, answered=state.answered + (AnswerRecord(clue=clue, answer=answer),))


def toggle_favorite_in_state(state: GameState, clue: Clue) -> GameState:
    return replace(state, favorites=toggle_favorite(state.favorites, clue))

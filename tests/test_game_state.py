import pytest

from services.exceptions import SearchInProgressError, ValidationError
from services.game_state import (
    begin_search,
    complete_search,
    fail_search,
    find_clue,
    record_answer,
    toggle_favorite_in_state,
)
from services.trivia_types import CategoryRecord, Clue, GameState

CLUE = Clue(id=1, question="Q1", answer="cat", value=100, category_title="Animals")
BOARD = (CategoryRecord(title="Animals", clues=(CLUE,)),)


def test_begin_search_sets_flag_and_token():
    state = begin_search(GameState(last_error="old"), "cats", "t1", now=100.0)
    assert state.searching and state.search_token == "t1"
    assert state.searching_since == 100.0
    assert state.search_text == "cats"
    assert state.last_error is None


def test_reentrant_search_rejected_while_fresh():
    state = begin_search(GameState(), "cats", "t1", now=100.0)
    with pytest.raises(SearchInProgressError):
        begin_search(state, "dogs", "t2", now=110.0, lock_seconds=60)


def test_stale_searching_flag_is_taken_over():
    state = begin_search(GameState(), "cats", "t1", now=100.0)
    state = begin_search(state, "dogs", "t2", now=200.0, lock_seconds=60)
    assert state.search_token == "t2"


def test_complete_search_commits_with_matching_token():
    state = begin_search(GameState(), "cats", "t1", now=1.0)
    state = complete_search(state, "t1", BOARD)
    assert state.categories == BOARD
    assert not state.searching and state.search_token is None
    assert state.results_for == "cats"


def test_stale_token_cannot_overwrite():
    state = begin_search(GameState(), "cats", "newer", now=1.0)
    assert complete_search(state, "older", BOARD) is state
    assert fail_search(state, "older", "boom") is state


def test_fail_search_keeps_previous_board():
    state = begin_search(GameState(categories=BOARD), "dogs", "t1", now=1.0)
    state = fail_search(state, "t1", "Could not reach the trivia service.")
    assert state.categories == BOARD
    assert not state.searching
    assert state.last_error == "Could not reach the trivia service."


def test_record_answer_appends_once():
    state = record_answer(GameState(categories=BOARD), CLUE, "cat")
    assert [a.answer for a in state.answered] == ["cat"]
    with pytest.raises(ValidationError):
        record_answer(state, CLUE, "dog")


def test_find_clue_on_board_and_in_favorites():
    fav = Clue(id=99, question="Fav", answer="yes", value=0)
    state = toggle_favorite_in_state(GameState(categories=BOARD), fav)
    assert find_clue(state, 1) == CLUE
    assert find_clue(state, 99) == fav
    assert find_clue(state, 5) is None

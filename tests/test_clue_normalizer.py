"""Tests for clue dedup / defaulting / sorting and the per-category fetch."""

from datetime import datetime, timezone

import pytest

from services.clue_normalizer import ClueNormalizer, build_category, normalize_clues
from services.exceptions import RetrievalError
from services.trivia_types import Clue, Filters


def make_clue(clue_id, question, value, title="Animals", answer="cat"):
    return Clue(id=clue_id, question=question, answer=answer, value=value, category_title=title)


class FakeClient:
    def __init__(self, clues):
        self.clues = clues
        self.calls = []

    def fetch_clues(self, params):
        self.calls.append(params)
        return self.clues


def test_first_occurrence_kept_defaulted_then_sorted():
    clues = [
        make_clue(1, "Q1", None),
        make_clue(2, "Q1", 200),
        make_clue(3, "Q2", 100),
    ]
    out = normalize_clues(clues)
    assert [(c.id, c.question, c.value) for c in out] == [(1, "Q1", 0), (3, "Q2", 100)]


def test_no_duplicate_questions_and_sorted():
    clues = [make_clue(i, f"Q{i % 4}", v) for i, v in enumerate([400, None, 200, 800, 100, 0, 200])]
    out = normalize_clues(clues)
    questions = [c.question for c in out]
    assert len(questions) == len(set(questions))
    values = [c.value for c in out]
    assert values == sorted(values)


def test_ties_keep_post_dedup_order():
    clues = [make_clue(1, "A", 200), make_clue(2, "B", 100), make_clue(3, "C", 200), make_clue(4, "D", 100)]
    assert [c.id for c in normalize_clues(clues)] == [2, 4, 1, 3]


def test_missing_and_zero_values_become_zero():
    out = normalize_clues([make_clue(1, "A", None), make_clue(2, "B", 0)])
    assert [c.value for c in out] == [0, 0]


def test_normalize_is_idempotent():
    clues = [make_clue(1, "A", 300), make_clue(2, "B", None), make_clue(3, "A", 100), make_clue(4, "C", 100)]
    once = normalize_clues(clues)
    assert normalize_clues(once) == once


def test_build_category_empty_is_none():
    assert build_category([]) is None


def test_build_category_title_from_first_sorted_clue():
    record = build_category([make_clue(1, "A", 500, title="Late"), make_clue(2, "B", 100, title="Early")])
    assert record.title == "Early"
    assert [c.id for c in record.clues] == [2, 1]


def test_fetch_category_parses_and_omits_value_for_any():
    raw = [
        {"id": 7, "question": "Q1", "answer": "ox", "value": None, "category": {"title": "Farm"}, "airdate": "1999-01-01"},
        {"id": 8, "question": "Q1", "answer": "ox", "value": 200, "category": {"title": "Farm"}},
    ]
    client = FakeClient(raw)
    now = datetime(2026, 10, 18, tzinfo=timezone.utc)
    record = ClueNormalizer(client).fetch_category("15", Filters(), now=now)

    assert record.title == "Farm"
    assert [(c.id, c.value) for c in record.clues] == [(7, 0)]
    assert record.clues[0].airdate == "1999-01-01"
    assert client.calls[0]["category"] == "15"
    assert "value" not in client.calls[0]


def test_fetch_category_with_value_filter():
    client = FakeClient([])
    assert ClueNormalizer(client).fetch_category("15", Filters(value=400)) is None
    assert client.calls[0]["value"] == 400


def test_fetch_category_malformed_clue_raises():
    client = FakeClient([{"id": 1, "answer": "no question here"}])
    with pytest.raises(RetrievalError):
        ClueNormalizer(client).fetch_category("15", Filters())

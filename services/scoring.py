# services/scoring.py - answer evaluation, score, hints and favorites
import re
from typing import Iterable, List, Optional, Tuple

from services.trivia_types import AnswerRecord, Clue

_NON_SPACE = re.compile(r"\S")


def is_correct(record: AnswerRecord, case_sensitive: bool = True) -> bool:
    submitted, expected = record.answer, record.clue.answer
    if not case_sensitive:
        return submitted.strip().casefold() == expected.strip().casefold()
    return submitted == expected


def correct_answers(answered: Iterable[AnswerRecord], case_sensitive: bool = True) -> List[AnswerRecord]:
    return [a for a in answered if is_correct(a, case_sensitive)]


def total_score(answered: Iterable[AnswerRecord], case_sensitive: bool = True) -> int:
    """Sum of clue values over correct answers; derived on every read, never stored."""
    return sum(a.clue.value or 0 for a in correct_answers(answered, case_sensitive))


def make_hint(answer: Optional[str]) -> str:
    """Mask the answer: keep first/last characters, star out the rest (short answers fully)."""
    hint = answer or ""
    if len(hint) < 3:
        return _NON_SPACE.sub("*", hint)
    return hint[0] + _NON_SPACE.sub("*", hint[1:-1]) + hint[-1]


def _answers_for(clue: Clue, answered: Iterable[AnswerRecord]) -> List[AnswerRecord]:
    return [a for a in answered if a.clue.id == clue.id]


def clue_status(clue: Optional[Clue], answered: Iterable[AnswerRecord], case_sensitive: bool = True) -> str:
    """Bootstrap color for a clue button: primary (open), success or danger."""
    if clue is None:
        return "primary"
    matched = _answers_for(clue, answered)
    if not matched:
        return "primary"
    return "success" if any(is_correct(a, case_sensitive) for a in matched) else "danger"


def submitted_answer(clue: Clue, answered: Iterable[AnswerRecord]) -> Optional[str]:
    matched = _answers_for(clue, answered)
    return matched[0].answer if matched else None


def is_favorite(clue: Optional[Clue], favorites: Iterable[Clue]) -> bool:
    if clue is None:
        return False
    return any(f.question == clue.question for f in favorites)


def toggle_favorite(favorites: Tuple[Clue, ...], clue: Clue) -> Tuple[Clue, ...]:
    if is_favorite(clue, favorites):
        return tuple(f for f in favorites if f.question != clue.question)
    return favorites + (clue,)


def score_summary(answered: Iterable[AnswerRecord], favorites: Iterable[Clue], case_sensitive: bool = True) -> dict:
    answered = list(answered)
    return {
        "earnings": total_score(answered, case_sensitive),
        "correct": len(correct_answers(answered, case_sensitive)),
        "answered": len(answered),
        "favorites": len(list(favorites)),
    }

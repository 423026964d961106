"""Value types shared by the pipeline, the game state and the snapshot store.

Everything here is a plain dataclass. ``from_api`` builds objects out of jService
JSON (and raises ``RetrievalError`` on malformed bodies); ``to_dict``/``from_dict``
handle the persisted snapshot (and raise ``ValidationError``).
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Optional, Tuple, Union

from services.exceptions import RetrievalError, ValidationError

# Difficulty options offered by the value selector; "any" means no constraint
DIFFICULTIES = ["any", 100, 200, 300, 400, 500, 600, 800, 1000]

ANY_VALUE = "any"


def _is_int(v: Any) -> bool:
    return isinstance(v, int) and not isinstance(v, bool)


@dataclass(frozen=True)
class Clue:
    id: int
    question: str
    answer: str
    value: Optional[int] = None
    category_title: str = ""
    airdate: Optional[str] = None

    @classmethod
    def from_api(cls, raw: Any) -> "Clue":
        """Build a clue from one element of the /api/clues response."""
        if not isinstance(raw, dict):
            raise RetrievalError(f"clue payload is not an object: {raw!r}")
        if not _is_int(raw.get("id")):
            raise RetrievalError(f"clue payload has no integer id: {raw.get('id')!r}")
        question = raw.get("question")
        answer = raw.get("answer")
        if not isinstance(question, str) or not isinstance(answer, str):
            raise RetrievalError(f"clue {raw.get('id')!r} is missing question or answer text")
        value = raw.get("value")
        if value is not None and not _is_int(value):
            raise RetrievalError(f"clue {raw.get('id')!r} has non-integer value {value!r}")
        category = raw.get("category") or {}
        title = category.get("title") if isinstance(category, dict) else None
        return cls(
            id=raw.get("id"),
            question=question,
            answer=answer,
            value=value,
            category_title=title or "",
            airdate=raw.get("airdate"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "question": self.question,
            "answer": self.answer,
            "value": self.value,
            "category_title": self.category_title,
            "airdate": self.airdate,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "Clue":
        if not isinstance(data, dict):
            raise ValidationError("clue entry is not an object")
        if not _is_int(data.get("id")):
            raise ValidationError("clue entry has no integer id")
        if not isinstance(data.get("question"), str) or not isinstance(data.get("answer"), str):
            raise ValidationError("clue entry is missing question or answer")
        value = data.get("value")
        if value is not None and not _is_int(value):
            raise ValidationError(f"clue value {value!r} is not an integer")
        return cls(
            id=data.get("id"),
            question=data["question"],
            answer=data["answer"],
            value=value,
            category_title=data.get("category_title") or "",
            airdate=data.get("airdate"),
        )


@dataclass(frozen=True)
class CategoryRecord:
    title: str
    clues: Tuple[Clue, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {"title": self.title, "clues": [c.to_dict() for c in self.clues]}

    @classmethod
    def from_dict(cls, data: Any) -> "CategoryRecord":
        if not isinstance(data, dict) or not isinstance(data.get("clues"), list):
            raise ValidationError("category entry is malformed")
        clues = tuple(Clue.from_dict(c) for c in data["clues"])
        if not clues:
            raise ValidationError("category entry has no clues")
        return cls(title=str(data.get("title") or ""), clues=clues)


@dataclass(frozen=True)
class Filters:
    min_date: Optional[date] = None
    max_date: Optional[date] = None
    value: Union[str, int] = ANY_VALUE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "min_date": self.min_date.isoformat() if self.min_date else None,
            "max_date": self.max_date.isoformat() if self.max_date else None,
            "value": self.value,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "Filters":
        if not isinstance(data, dict):
            raise ValidationError("filters entry is not an object")
        try:
            min_date = date.fromisoformat(data["min_date"]) if data.get("min_date") else None
            max_date = date.fromisoformat(data["max_date"]) if data.get("max_date") else None
        except (TypeError, ValueError) as e:
            raise ValidationError(f"filters carry an invalid date: {e}") from e
        value = data.get("value", ANY_VALUE)
        if not (_is_int(value) or value == ANY_VALUE) or value not in DIFFICULTIES:
            raise ValidationError(f"filters carry an unknown value {value!r}")
        return cls(min_date=min_date, max_date=max_date, value=value)


@dataclass(frozen=True)
class AnswerRecord:
    clue: Clue
    answer: str

    def to_dict(self) -> Dict[str, Any]:
        return {"clue": self.clue.to_dict(), "answer": self.answer}

    @classmethod
    def from_dict(cls, data: Any) -> "AnswerRecord":
        if not isinstance(data, dict) or not isinstance(data.get("answer"), str):
            raise ValidationError("answered entry is malformed")
        return cls(clue=Clue.from_dict(data.get("clue")), answer=data["answer"])


@dataclass(frozen=True)
class GameState:
    filters: Filters = field(default_factory=Filters)
    search_text: str = ""
    categories: Tuple[CategoryRecord, ...] = ()
    answered: Tuple[AnswerRecord, ...] = ()
    favorites: Tuple[Clue, ...] = ()
    searching: bool = False
    # request token of the search allowed to commit results
    search_token: Optional[str] = None
    searching_since: Optional[float] = None
    last_error: Optional[str] = None
    results_for: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "filters": self.filters.to_dict(),
            "search_text": self.search_text,
            "categories": [c.to_dict() for c in self.categories],
            "answered": [a.to_dict() for a in self.answered],
            "favorites": [c.to_dict() for c in self.favorites],
            "searching": self.searching,
            "search_token": self.search_token,
            "searching_since": self.searching_since,
            "last_error": self.last_error,
            "results_for": self.results_for,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "GameState":
        if not isinstance(data, dict):
            raise ValidationError("snapshot is not an object")
        for key in ("categories", "answered", "favorites"):
            if not isinstance(data.get(key, []), list):
                raise ValidationError(f"snapshot field {key!r} is not a list")
        search_text = data.get("search_text", "")
        if not isinstance(search_text, str):
            raise ValidationError("snapshot search_text is not a string")
        searching = data.get("searching", False)
        if not isinstance(searching, bool):
            raise ValidationError("snapshot searching flag is not a boolean")
        for key in ("search_token", "last_error", "results_for"):
            if not isinstance(data.get(key), (str, type(None))):
                raise ValidationError(f"snapshot field {key!r} is not a string")
        since = data.get("searching_since")
        if since is not None and not isinstance(since, (int, float)):
            raise ValidationError("snapshot searching_since is not a timestamp")
        return cls(
            filters=Filters.from_dict(data.get("filters", {})),
            search_text=search_text,
            categories=tuple(CategoryRecord.from_dict(c) for c in data.get("categories", [])),
            answered=tuple(AnswerRecord.from_dict(a) for a in data.get("answered", [])),
            favorites=tuple(Clue.from_dict(c) for c in data.get("favorites", [])),
            searching=searching,
            search_token=data.get("search_token"),
            searching_since=since,
            last_error=data.get("last_error"),
            results_for=data.get("results_for"),
        )


INITIAL_STATE = GameState()

# services/exceptions.py - error kinds raised by the trivia pipeline


class TriviaError(Exception):
    """Base exception for all game errors."""

    pass


class RetrievalError(TriviaError):
    """Raised when the trivia API is unreachable, answers non-2xx or returns a malformed body."""

    pass


class ValidationError(TriviaError):
    """Raised when a stored snapshot or user input fails validation."""

    pass


class SearchInProgressError(TriviaError):
    """Raised when a search is started while another one still holds the searching flag."""

    pass

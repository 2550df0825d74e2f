from __future__ import annotations


class EngineError(Exception):
    """Base class for similarity engine failures."""


class FormatError(EngineError):
    """Raised when model data does not follow the word2vec binary layout."""


class TruncatedModelError(FormatError):
    """Raised when model data ends before the declared records are read."""


class NotFoundError(EngineError):
    def __init__(self, word: str) -> None:
        super().__init__(f"word not found: {word!r}")
        self.word = word

    def __eq__(self, other: object) -> bool:
        return isinstance(other, NotFoundError) and other.word == self.word

    def __hash__(self) -> int:
        return hash(("NotFoundError", self.word))


class EmptyExpressionError(EngineError):
    def __init__(self) -> None:
        super().__init__("must specify at least one word to evaluate")


class RemoteEngineError(EngineError):
    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code

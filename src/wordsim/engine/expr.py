from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Mapping

import numpy as np

if TYPE_CHECKING:
    from wordsim.engine.model import Model


@dataclass(frozen=True)
class Match:
    word: str
    score: float

    def to_dict(self) -> dict[str, object]:
        return {"word": self.word, "score": self.score}


class Expr(dict):
    """Linear combination of words, mapping each word to its weight.

    Adding a word that is already present accumulates its weight, so
    ``king + woman - man`` is built with three ``add`` calls.
    """

    def __init__(self, terms: Mapping[str, float] | None = None) -> None:
        super().__init__()
        if terms:
            for word, weight in terms.items():
                self.add(weight, word)

    def add(self, weight: float, word: str) -> None:
        self[word] = float(np.float32(self.get(word, 0.0) + weight))

    def add_all(self, weight: float, words: Iterable[str]) -> None:
        for word in words:
            self.add(weight, word)

    def add_weighted(self, weights: list[float], words: list[str]) -> None:
        if len(weights) != len(words):
            raise ValueError(
                f"got {len(weights)} weights for {len(words)} words"
            )
        for weight, word in zip(weights, words):
            self.add(weight, word)

    def eval(self, model: Model) -> np.ndarray:
        return model.eval(self)


def split_words(word_list: str) -> list[str]:
    return [word for word in word_list.split(",") if word]


def expr_from_lists(add: str = "", sub: str = "") -> Expr:
    """Build an expression from comma separated lists of words to add and
    subtract (weights ``+1`` and ``-1``)."""
    expr = Expr()
    expr.add_all(1.0, split_words(add))
    expr.add_all(-1.0, split_words(sub))
    return expr

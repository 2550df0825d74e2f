from __future__ import annotations

from typing import Iterable, Mapping, Sequence

import numpy as np

from wordsim.engine import vector as vec
from wordsim.engine.errors import EmptyExpressionError, NotFoundError
from wordsim.engine.expr import Expr, Match


class Model:
    """Immutable word -> vector table with normalized vectors.

    All vectors live in one contiguous ``(size, dim)`` float32 block; the
    vector of a word is a read-only row view into it.
    """

    def __init__(self, dim: int, words: Sequence[str], matrix: np.ndarray) -> None:
        if matrix.shape != (len(words), dim):
            raise ValueError(
                f"matrix shape {matrix.shape} does not match "
                f"{len(words)} words of dim {dim}"
            )
        self._set_vocabulary(dim, words)
        matrix.flags.writeable = False
        self._matrix: np.ndarray | None = matrix

    def _set_vocabulary(self, dim: int, words: Sequence[str]) -> None:
        if dim < 1:
            raise ValueError("dim must be >= 1")
        self._dim = dim
        self._words = list(words)
        self._index = {word: row for row, word in enumerate(self._words)}
        if len(self._index) != len(self._words):
            raise ValueError("model words must be unique")

    @property
    def dim(self) -> int:
        return self._dim

    @property
    def size(self) -> int:
        return len(self._words)

    @property
    def words(self) -> list[str]:
        return list(self._words)

    def __len__(self) -> int:
        return len(self._words)

    def __contains__(self, word: object) -> bool:
        return word in self._index

    def _lookup(self, word: str) -> np.ndarray | None:
        row = self._index.get(word)
        if row is None:
            return None
        return self._matrix[row]

    def _scan_matrix(self) -> np.ndarray:
        return self._matrix

    def _scores(self, vector: np.ndarray) -> np.ndarray:
        return self._scan_matrix() @ vector

    def vector(self, word: str) -> np.ndarray:
        found = self._lookup(word)
        if found is None:
            raise NotFoundError(word)
        return found

    def vectors(self, words: Iterable[str]) -> dict[str, np.ndarray]:
        """Vectors of the given words; unknown words are left out."""
        result: dict[str, np.ndarray] = {}
        for word in words:
            found = self._lookup(word)
            if found is not None:
                result[word] = found
        return result

    def eval(self, expr: Mapping[str, float]) -> np.ndarray:
        """Evaluate ``expr`` to a normalized vector.

        Raises EmptyExpressionError for an expression without terms and
        NotFoundError for the first word missing from the model.
        """
        if not expr:
            raise EmptyExpressionError()

        result = vec.zeros(self._dim)
        for word, weight in expr.items():
            found = self._lookup(word)
            if found is None:
                raise NotFoundError(word)
            vec.add_scaled(result, weight, found)

        vec.normalize(result)
        return result

    def cos(self, a: Mapping[str, float], b: Mapping[str, float]) -> float:
        u = self.eval(a)
        v = self.eval(b)
        return float(vec.dot(u, v))

    def coses(
        self, pairs: Sequence[tuple[Mapping[str, float], Mapping[str, float]]]
    ) -> list[float]:
        return [self.cos(a, b) for a, b in pairs]

    def cos_n(self, expr: Mapping[str, float], n: int) -> list[Match]:
        return self.top_n(self.eval(expr), n)

    def top_n(self, vector: np.ndarray, n: int) -> list[Match]:
        """The ``n`` words most similar to ``vector``, best first.

        ``n`` is capped at the vocabulary size. Equal scores keep
        vocabulary order.
        """
        if n < 0:
            raise ValueError("n must be >= 0")
        if n == 0 or not self._words:
            return []

        n = min(n, len(self._words))
        scores = self._scores(vector)
        if n < len(scores):
            candidates = np.argpartition(-scores, n - 1)[:n]
            candidates.sort()
        else:
            candidates = np.arange(len(scores))
        ranked = candidates[np.argsort(-scores[candidates], kind="stable")]

        return [Match(word=self._words[row], score=float(scores[row])) for row in ranked]

    def close(self) -> None:
        pass

    def __enter__(self) -> Model:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(size={self.size}, dim={self.dim})"


def sim(model: Model, x: str, y: str) -> float:
    """Cosine similarity of two single words."""
    return model.cos(Expr({x: 1.0}), Expr({y: 1.0}))

from __future__ import annotations

from threading import Lock
from typing import Callable, Sequence

import numpy as np

from wordsim.engine import vector as vec
from wordsim.engine.model import Model

_LOCK_STRIPES = 64


class LazyModel(Model):
    """Model that decodes a word's vector on first access.

    Loading only records where each vector starts in the raw buffer. Lookups
    decode and normalize on demand under one of a fixed set of striped locks,
    so concurrent first accesses of a word decode it once. A full vocabulary
    scan decodes everything into a contiguous matrix which later lookups use.
    """

    def __init__(
        self,
        dim: int,
        words: Sequence[str],
        offsets: Sequence[int],
        buffer,
        closer: Callable[[], None] | None = None,
    ) -> None:
        if len(offsets) != len(words):
            raise ValueError("every word needs exactly one vector offset")
        self._set_vocabulary(dim, words)
        self._offsets = list(offsets)
        self._buffer = buffer
        self._closer = closer
        self._matrix: np.ndarray | None = None
        self._decoded: dict[int, np.ndarray] = {}
        self._locks = [Lock() for _ in range(_LOCK_STRIPES)]
        self._matrix_lock = Lock()

    @property
    def decoded_count(self) -> int:
        if self._matrix is not None:
            return len(self._words)
        return len(self._decoded)

    def _require_open(self) -> None:
        if self._buffer is None:
            raise ValueError("model is closed")

    def _decode_row(self, row: int) -> np.ndarray:
        vector = vec.decode(self._buffer, self._offsets[row], self._dim)
        vec.normalize(vector)
        return vector

    def _lookup(self, word: str) -> np.ndarray | None:
        row = self._index.get(word)
        if row is None:
            return None

        matrix = self._matrix
        if matrix is not None:
            return matrix[row]

        cached = self._decoded.get(row)
        if cached is not None:
            return cached

        with self._locks[row % _LOCK_STRIPES]:
            cached = self._decoded.get(row)
            if cached is None:
                self._require_open()
                cached = self._decode_row(row)
                cached.flags.writeable = False
                self._decoded[row] = cached
        return cached

    def _scan_matrix(self) -> np.ndarray:
        matrix = self._matrix
        if matrix is not None:
            return matrix

        with self._matrix_lock:
            if self._matrix is None:
                self._require_open()
                matrix = np.empty((len(self._words), self._dim), dtype=vec.DTYPE)
                for row in range(len(self._words)):
                    matrix[row] = self._decode_row(row)
                matrix.flags.writeable = False
                self._matrix = matrix
                self._decoded.clear()
            return self._matrix

    def close(self) -> None:
        """Release the mapped model file; undecoded words become unreadable."""
        if self._closer is not None:
            self._closer()
            self._closer = None
        self._buffer = None

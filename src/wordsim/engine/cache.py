from __future__ import annotations

import hashlib
import logging
from threading import Lock
from typing import Mapping, Sequence

from wordsim.engine.coser import Coser
from wordsim.engine.errors import NotFoundError
from wordsim.engine.expr import Match

logger = logging.getLogger(__name__)


def hash_expr(expr: Mapping[str, float]) -> str:
    """Digest of an expression that ignores the order its terms were added."""
    digest = hashlib.sha1()
    for word in sorted(expr):
        encoded = word.encode("utf-8", errors="surrogatepass")
        digest.update(b"%d:" % len(encoded))
        digest.update(encoded)
        digest.update(repr(float(expr[word])).encode("ascii"))
        digest.update(b"\x00")
    return digest.hexdigest()


class SimilarityCache:
    """Memoizes the queries of any Coser, local or remote.

    Results are kept for the lifetime of the cache. A NotFoundError is
    remembered against every expression containing the missing word, and
    later queries involving that expression fail straight away with a new
    NotFoundError for the same word.
    """

    def __init__(self, engine: Coser) -> None:
        self._engine = engine
        self._lock = Lock()
        self._cos: dict[str, float] = {}
        self._cos_n: dict[tuple[str, int], list[Match]] = {}
        self._failures: dict[str, str] = {}
        self._hits = 0
        self._misses = 0

    @property
    def engine(self) -> Coser:
        return self._engine

    def _known_missing(self, *digests: str) -> str | None:
        with self._lock:
            for digest in digests:
                word = self._failures.get(digest)
                if word is not None:
                    self._hits += 1
                    return word
        return None

    def _remember_failure(
        self, exc: NotFoundError, sides: list[tuple[str, Mapping[str, float]]]
    ) -> None:
        with self._lock:
            for digest, expr in sides:
                if exc.word in expr:
                    self._failures[digest] = exc.word
        logger.debug(
            "remembered missing word",
            extra={"event": "cache_negative_entry", "word": exc.word},
        )

    def cos(self, a: Mapping[str, float], b: Mapping[str, float]) -> float:
        ah = hash_expr(a)
        bh = hash_expr(b)
        missing = self._known_missing(ah, bh)
        if missing is not None:
            raise NotFoundError(missing)

        key = ah + bh
        with self._lock:
            if key in self._cos:
                self._hits += 1
                return self._cos[key]
            self._misses += 1

        try:
            value = self._engine.cos(a, b)
        except NotFoundError as exc:
            self._remember_failure(exc, [(ah, a), (bh, b)])
            raise

        with self._lock:
            self._cos[key] = value
        return value

    def coses(
        self, pairs: Sequence[tuple[Mapping[str, float], Mapping[str, float]]]
    ) -> list[float]:
        return [self.cos(a, b) for a, b in pairs]

    def cos_n(self, expr: Mapping[str, float], n: int) -> list[Match]:
        digest = hash_expr(expr)
        missing = self._known_missing(digest)
        if missing is not None:
            raise NotFoundError(missing)

        key = (digest, n)
        with self._lock:
            cached = self._cos_n.get(key)
            if cached is not None:
                self._hits += 1
                return list(cached)
            self._misses += 1

        try:
            matches = self._engine.cos_n(expr, n)
        except NotFoundError as exc:
            self._remember_failure(exc, [(digest, expr)])
            raise

        with self._lock:
            self._cos_n[key] = list(matches)
        return matches

    def stats(self) -> dict[str, int]:
        with self._lock:
            return {
                "hits": self._hits,
                "misses": self._misses,
                "cos_entries": len(self._cos),
                "cos_n_entries": len(self._cos_n),
                "failed_exprs": len(self._failures),
            }


def new_cache(engine: Coser) -> SimilarityCache:
    return SimilarityCache(engine)

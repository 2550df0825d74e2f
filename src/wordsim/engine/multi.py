from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Mapping, Sequence

import numpy as np

from wordsim.engine.expr import Match
from wordsim.engine.model import Model

logger = logging.getLogger(__name__)


def multi_cos_n(
    model: Model,
    exprs: Sequence[Mapping[str, float]],
    n: int,
    *,
    max_workers: int | None = None,
) -> list[list[Match]]:
    """Top ``n`` matches for each expression, scanned in parallel.

    Every expression is evaluated before any scan starts, so an unknown word
    or an empty expression fails the whole call without partial results.
    Results come back in the order of ``exprs``.
    """
    if n < 0:
        raise ValueError("n must be >= 0")

    vectors = [model.eval(expr) for expr in exprs]
    if not vectors:
        return []

    results: list[list[Match] | None] = [None] * len(vectors)

    def _scan(slot: int, query: np.ndarray) -> None:
        results[slot] = model.top_n(query, n)

    with ThreadPoolExecutor(
        max_workers=max_workers or None, thread_name_prefix="wordsim-scan"
    ) as executor:
        futures = [
            executor.submit(_scan, slot, query) for slot, query in enumerate(vectors)
        ]
        wait(futures)

    for future in futures:
        future.result()

    logger.debug(
        "multi query complete", extra={"event": "multi_cos_n", "count": len(vectors), "n": n}
    )
    return [matches for matches in results if matches is not None]

from __future__ import annotations

from typing import Mapping, Protocol, Sequence, runtime_checkable

from wordsim.engine.expr import Match

ExprLike = Mapping[str, float]
ExprPair = tuple[ExprLike, ExprLike]


@runtime_checkable
class Coser(Protocol):
    """Anything that answers the three similarity queries.

    Implemented by local models, the HTTP client and the cache decorator,
    which can wrap either of the others.
    """

    def cos(self, a: ExprLike, b: ExprLike) -> float: ...

    def coses(self, pairs: Sequence[ExprPair]) -> list[float]: ...

    def cos_n(self, expr: ExprLike, n: int) -> list[Match]: ...

"""Query a running wordsim server."""
from __future__ import annotations

import argparse
import sys
import time

from wordsim.api.client import RemoteEngine
from wordsim.core.settings import get_settings
from wordsim.engine.errors import EngineError
from wordsim.engine.expr import Expr, expr_from_lists


def _make_expr(add: str, sub: str) -> Expr:
    expr = expr_from_lists(add, sub)
    if not expr:
        raise ValueError("must specify add and/or sub words for each target vector")
    return expr


def main(argv: list[str] | None = None, engine: RemoteEngine | None = None) -> int:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Similarity queries against a wordsim server")
    parser.add_argument("--url", default=settings.remote_url, help="server base URL")
    parser.add_argument("--add-a", default="", help="comma separated words to add to vector A")
    parser.add_argument("--sub-a", default="", help="comma separated words to subtract from vector A")
    parser.add_argument("--add-b", default="", help="comma separated words to add to vector B")
    parser.add_argument("--sub-b", default="", help="comma separated words to subtract from vector B")
    parser.add_argument("--sim", action="store_true", help="list the words closest to vector A")
    parser.add_argument("-n", type=int, default=settings.default_top_n, help="matches to return with --sim")
    args = parser.parse_args(argv)

    if engine is None:
        engine = RemoteEngine(args.url, timeout=settings.client_timeout_seconds)

    try:
        expr_a = _make_expr(args.add_a, args.sub_a)
    except ValueError as exc:
        print(f"error creating target vector for 'A': {exc}")
        return 1

    if args.sim:
        try:
            matches = engine.cos_n(expr_a, args.n)
        except EngineError as exc:
            print(f"error looking up similar items: {exc}")
            return 1
        for match in matches:
            print(f"{match.score:9f} {match.word!r}")
        return 0

    try:
        expr_b = _make_expr(args.add_b, args.sub_b)
    except ValueError as exc:
        print(f"error creating target vector for 'B': {exc}")
        return 1

    started = time.perf_counter()
    try:
        value = engine.cos(expr_a, expr_b)
    except EngineError as exc:
        print(f"error looking up similarity: {exc}")
        return 1

    print(f"cosine similarity: {value} (took: {time.perf_counter() - started:.3f}s)")
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""
Query a binary word2vec model from the command line.

``vec(king) - vec(man) + vec(woman)`` is::

    wordsim-calc --model /path/to/model.bin --add king,woman --sub man
"""
from __future__ import annotations

import argparse
import sys
import time

from wordsim.core.logging import configure_logging
from wordsim.core.settings import get_settings
from wordsim.engine.errors import EngineError
from wordsim.engine.expr import Expr, expr_from_lists, split_words
from wordsim.engine.loader import load_model_file
from wordsim.engine.multi import multi_cos_n


def _print_matches(matches) -> None:
    for match in matches:
        print(f"{match.score:9f}\t{match.word!r}")


def main(argv: list[str] | None = None) -> int:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        description="Find the words closest to a combination of word vectors"
    )
    parser.add_argument("--model", default=settings.model_path, help="path to binary model data")
    parser.add_argument("--add", default="", help="comma separated words to add to the target vector")
    parser.add_argument("--sub", default="", help="comma separated words to subtract from the target vector")
    parser.add_argument("--words", default="", help="comma separated words to query at the same time")
    parser.add_argument("-n", type=int, default=settings.default_top_n, help="number of matches to show")
    parser.add_argument("--lazy", action="store_true", default=settings.model_lazy)
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    configure_logging("INFO" if args.verbose else "WARNING")

    if not args.model:
        print("must specify --model; see -h for more details")
        return 1
    if not (args.add or args.sub or args.words):
        print("must specify --add, --sub, or --words; see -h for more details")
        return 1
    if args.n < 0:
        print("-n must be >= 0")
        return 1

    try:
        model = load_model_file(args.model, lazy=args.lazy)
    except (OSError, EngineError) as exc:
        print(f"error reading binary model data: {exc}")
        return 1

    with model:
        if args.words:
            exprs = [Expr({word: 1.0}) for word in split_words(args.words)]
            started = time.perf_counter()
            try:
                results = multi_cos_n(
                    model, exprs, args.n, max_workers=settings.multi_max_workers
                )
            except EngineError as exc:
                print(f"error retrieving multi cos: {exc}")
                return 1
            for expr, matches in zip(exprs, results):
                print(f"# {next(iter(expr))}")
                _print_matches(matches)
            if args.verbose:
                print(f"Total time: {time.perf_counter() - started:.3f}s")
            return 0

        expr = expr_from_lists(args.add, args.sub)
        if args.verbose:
            print(f"Expr: {dict(expr)!r}")

        started = time.perf_counter()
        try:
            matches = model.cos_n(expr, args.n)
        except EngineError as exc:
            print(f"error finding most similar: {exc}")
            return 1
        if args.verbose:
            print(f"Total time: {time.perf_counter() - started:.3f}s")

        _print_matches(matches)
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""Serve a binary word2vec model over HTTP."""
from __future__ import annotations

import argparse
import logging
import sys

import uvicorn

from wordsim.api.app import create_app
from wordsim.core.logging import configure_logging
from wordsim.core.settings import get_settings
from wordsim.engine.cache import new_cache
from wordsim.engine.errors import EngineError
from wordsim.engine.loader import load_model_file

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Serve similarity queries for a word2vec model")
    parser.add_argument("--model", default=settings.model_path, help="path to binary model data")
    parser.add_argument("--host", default=settings.server_host)
    parser.add_argument("--port", type=int, default=settings.server_port)
    parser.add_argument("--lazy", action="store_true", default=settings.model_lazy)
    parser.add_argument(
        "--no-cache",
        dest="cache",
        action="store_false",
        default=settings.cache_enabled,
        help="disable result memoization",
    )
    args = parser.parse_args(argv)

    configure_logging(settings.log_level)

    if not args.model:
        print("must specify --model; see -h for more details")
        return 1

    logger.info("loading model", extra={"event": "model_loading", "model_path": args.model})
    try:
        model = load_model_file(args.model, lazy=args.lazy)
    except (OSError, EngineError) as exc:
        print(f"error reading binary model data: {exc}")
        return 1

    with model:
        app = create_app(new_cache(model) if args.cache else model)
        logger.info("server listening on %s:%s", args.host, args.port)
        uvicorn.run(app, host=args.host, port=args.port, log_config=None)
    return 0


if __name__ == "__main__":
    sys.exit(main())

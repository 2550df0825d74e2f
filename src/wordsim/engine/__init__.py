from wordsim.engine.cache import SimilarityCache, hash_expr, new_cache
from wordsim.engine.coser import Coser
from wordsim.engine.errors import (
    EmptyExpressionError,
    EngineError,
    FormatError,
    NotFoundError,
    RemoteEngineError,
    TruncatedModelError,
)
from wordsim.engine.expr import Expr, Match, expr_from_lists
from wordsim.engine.lazy import LazyModel
from wordsim.engine.loader import load_model, load_model_file
from wordsim.engine.model import Model, sim
from wordsim.engine.multi import multi_cos_n

__all__ = [
    "Coser",
    "EmptyExpressionError",
    "EngineError",
    "Expr",
    "FormatError",
    "LazyModel",
    "Match",
    "Model",
    "NotFoundError",
    "RemoteEngineError",
    "SimilarityCache",
    "TruncatedModelError",
    "expr_from_lists",
    "hash_expr",
    "load_model",
    "load_model_file",
    "multi_cos_n",
    "new_cache",
    "sim",
]

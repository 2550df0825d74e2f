"""
Single precision vector primitives used by the similarity engine.

All operands of a binary operation share one dimension; callers guarantee it
because every vector of a model has the model's ``dim``. Nothing here guards
against zero-norm vectors: normalizing one yields NaN/Inf values which are
passed on unchanged.
"""
from __future__ import annotations

import numpy as np

DTYPE = np.float32
WIRE_DTYPE = np.dtype("<f4")


def zeros(dim: int) -> np.ndarray:
    return np.zeros(dim, dtype=DTYPE)


def dot(u: np.ndarray, v: np.ndarray) -> np.float32:
    """Sum of elementwise products."""
    return DTYPE(np.dot(u, v))


def add_scaled(v: np.ndarray, a: float, u: np.ndarray) -> None:
    """In-place ``v += a * u``."""
    v += DTYPE(a) * u


def norm(v: np.ndarray) -> np.float32:
    """Euclidean norm."""
    return DTYPE(np.sqrt(np.add.reduce(v * v)))


def normalize(v: np.ndarray) -> None:
    """In-place division by the Euclidean norm."""
    with np.errstate(divide="ignore", invalid="ignore"):
        v /= norm(v)


def normalize_rows(matrix: np.ndarray) -> None:
    """In-place normalization of every row of a ``(n, dim)`` matrix."""
    if matrix.size == 0:
        return
    norms = np.sqrt(np.add.reduce(matrix * matrix, axis=1, keepdims=True))
    with np.errstate(divide="ignore", invalid="ignore"):
        matrix /= norms


def decode(buffer, offset: int, dim: int) -> np.ndarray:
    """Copy ``dim`` little-endian float32 values out of ``buffer``."""
    raw = np.frombuffer(buffer, dtype=WIRE_DTYPE, count=dim, offset=offset)
    return raw.astype(DTYPE, copy=True)

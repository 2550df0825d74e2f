"""
Reading word2vec binary models.

Layout: a header line ``"<size> <dim>\\n"`` followed by ``size`` records, each
being the word, a single space, ``dim`` little-endian float32 values and a
newline (which may be missing after the last record).
"""
from __future__ import annotations

import logging
import mmap
from pathlib import Path
from typing import BinaryIO, Iterator

import numpy as np

from wordsim.engine import vector as vec
from wordsim.engine.errors import FormatError, TruncatedModelError
from wordsim.engine.lazy import LazyModel
from wordsim.engine.model import Model

logger = logging.getLogger(__name__)

_FLOAT_SIZE = 4


def _parse_header(buffer) -> tuple[int, int, int]:
    newline = buffer.find(b"\n")
    if newline == -1:
        raise FormatError("could not read size/dim header line")

    fields = bytes(buffer[:newline]).split()
    if len(fields) != 2:
        raise FormatError(
            f"could not extract size/dim from header: expected 2 fields, got {len(fields)}"
        )

    try:
        size, dim = int(fields[0]), int(fields[1])
    except ValueError as exc:
        raise FormatError(f"could not parse size/dim header {fields!r}") from exc

    if size < 0:
        raise FormatError(f"vocabulary size must be >= 0, got {size}")
    if dim < 1:
        raise FormatError(f"vector dim must be >= 1, got {dim}")

    return size, dim, newline + 1


def _iter_records(buffer, size: int, dim: int, pos: int) -> Iterator[tuple[str, int]]:
    """Yield ``(word, vector_offset)`` for every declared record."""
    total = len(buffer)
    vector_bytes = dim * _FLOAT_SIZE

    for index in range(size):
        delimiter = buffer.find(b" ", pos)
        if delimiter == -1:
            raise TruncatedModelError(
                f"record {index}: missing word delimiter after {size} declared words"
            )
        word = bytes(buffer[pos:delimiter]).decode("utf-8", errors="backslashreplace")

        offset = delimiter + 1
        end = offset + vector_bytes
        if end > total:
            raise TruncatedModelError(
                f"record {index} ({word!r}): expected {vector_bytes} bytes of "
                f"vector data, got {total - offset}"
            )

        pos = end
        if buffer[pos : pos + 1] == b"\n":
            pos += 1

        yield word, offset


def _read_eager(buffer) -> Model:
    size, dim, pos = _parse_header(buffer)

    matrix = np.empty((size, dim), dtype=vec.DTYPE)
    rows: dict[str, int] = {}
    words: list[str] = []
    for word, offset in _iter_records(buffer, size, dim, pos):
        row = rows.get(word)
        if row is None:
            row = len(words)
            rows[word] = row
            words.append(word)
        matrix[row] = np.frombuffer(
            buffer, dtype=vec.WIRE_DTYPE, count=dim, offset=offset
        )

    if len(words) < size:
        matrix = matrix[: len(words)].copy()
    vec.normalize_rows(matrix)
    return Model(dim, words, matrix)


def _read_lazy(buffer, closer=None) -> LazyModel:
    size, dim, pos = _parse_header(buffer)

    offsets: dict[str, int] = {}
    for word, offset in _iter_records(buffer, size, dim, pos):
        offsets[word] = offset

    return LazyModel(
        dim, list(offsets.keys()), list(offsets.values()), buffer, closer=closer
    )


def _log_loaded(model: Model, source: str, lazy: bool) -> None:
    logger.info(
        "model loaded",
        extra={
            "event": "model_loaded",
            "model_path": source,
            "vocab_size": model.size,
            "dim": model.dim,
            "lazy": lazy,
        },
    )


def load_model(stream: BinaryIO, *, lazy: bool = False) -> Model:
    """Read a binary word2vec model from ``stream``.

    Raises FormatError for a malformed header and TruncatedModelError when
    the stream ends before all declared records were read.
    """
    data = stream.read()
    if not isinstance(data, (bytes, bytearray)):
        raise TypeError("model stream must be opened in binary mode")

    model = _read_lazy(data) if lazy else _read_eager(data)
    _log_loaded(model, getattr(stream, "name", "<stream>"), lazy)
    return model


def load_model_file(path: str | Path, *, lazy: bool = False) -> Model:
    """Read a binary word2vec model file.

    With ``lazy=True`` the file is memory-mapped and stays open until the
    returned model is closed.
    """
    model_path = Path(path)
    if not lazy:
        with model_path.open("rb") as handle:
            return load_model(handle)

    handle = model_path.open("rb")
    try:
        if model_path.stat().st_size == 0:
            raise FormatError("could not read size/dim header line")
        mapped = mmap.mmap(handle.fileno(), 0, access=mmap.ACCESS_READ)
    except Exception:
        handle.close()
        raise

    def _close() -> None:
        mapped.close()
        handle.close()

    try:
        model = _read_lazy(mapped, closer=_close)
    except Exception:
        _close()
        raise

    _log_loaded(model, str(model_path), lazy)
    return model

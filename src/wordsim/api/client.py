"""HTTP client that answers similarity queries through a running wordsim server."""
from __future__ import annotations

from typing import Any, Mapping, Sequence

import requests

from wordsim.core.errors import WORD_NOT_FOUND
from wordsim.engine.errors import NotFoundError, RemoteEngineError
from wordsim.engine.expr import Match


def _expr_payload(expr: Mapping[str, float]) -> dict[str, float]:
    return {word: float(weight) for word, weight in expr.items()}


class RemoteEngine:
    """Coser backed by the ``/cos``, ``/coses`` and ``/cos-n`` routes.

    A missing word reported by the server is raised as NotFoundError, so a
    SimilarityCache wrapped around this client caches failures the same way
    it does for a local model.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 30.0,
        session: Any | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session if session is not None else requests.Session()

    def _post(self, route: str, payload: dict[str, Any]) -> dict[str, Any]:
        try:
            response = self._session.post(
                f"{self.base_url}/{route}", json=payload, timeout=self.timeout
            )
        except requests.RequestException as exc:
            raise RemoteEngineError(f"error calling {route}: {exc}") from exc

        if response.status_code == 200:
            try:
                body = response.json()
            except ValueError as exc:
                raise RemoteEngineError(
                    f"error decoding {route} response: {exc}", response.status_code
                ) from exc
            if not isinstance(body, dict):
                raise RemoteEngineError(
                    f"{route} response must be a JSON object", response.status_code
                )
            return body

        error: dict[str, Any] = {}
        try:
            body = response.json()
            if isinstance(body, dict) and isinstance(body.get("error"), dict):
                error = body["error"]
        except ValueError:
            pass

        if error.get("code") == WORD_NOT_FOUND and isinstance(error.get("word"), str):
            raise NotFoundError(error["word"])

        message = error.get("message") or response.text
        raise RemoteEngineError(
            f"{route} failed with status {response.status_code}: {message}",
            response.status_code,
        )

    def cos(self, a: Mapping[str, float], b: Mapping[str, float]) -> float:
        body = self._post("cos", {"a": _expr_payload(a), "b": _expr_payload(b)})
        return float(body["value"])

    def coses(
        self, pairs: Sequence[tuple[Mapping[str, float], Mapping[str, float]]]
    ) -> list[float]:
        body = self._post(
            "coses",
            {
                "a": [_expr_payload(a) for a, _ in pairs],
                "b": [_expr_payload(b) for _, b in pairs],
            },
        )
        return [float(value) for value in body["values"]]

    def cos_n(self, expr: Mapping[str, float], n: int) -> list[Match]:
        body = self._post("cos-n", {"expr": _expr_payload(expr), "n": n})
        return [
            Match(word=str(item["word"]), score=float(item["score"]))
            for item in body["matches"]
        ]

from fastapi.testclient import TestClient

from wordsim.api.app import create_app
from wordsim.engine.errors import FormatError


class FailingEngine:
    def __init__(self, exc: Exception) -> None:
        self.exc = exc

    def cos(self, a, b):
        raise self.exc

    def coses(self, pairs):
        raise self.exc

    def cos_n(self, expr, n):
        raise self.exc


def test_unhandled_exception_returns_standardized_500_with_request_id() -> None:
    app = create_app()

    @app.get("/boom")
    def boom() -> None:
        raise RuntimeError("boom")

    client = TestClient(app, raise_server_exceptions=False)
    response = client.get("/boom")

    assert response.status_code == 500
    assert response.headers.get("X-Request-Id")
    assert response.json() == {
        "error": {
            "code": "internal_error",
            "message": "Internal Server Error",
            "status": 500,
            "request_id": response.headers["X-Request-Id"],
        }
    }


def test_other_engine_errors_map_to_400() -> None:
    client = TestClient(create_app(FailingEngine(FormatError("bad data"))))

    response = client.post("/cos-n", json={"expr": {"a": 1.0}, "n": 1})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "engine_error"
    assert response.json()["error"]["message"] == "bad data"

from fastapi.testclient import TestClient

from wordsim.api.app import app, create_app


def test_request_id_header_is_propagated_when_provided() -> None:
    client = TestClient(app)

    response = client.get("/health", headers={"X-Request-Id": "abc"})

    assert response.status_code == 200
    assert response.headers["X-Request-Id"] == "abc"


def test_request_id_header_is_generated_when_missing() -> None:
    client = TestClient(app)

    response = client.get("/health")

    assert response.status_code == 200
    generated_request_id = response.headers.get("X-Request-Id")

    assert generated_request_id is not None
    assert generated_request_id.strip() != ""
    assert len(generated_request_id) >= 16


def test_request_id_is_echoed_in_error_envelope(hello_world_model) -> None:
    client = TestClient(create_app(hello_world_model))

    response = client.post(
        "/cos",
        json={"a": {"hello": 1.0}, "b": {"goodbye": 1.0}},
        headers={"X-Request-Id": "req-42"},
    )

    assert response.status_code == 400
    assert response.headers["X-Request-Id"] == "req-42"
    assert response.json()["error"]["request_id"] == "req-42"

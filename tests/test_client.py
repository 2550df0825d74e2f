import pytest
import requests
from fastapi.testclient import TestClient

from wordsim.api.app import create_app
from wordsim.api.client import RemoteEngine
from wordsim.engine.cache import new_cache
from wordsim.engine.coser import Coser
from wordsim.engine.errors import EmptyExpressionError, NotFoundError, RemoteEngineError
from wordsim.engine.expr import Match


@pytest.fixture
def remote(animals_model) -> RemoteEngine:
    session = TestClient(create_app(animals_model))
    return RemoteEngine("http://testserver/", session=session)


class CountingSession:
    def __init__(self, session) -> None:
        self.session = session
        self.calls: list[str] = []

    def post(self, url, **kwargs):
        self.calls.append(url)
        return self.session.post(url, **kwargs)


class BrokenSession:
    def post(self, url, **kwargs):
        raise requests.ConnectionError("connection refused")


def test_remote_engine_is_a_coser(remote) -> None:
    assert isinstance(remote, Coser)
    assert remote.base_url == "http://testserver"


def test_remote_cos_matches_local(remote, animals_model) -> None:
    assert remote.cos({"cat": 1.0}, {"wolf": 1.0}) == pytest.approx(
        animals_model.cos({"cat": 1.0}, {"wolf": 1.0}), abs=1e-6
    )


def test_remote_coses_matches_local(remote, animals_model) -> None:
    pairs = [({"cat": 1.0}, {"dog": 1.0}), ({"car": 1.0}, {"truck": 1.0, "cat": -0.5})]

    assert remote.coses(pairs) == pytest.approx(animals_model.coses(pairs), abs=1e-6)


def test_remote_cos_n_returns_matches(remote, animals_model) -> None:
    matches = remote.cos_n({"dog": 1.0}, 3)

    assert all(isinstance(match, Match) for match in matches)
    assert [m.word for m in matches] == [m.word for m in animals_model.cos_n({"dog": 1.0}, 3)]


def test_remote_missing_word_raises_not_found(remote) -> None:
    with pytest.raises(NotFoundError) as exc_info:
        remote.cos({"cat": 1.0}, {"unicorn": 1.0})

    assert exc_info.value.word == "unicorn"


def test_remote_empty_expression_raises_remote_error(remote) -> None:
    with pytest.raises(RemoteEngineError) as exc_info:
        remote.cos_n({}, 3)

    assert exc_info.value.status_code == 400
    assert not isinstance(exc_info.value, EmptyExpressionError)


def test_remote_without_model_raises_remote_error() -> None:
    remote = RemoteEngine("http://testserver", session=TestClient(create_app()))

    with pytest.raises(RemoteEngineError) as exc_info:
        remote.cos({"cat": 1.0}, {"dog": 1.0})

    assert exc_info.value.status_code == 503
    assert "Model is not loaded" in str(exc_info.value)


def test_connection_failure_raises_remote_error() -> None:
    remote = RemoteEngine("http://localhost:1", session=BrokenSession())

    with pytest.raises(RemoteEngineError) as exc_info:
        remote.cos({"cat": 1.0}, {"dog": 1.0})

    assert exc_info.value.status_code is None


def test_cache_around_remote_engine_remembers_missing_words(animals_model) -> None:
    session = CountingSession(TestClient(create_app(animals_model)))
    cache = new_cache(RemoteEngine("http://testserver", session=session))

    for _ in range(3):
        with pytest.raises(NotFoundError):
            cache.cos({"cat": 1.0}, {"unicorn": 1.0})
    first = cache.cos_n({"cat": 1.0}, 2)
    second = cache.cos_n({"cat": 1.0}, 2)

    assert first == second
    assert session.calls == ["http://testserver/cos", "http://testserver/cos-n"]

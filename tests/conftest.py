import io

import pytest

from model_files import ANIMALS, HELLO_WORLD, model_bytes
from wordsim.core.settings import clear_settings_cache
from wordsim.engine.loader import load_model


@pytest.fixture(autouse=True)
def default_safe_test_env(monkeypatch):
    clear_settings_cache()
    monkeypatch.setenv("APP_ENV", "local")
    monkeypatch.delenv("MODEL_PATH", raising=False)

    yield

    clear_settings_cache()


@pytest.fixture
def hello_world_model():
    return load_model(io.BytesIO(model_bytes(HELLO_WORLD)))


@pytest.fixture
def animals_model():
    return load_model(io.BytesIO(model_bytes(ANIMALS)))

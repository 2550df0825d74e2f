import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from wordsim.api.routes_ready import router as ready_router
from wordsim.api.routes_similarity import router as similarity_router
from wordsim.core.errors import install_error_handlers
from wordsim.core.logging import configure_logging
from wordsim.core.request_id import install_request_id_middleware
from wordsim.core.settings import get_settings
from wordsim.engine.cache import SimilarityCache, new_cache
from wordsim.engine.coser import Coser
from wordsim.engine.errors import EngineError
from wordsim.engine.loader import load_model_file
from wordsim.engine.model import Model

logger = logging.getLogger(__name__)


def _safe_error_message(message: str, max_length: int = 180) -> str:
    sanitized = " ".join(message.split())
    if not sanitized:
        return "unknown_error"
    return sanitized[:max_length]


def _attach_engine(app: FastAPI, engine: Coser | None) -> None:
    model = engine
    if isinstance(engine, SimilarityCache):
        model = engine.engine

    app.state.engine = engine
    app.state.model = model if isinstance(model, Model) else None
    app.state.cache_enabled = isinstance(engine, SimilarityCache)


def _load_configured_engine(app: FastAPI) -> Model | None:
    settings = get_settings()
    if not settings.model_path.strip():
        app.state.startup_model_status = {
            "loaded": False,
            "reason": "model_path_not_set",
            "detail": None,
        }
        logger.warning(
            "MODEL_PATH is not set, similarity routes are unavailable",
            extra={"event": "startup_model_missing"},
        )
        return None

    try:
        model = load_model_file(settings.model_path, lazy=settings.model_lazy)
    except (OSError, EngineError) as exc:
        error_message = _safe_error_message(str(exc))
        app.state.startup_model_status = {
            "loaded": False,
            "reason": "model_not_loaded",
            "detail": error_message,
        }
        logger.error(
            "startup model load failed",
            extra={
                "event": "startup_model_load_failed",
                "model_path": settings.model_path,
                "error_type": exc.__class__.__name__,
                "error_message": error_message,
            },
        )
        return None

    app.state.startup_model_status = {"loaded": True, "reason": None, "detail": None}
    _attach_engine(app, new_cache(model) if settings.cache_enabled else model)
    return model


@asynccontextmanager
async def lifespan(app: FastAPI):
    owned: Model | None = None
    if app.state.engine is None:
        owned = _load_configured_engine(app)

    try:
        yield
    finally:
        if owned is not None:
            _attach_engine(app, None)
            owned.close()


def create_app(engine: Coser | None = None) -> FastAPI:
    """Build the HTTP service around ``engine``.

    Without an engine the model named by MODEL_PATH is loaded at startup.
    """
    configure_logging(get_settings().log_level)

    app = FastAPI(title="wordsim API", lifespan=lifespan)
    app.state.startup_model_status = {"loaded": engine is not None, "reason": None, "detail": None}
    _attach_engine(app, engine)

    install_request_id_middleware(app)
    install_error_handlers(app)

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(ready_router)
    app.include_router(similarity_router)
    return app


app = create_app()

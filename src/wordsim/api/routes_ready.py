from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from wordsim.engine.lazy import LazyModel

router = APIRouter()


@router.get("/ready")
def ready(request: Request) -> JSONResponse:
    state = request.app.state
    engine = getattr(state, "engine", None)
    model = getattr(state, "model", None)

    checks: dict[str, object] = {
        "model_loaded": engine is not None,
        "cache_enabled": bool(getattr(state, "cache_enabled", False)),
    }
    if model is not None:
        checks["dim"] = model.dim
        checks["size"] = model.size
        checks["lazy"] = isinstance(model, LazyModel)

    if engine is None:
        startup_model_status = getattr(state, "startup_model_status", {})
        reason = startup_model_status.get("reason") or "model_not_loaded"
        detail = startup_model_status.get("detail")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "checks": checks,
                "reason": f"{reason}: {detail}" if detail else reason,
            },
        )

    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={"status": "ready", "checks": checks},
    )

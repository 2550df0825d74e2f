from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel

from wordsim.core.settings import get_settings
from wordsim.engine.coser import Coser
from wordsim.engine.expr import Expr

router = APIRouter()


class CosRequest(BaseModel):
    a: dict[str, float]
    b: dict[str, float]


class CosesRequest(BaseModel):
    a: list[dict[str, float]]
    b: list[dict[str, float]]


class CosNRequest(BaseModel):
    expr: dict[str, float]
    n: int | None = None


def get_engine(request: Request) -> Coser:
    engine = getattr(request.app.state, "engine", None)
    if engine is None:
        raise HTTPException(status_code=503, detail="Model is not loaded")
    return engine


@router.post("/cos")
def cos_endpoint(
    payload: CosRequest, engine: Coser = Depends(get_engine)
) -> dict[str, float]:
    value = engine.cos(Expr(payload.a), Expr(payload.b))
    return {"value": value}


@router.post("/coses")
def coses_endpoint(
    payload: CosesRequest, engine: Coser = Depends(get_engine)
) -> dict[str, list[float]]:
    if len(payload.a) != len(payload.b):
        raise HTTPException(
            status_code=422,
            detail=(
                f"'a' and 'b' must have the same length, "
                f"got {len(payload.a)} and {len(payload.b)}"
            ),
        )

    pairs = [(Expr(a), Expr(b)) for a, b in zip(payload.a, payload.b)]
    return {"values": engine.coses(pairs)}


@router.post("/cos-n")
def cos_n_endpoint(
    payload: CosNRequest, engine: Coser = Depends(get_engine)
) -> dict[str, list[dict[str, object]]]:
    n = payload.n if payload.n is not None else get_settings().default_top_n
    if n < 0:
        raise HTTPException(status_code=422, detail="'n' must be >= 0")

    matches = engine.cos_n(Expr(payload.expr), n)
    return {"matches": [match.to_dict() for match in matches]}

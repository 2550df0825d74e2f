from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from wordsim.core.request_id import REQUEST_ID_HEADER, request_id_from
from wordsim.engine.errors import EmptyExpressionError, EngineError, NotFoundError

logger = logging.getLogger(__name__)

WORD_NOT_FOUND = "word_not_found"
EMPTY_EXPRESSION = "empty_expression"


def error_response(
    request: Request,
    *,
    status_code: int,
    code: str,
    message: str,
    **fields: Any,
) -> JSONResponse:
    request_id = request_id_from(request)
    response = JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": code,
                "message": message,
                "status": status_code,
                "request_id": request_id,
                **fields,
            }
        },
    )
    response.headers[REQUEST_ID_HEADER] = request_id
    return response


def install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(HTTPException)
    async def http_exception_handler(
        request: Request, exc: HTTPException
    ) -> JSONResponse:
        logger.info(
            "http_exception",
            extra={
                "request_id": request_id_from(request),
                "method": request.method,
                "path": request.url.path,
                "status_code": exc.status_code,
            },
        )
        return error_response(
            request,
            status_code=exc.status_code,
            code="http_error",
            message=str(exc.detail),
        )

    @app.exception_handler(EngineError)
    async def engine_error_handler(request: Request, exc: EngineError) -> JSONResponse:
        logger.info(
            "error evaluating query",
            extra={
                "request_id": request_id_from(request),
                "path": request.url.path,
                "error_type": exc.__class__.__name__,
                "error_message": str(exc),
            },
        )
        if isinstance(exc, NotFoundError):
            return error_response(
                request,
                status_code=400,
                code=WORD_NOT_FOUND,
                message=str(exc),
                word=exc.word,
            )
        if isinstance(exc, EmptyExpressionError):
            return error_response(
                request, status_code=400, code=EMPTY_EXPRESSION, message=str(exc)
            )
        return error_response(
            request, status_code=400, code="engine_error", message=str(exc)
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        logger.error(
            "unhandled_exception",
            exc_info=True,
            extra={
                "request_id": request_id_from(request),
                "method": request.method,
                "path": request.url.path,
            },
        )
        return error_response(
            request,
            status_code=500,
            code="internal_error",
            message="Internal Server Error",
        )

"""Map engine exceptions onto HTTP responses.

Body shape for every error: {"error": str, "code": str, "correlation_id": str}
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ayur_core_lib.api.request_context import correlation_id_for
from ayur_core_lib.exceptions import (
    AyurCoreError,
    CaseNotFoundError,
    EngineError,
    InvalidInputError,
    InvalidTransitionError,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR = {
    CaseNotFoundError: status.HTTP_404_NOT_FOUND,
    InvalidInputError: status.HTTP_400_BAD_REQUEST,
    InvalidTransitionError: status.HTTP_409_CONFLICT,
    EngineError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_for(exc: AyurCoreError) -> int:
    for error_type, code in STATUS_BY_ERROR.items():
        if isinstance(exc, error_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _error_body(message: str, code: str, request: Request) -> dict:
    return {
        "error": message,
        "code": code,
        "correlation_id": correlation_id_for(request),
    }


async def handle_engine_error(request: Request, exc: AyurCoreError) -> JSONResponse:
    http_status = status_for(exc)
    if http_status >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected ({exc.code}): {exc.message}")
    return JSONResponse(
        status_code=http_status,
        content=_error_body(exc.message, exc.code, request),
    )


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info(f"{request.method} {request.url.path} request validation failed: {exc.errors()}")
    return JSONResponse(
        status_code=422,
        content=_error_body("Request validation failed", "validation_error", request),
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AyurCoreError, handle_engine_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)

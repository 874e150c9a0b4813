from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette import status
from starlette.exceptions import HTTPException as StarletteHTTPException

from sharex_uploader.application.errors import AppError, UnexpectedInternalError

logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = "Too many upload requests, please try again later."


def error_payload(message: str, details: Any | None = None) -> dict[str, Any]:
    payload: dict[str, Any] = {"success": False, "error": message}
    if details is not None:
        payload["details"] = details
    return payload


async def handle_rate_limited(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    logger.info(
        "Rate limit exceeded: %s",
        exc.detail,
        extra={"path": request.url.path, "method": request.method},
    )
    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS, content=error_payload(RATE_LIMIT_MESSAGE)
    )


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:  # noqa: WPS430
        logger.info(
            "Application error handled: %s - %s (status: %d)",
            exc.code,
            exc.message,
            exc.status_code,
            extra={"path": request.url.path, "method": request.method},
        )
        return JSONResponse(
            status_code=exc.status_code, content=error_payload(exc.message, exc.details)
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(  # noqa: WPS430
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        messages = [str(err.get("msg", "")) for err in exc.errors()]
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_payload("Invalid request", "; ".join(m for m in messages if m) or None),
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:  # noqa: WPS430
        return JSONResponse(status_code=exc.status_code, content=error_payload(str(exc.detail)))

    app.add_exception_handler(RateLimitExceeded, handle_rate_limited)

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:  # noqa: WPS430
        logger.exception(
            "Unexpected error on %s %s", request.method, request.url.path, exc_info=exc
        )
        error = UnexpectedInternalError()
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=error_payload(error.message)
        )

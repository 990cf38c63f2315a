"""Custom exceptions and centralized FastAPI error handlers."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class PodsiteError(Exception):
    """Base exception with HTTP status code and a short machine-readable error."""

    def __init__(self, message: str, status_code: int = 500, error: str = "internal_error"):
        super().__init__(message)
        self.status_code = status_code
        self.error = error


class NotFoundError(PodsiteError):
    def __init__(self, message: str):
        super().__init__(message, status_code=404, error="not_found")


class BadRequestError(PodsiteError):
    def __init__(self, message: str):
        super().__init__(message, status_code=400, error="bad_request")


def error_body(error: str, message: str, code: int) -> dict:
    return {"error": error, "message": message, "code": code}


def register_error_handlers(app: FastAPI) -> None:
    """Register centralized exception handlers on the FastAPI app."""

    @app.exception_handler(PodsiteError)
    async def handle_podsite_error(_request: Request, exc: PodsiteError):
        return JSONResponse(
            error_body(exc.error, str(exc), exc.status_code),
            status_code=exc.status_code,
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(_request: Request, exc: RequestValidationError):
        details = "; ".join(err.get("msg", "invalid value") for err in exc.errors())
        return JSONResponse(
            error_body("bad_request", details or "Invalid request", 400),
            status_code=400,
        )

    @app.exception_handler(ValueError)
    async def handle_value_error(_request: Request, exc: ValueError):
        return JSONResponse(error_body("bad_request", str(exc), 400), status_code=400)

    @app.exception_handler(Exception)
    async def handle_unexpected(_request: Request, exc: Exception):
        logger.exception("Unhandled error: %s", exc)
        return JSONResponse(
            error_body("internal_error", "Internal server error", 500),
            status_code=500,
        )

"""
Error types and the JSON error envelope.

Inference errors never reach the client: the inference services catch
them and substitute a canned response. AppError is for bad requests.
"""
import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class InferenceError(Exception):
    """Base class for anything that goes wrong on the model side."""


class InferenceUnavailable(InferenceError):
    """The upstream call failed, timed out, or could not be made at all."""


class InferenceContractViolation(InferenceError):
    """The upstream answered, but not with a usable payload."""


class AppError(Exception):
    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def error_body(message: str, status_code: int) -> dict:
    return {
        "error": "Request Failed",
        "message": message,
        "statusCode": status_code,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "Validation failed: " + ", ".join(parts)


async def _app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    logger.info("REQUEST_REJECTED %s %s status=%d message=%s",
                request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(error_body(exc.message, exc.status_code), status_code=exc.status_code)


async def _http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(error_body(str(exc.detail), exc.status_code), status_code=exc.status_code)


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = _format_validation_errors(exc)
    logger.info("REQUEST_INVALID %s %s %s", request.method, request.url.path, message)
    return JSONResponse(error_body(message, 400), status_code=400)


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("UNHANDLED %s %s", request.method, request.url.path)
    return JSONResponse(error_body("Internal Server Error", 500), status_code=500)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, _app_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)

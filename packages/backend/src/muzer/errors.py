"""Error taxonomy and the JSON error envelope.

Every API response carries a boolean ``success``. Routes and services
raise MuzerError subclasses; the handlers registered by
register_exception_handlers() turn them (and FastAPI's own
HTTPException / RequestValidationError) into

    {"success": false, "message": "..."}

with the matching status code. No exception crosses the HTTP boundary.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = structlog.get_logger()


class MuzerError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequest(MuzerError):
    status_code = 400
    default_message = "Bad request"


class Unauthorized(MuzerError):
    status_code = 401
    default_message = "Unauthorized"


class Forbidden(MuzerError):
    status_code = 403
    default_message = "Forbidden"


class NotFound(MuzerError):
    status_code = 404
    default_message = "Not found"


class InternalError(MuzerError):
    """Unexpected failure in a dependency. Message must stay generic."""

    status_code = 500


def error_response(status_code: int, message: str, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message},
        headers=headers,
    )


async def _muzer_error_handler(request: Request, exc: MuzerError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return error_response(exc.status_code, exc.message, headers)


async def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return error_response(exc.status_code, message, getattr(exc, "headers", None))


async def _validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Map validation problems to 400 with the first readable message."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
        message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
    else:
        message = "Invalid request"
    return error_response(400, message)


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("request.unhandled_error", path=request.url.path)
    return error_response(500, InternalError.default_message)


def register_exception_handlers(app: FastAPI) -> None:
    """Install the success/message envelope for every error path."""
    app.add_exception_handler(MuzerError, _muzer_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)

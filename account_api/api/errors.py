"""Exception handlers rendering every failure as {"error": message}, and store-error translation."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from account_api.core.config import get_settings
from account_api.core.errors import InternalError, ServiceError, UnauthorizedError

logger = logging.getLogger(__name__)

BEARER_CHALLENGE = {"WWW-Authenticate": "Bearer"}


def error_response(
    status_code: int, message: str, headers: dict[str, str] | None = None, **extra: str
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": message, **extra},
        headers=headers,
    )


@contextmanager
def store_errors(message: str, route: str) -> Iterator[None]:
    """Translate store failures into InternalError(message); the cause is logged server-side only."""
    try:
        yield
    except SQLAlchemyError as e:
        logger.exception("%s failed", route)
        raise InternalError(message) from e


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    field = ".".join(
        part for part in first.get("loc", ()) if isinstance(part, str) and part != "body"
    )
    msg = str(first.get("msg", "Invalid request"))
    return f"{field}: {msg}" if field else msg


async def handle_service_error(request: Request, exc: ServiceError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(
            "Request failed",
            extra={"path": request.url.path, "error_type": type(exc).__name__, "reason": exc.message},
        )
    headers = BEARER_CHALLENGE if isinstance(exc, UnauthorizedError) else None
    return error_response(exc.status_code, exc.message, headers=headers)


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(status.HTTP_400_BAD_REQUEST, _validation_message(exc))


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail), headers=exc.headers)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    settings = request.app.dependency_overrides.get(get_settings, get_settings)()
    if settings.APP_ENV == "dev" and settings.DEBUG:
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error", detail=str(exc)
        )
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def install_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceError, handle_service_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_unexpected_error)

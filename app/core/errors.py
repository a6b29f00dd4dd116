"""Typed API errors and the handlers that render them as {"error": ...}."""
import asyncio
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import DBAPIError, InterfaceError, OperationalError, SQLAlchemyError

logger = logging.getLogger(__name__)

# raised by drivers before SQLAlchemy can wrap them (refused connect, DNS, timeouts)
UNAVAILABLE_ERRORS = (OSError, asyncio.TimeoutError)


class AppError(Exception):
    """Base for errors that map to a JSON error response."""

    status_code = 500
    message = "Error interno"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        self.message = message or self.message


class UserNotFoundError(AppError):
    status_code = 404
    message = "Usuario no encontrado"


class BackendUnavailableError(AppError):
    status_code = 503
    message = "Base de datos no disponible"


class StoreError(AppError):
    status_code = 500
    message = "Error de base de datos"


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _raw_store_message(exc: SQLAlchemyError) -> str:
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        return str(exc.orig)
    return str(exc)


def classify_store_error(exc: SQLAlchemyError, expose: bool = False) -> AppError:
    """Map a driver/ORM failure onto unavailable vs. generic store failure."""
    unavailable = isinstance(exc, (OperationalError, InterfaceError)) or (
        isinstance(exc, DBAPIError) and exc.connection_invalidated
    )
    error_cls = BackendUnavailableError if unavailable else StoreError
    return error_cls(_raw_store_message(exc) if expose else None)


def _format_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Solicitud inválida"
    first = errors[0]
    where = ".".join(str(part) for part in first.get("loc", ()))
    return f"{where}: {first.get('msg', 'invalid')}" if where else str(first.get("msg"))


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return error_response(exc.status_code, exc.message)


async def store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Store failure on %s %s", request.method, request.url.path, exc_info=exc)
    settings = getattr(request.app.state, "settings", None)
    expose = bool(settings and settings.expose_store_errors)
    error = classify_store_error(exc, expose=expose)
    return error_response(error.status_code, error.message)


async def unavailable_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Store unreachable on %s %s", request.method, request.url.path, exc_info=exc)
    error = BackendUnavailableError()
    return error_response(error.status_code, error.message)


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return error_response(StoreError.status_code, StoreError.message)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(422, _format_validation_error(exc))


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(SQLAlchemyError, store_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    for exc_cls in UNAVAILABLE_ERRORS:
        app.add_exception_handler(exc_cls, unavailable_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)

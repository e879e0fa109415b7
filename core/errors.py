# core/errors.py
"""
Application error taxonomy.

Every error carries the HTTP status it maps to; ``register_exception_handlers``
renders them all as ``{"error": message}``.
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import settings

logger = logging.getLogger(__name__)


class AppError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Error interno del servidor"
    headers: dict[str, str] | None = None

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    """Malformed or missing input."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Datos inválidos"


class QuantityReconciliationError(ValidationError):
    """A line item's total does not equal the sum of its condition counts."""

    def __init__(self, subcategory_id: int, total: int, suma: int, subcategory_name: str | None = None):
        self.subcategory_id = subcategory_id
        self.total = total
        self.suma = suma
        label = f"'{subcategory_name}' (id={subcategory_id})" if subcategory_name else f"id={subcategory_id}"
        super().__init__(
            f"La suma de los estados ({suma}) no coincide con el total ({total}) "
            f"en la subcategoría {label}"
        )


class AuthenticationError(AppError):
    """Missing, invalid or expired credentials."""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Token inválido o expirado"
    headers = {"WWW-Authenticate": "Bearer"}


class InvalidCredentials(AuthenticationError):
    default_message = "Credenciales incorrectas"


class AuthorizationError(AppError):
    """Caller is identified but not entitled."""
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Acceso denegado"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Recurso no encontrado"


class ConflictError(AppError):
    """Uniqueness violation (room code, user email)."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "El registro ya existe"


class TransactionError(AppError):
    """A multi-row write failed and was rolled back."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Error guardando los datos"


class InternalError(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def _error_response(status_code: int, message: str, headers: dict | None = None, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message, **extra}, headers=headers)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message, exc_info=exc)
    else:
        logger.warning("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.message)
    return _error_response(exc.status_code, exc.message, exc.headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    message = f"{location}: {first.get('msg')}" if location else str(first.get("msg", "Datos inválidos"))
    logger.warning("%s %s -> 400: %s", request.method, request.url.path, message)
    return _error_response(
        status.HTTP_400_BAD_REQUEST,
        message,
        detalles=[{"loc": list(e.get("loc", ())), "msg": e.get("msg")} for e in errors],
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error_response(exc.status_code, str(exc.detail), getattr(exc, "headers", None))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    message = str(exc) if settings.DEBUG else InternalError.default_message
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, message)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

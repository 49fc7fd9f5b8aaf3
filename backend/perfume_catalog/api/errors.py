# backend/perfume_catalog/api/errors.py
"""
Traducción de errores a respuestas HTTP.

Los servicios devuelven Result; los endpoints convierten un Result fallido
en una excepción ServiceFailure con unwrap() y los manejadores registrados
aquí la renderizan. Todas las respuestas de error comparten el cuerpo
definido por ErrorResponse.
"""

import logging
from datetime import datetime, timezone
from http import HTTPStatus
from typing import Dict, Optional, TypeVar

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from perfume_catalog.schemas.common_schema import ErrorResponse
from perfume_catalog.services.result import ErrorKind, Result, ServiceError

logger = logging.getLogger(__name__)

T = TypeVar("T")

STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.REFERENCE_NOT_FOUND: 404,
    ErrorKind.DUPLICATE_NAME: 409,
    ErrorKind.DUPLICATE_USERNAME: 409,
    ErrorKind.DUPLICATE_EMAIL: 409,
    ErrorKind.HAS_DEPENDENTS: 409,
    ErrorKind.INVALID_CREDENTIALS: 401,
    ErrorKind.ACCOUNT_DISABLED: 401,
    ErrorKind.AUTHENTICATION_REQUIRED: 401,
    ErrorKind.INVALID_TOKEN: 401,
    ErrorKind.ROLE_DENIED: 403,
    ErrorKind.STORAGE: 500,
}


class ServiceFailure(Exception):
    """Un Result fallido que sube hasta la frontera HTTP."""

    def __init__(self, error: ServiceError):
        super().__init__(error.message)
        self.error = error

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.error.kind]


def unwrap(result: Result[T]) -> T:
    if not result.ok:
        raise ServiceFailure(result.error)
    return result.value


def error_response(
    request: Request,
    status_code: int,
    message: str,
    error: Optional[str] = None,
    errors: Optional[Dict[str, str]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    body = ErrorResponse(
        timestamp=datetime.now(timezone.utc),
        status=status_code,
        error=error or HTTPStatus(status_code).phrase,
        message=message,
        path=request.url.path,
        errors=errors,
    )
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(body.model_dump(by_alias=True, exclude_none=True)),
        headers=headers,
    )


# ========================================
# MANEJADORES DE EXCEPCIONES
# ========================================

async def service_failure_handler(request: Request, exc: ServiceFailure) -> JSONResponse:
    status_code = exc.status_code
    headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
    if status_code >= 500:
        logger.error(f"Fallo de almacenamiento en {request.method} {request.url.path}: {exc.error.message}")
    return error_response(request, status_code, exc.error.message, headers=headers)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    field_errors: Dict[str, str] = {}
    for err in exc.errors():
        # La primera parte de loc indica el origen (body, query, path...)
        location = [str(part) for part in err.get("loc", ())[1:]]
        field = ".".join(location) or str(err.get("loc", ("request",))[0])
        field_errors.setdefault(field, err.get("msg", "Invalid value"))

    return error_response(
        request,
        400,
        "Please check the input data",
        error="Validation Failed",
        errors=field_errors,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else HTTPStatus(exc.status_code).phrase
    return error_response(request, exc.status_code, message, headers=getattr(exc, "headers", None))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Error no controlado en {request.method} {request.url.path}")
    return error_response(request, 500, "An unexpected error occurred")


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceFailure, service_failure_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

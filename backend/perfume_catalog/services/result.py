"""
Resultados explícitos de la capa de servicios.

Los servicios no lanzan excepciones para los casos de negocio esperados
(no encontrado, duplicado, dependencias...). Devuelven un Result que
contiene el valor o un ServiceError con su tipo, y es la capa HTTP la
que decide el código de estado.
"""

import enum
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, Optional, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ErrorKind(str, enum.Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    REFERENCE_NOT_FOUND = "reference_not_found"
    DUPLICATE_NAME = "duplicate_name"
    DUPLICATE_USERNAME = "duplicate_username"
    DUPLICATE_EMAIL = "duplicate_email"
    HAS_DEPENDENTS = "has_dependents"
    INVALID_CREDENTIALS = "invalid_credentials"
    ACCOUNT_DISABLED = "account_disabled"
    AUTHENTICATION_REQUIRED = "authentication_required"
    INVALID_TOKEN = "invalid_token"
    ROLE_DENIED = "role_denied"
    STORAGE = "storage"


@dataclass(frozen=True)
class ServiceError:
    kind: ErrorKind
    message: str


@dataclass(frozen=True)
class Result(Generic[T]):
    value: Optional[T] = None
    error: Optional[ServiceError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: Optional[T] = None) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str) -> "Result[T]":
        return cls(error=ServiceError(kind=kind, message=message))


async def guarded_write(
    db: AsyncSession,
    write: Callable[[], Awaitable[T]],
    on_integrity_error: ServiceError,
) -> Result[T]:
    """
    Ejecuta una escritura y traduce los fallos del almacenamiento.

    La violación de una restricción (unicidad o clave foránea) es la última
    barrera ante carreras entre peticiones concurrentes que superaron las
    comprobaciones previas; se traduce al mismo tipo de error que produciría
    la comprobación previa. Cualquier otro error de SQLAlchemy se registra
    y se devuelve como STORAGE.
    """
    try:
        value = await write()
    except IntegrityError as exc:
        await db.rollback()
        logger.warning(f"Violación de restricción traducida a {on_integrity_error.kind.value}: {exc.orig}")
        return Result(error=on_integrity_error)
    except SQLAlchemyError:
        await db.rollback()
        logger.exception("Error inesperado de persistencia")
        return Result.failure(ErrorKind.STORAGE, "Storage operation failed")
    return Result.success(value)

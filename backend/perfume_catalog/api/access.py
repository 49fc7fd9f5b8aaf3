# backend/perfume_catalog/api/access.py
"""
Control de acceso de las peticiones.

Cada ruta declara su regla con una dependencia require(...):
- Public(): no se examina la cabecera Authorization
- RequiresAnyOf(roles): exige un token válido cuyo conjunto de roles
  comparta al menos uno con la regla

La evaluación es una función pura (evaluate_access) que no consulta la
base de datos ni mantiene sesiones: todo lo necesario viaja en el token.
"""

import enum
import logging
from dataclasses import dataclass
from typing import Callable, FrozenSet, Optional, Union

from fastapi import Depends, Request

from perfume_catalog.api.deps import get_container
from perfume_catalog.api.errors import ServiceFailure
from perfume_catalog.core.container import Container
from perfume_catalog.core.security import Role, TokenClaims, TokenService
from perfume_catalog.services.result import ErrorKind, ServiceError

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


@dataclass(frozen=True)
class Public:
    pass


@dataclass(frozen=True)
class RequiresAnyOf:
    roles: FrozenSet[str]


AccessRule = Union[Public, RequiresAnyOf]

# Reglas habituales
PUBLIC = Public()
ADMIN_ONLY = RequiresAnyOf(frozenset({Role.ADMIN.value}))
ANY_USER = RequiresAnyOf(frozenset({Role.ADMIN.value, Role.USER.value}))


class AccessOutcome(str, enum.Enum):
    PUBLIC = "public"
    UNAUTHENTICATED = "unauthenticated"
    INVALID_TOKEN = "invalid_token"
    ROLE_DENIED = "role_denied"
    ROLE_MATCHED = "role_matched"


@dataclass(frozen=True)
class AccessDecision:
    outcome: AccessOutcome
    claims: Optional[TokenClaims] = None

    @property
    def allowed(self) -> bool:
        return self.outcome in (AccessOutcome.PUBLIC, AccessOutcome.ROLE_MATCHED)


def extract_bearer_token(authorization_header: Optional[str]) -> Optional[str]:
    if not authorization_header or not authorization_header.startswith(BEARER_PREFIX):
        return None
    token = authorization_header[len(BEARER_PREFIX):].strip()
    return token or None


def evaluate_access(
    rule: AccessRule, authorization_header: Optional[str], token_service: TokenService
) -> AccessDecision:
    if isinstance(rule, Public):
        return AccessDecision(AccessOutcome.PUBLIC)

    token = extract_bearer_token(authorization_header)
    if token is None:
        return AccessDecision(AccessOutcome.UNAUTHENTICATED)

    claims = token_service.validate_token(token)
    if claims is None:
        return AccessDecision(AccessOutcome.INVALID_TOKEN)

    if not claims.roles & rule.roles:
        return AccessDecision(AccessOutcome.ROLE_DENIED, claims)
    return AccessDecision(AccessOutcome.ROLE_MATCHED, claims)


_FAILURES = {
    AccessOutcome.UNAUTHENTICATED: ServiceError(ErrorKind.AUTHENTICATION_REQUIRED, "Authentication required"),
    AccessOutcome.INVALID_TOKEN: ServiceError(ErrorKind.INVALID_TOKEN, "Invalid or expired token"),
    AccessOutcome.ROLE_DENIED: ServiceError(ErrorKind.ROLE_DENIED, "Access denied"),
}


def require(rule: AccessRule) -> Callable[..., Optional[TokenClaims]]:
    """
    Crea la dependencia de FastAPI que aplica la regla.

    Devuelve los claims del token (None en rutas públicas) para que el
    endpoint pueda saber quién hace la petición.
    """

    def dependency(request: Request, container: Container = Depends(get_container)) -> Optional[TokenClaims]:
        decision = evaluate_access(rule, request.headers.get("Authorization"), container.token_service)
        if not decision.allowed:
            logger.info(f"Acceso denegado a {request.method} {request.url.path}: {decision.outcome.value}")
            raise ServiceFailure(_FAILURES[decision.outcome])
        return decision.claims

    return dependency

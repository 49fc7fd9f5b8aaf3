"""
Primitivas de seguridad: hashing de contraseñas y tokens JWT.

Este módulo no depende de la base de datos ni de FastAPI. Contiene:
- PasswordHasher: hashing con sal de un solo sentido (passlib)
- TokenService: emisión y validación de tokens firmados (PyJWT)
- TokenClaims: el contenido verificado de un token

La hora actual se inyecta como un "clock" para que la caducidad
de los tokens sea determinista en los tests.
"""

import enum
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, FrozenSet, Iterable, Optional

import jwt
from passlib.context import CryptContext

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Role(str, enum.Enum):
    """Grupos de permisos que se asignan a los usuarios y viajan en el token."""
    ADMIN = "ADMIN"
    USER = "USER"


# ========================================
# CONTRASEÑAS
# ========================================

class PasswordHasher:
    """Envoltorio sobre CryptContext de passlib."""

    def __init__(self, schemes: Iterable[str] = ("pbkdf2_sha256",)):
        self._context = CryptContext(schemes=list(schemes), deprecated="auto")

    def hash_password(self, plain_password: str) -> str:
        return self._context.hash(plain_password)

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        try:
            return self._context.verify(plain_password, hashed_password)
        except (ValueError, TypeError):
            # Hash almacenado con formato desconocido
            logger.warning("Hash de contraseña con formato no reconocido")
            return False

    def dummy_verify(self) -> None:
        """Consume el mismo tiempo que una verificación real."""
        self._context.dummy_verify()


# ========================================
# TOKENS
# ========================================

@dataclass(frozen=True)
class TokenClaims:
    """Payload decodificado y verificado de un token."""
    username: str
    roles: FrozenSet[str]
    issued_at: datetime
    expires_at: datetime


class TokenService:
    """
    Emite y valida tokens JWT firmados con un secreto de proceso.

    La caducidad es fija desde la emisión (no deslizante). La validación
    nunca lanza excepciones: cualquier fallo (formato, firma o caducidad)
    devuelve None, para no revelar qué comprobación falló.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expires_in: timedelta = timedelta(hours=24),
        clock: Clock = utc_now,
    ):
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expires_in = expires_in
        self._clock = clock

    def issue_token(self, username: str, roles: Iterable[str]) -> str:
        issued_at = self._clock()
        payload = {
            "sub": username,
            "roles": sorted(set(roles)),
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self._expires_in).timestamp()),
        }
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def validate_token(self, token: Optional[str]) -> Optional[TokenClaims]:
        if not token:
            return None
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                # La caducidad se comprueba contra el reloj inyectado
                options={"verify_exp": False, "verify_iat": False, "require": ["sub", "iat", "exp"]},
            )
        except jwt.InvalidTokenError as exc:
            logger.debug(f"Token rechazado: {exc.__class__.__name__}")
            return None

        username = payload.get("sub")
        roles = payload.get("roles") or []
        if not isinstance(username, str) or not username or not isinstance(roles, list):
            return None

        try:
            issued_at = datetime.fromtimestamp(int(payload["iat"]), tz=timezone.utc)
            expires_at = datetime.fromtimestamp(int(payload["exp"]), tz=timezone.utc)
        except (TypeError, ValueError, OverflowError):
            return None

        if expires_at <= self._clock():
            logger.debug(f"Token caducado para '{username}'")
            return None

        return TokenClaims(
            username=username,
            roles=frozenset(str(role) for role in roles),
            issued_at=issued_at,
            expires_at=expires_at,
        )

"""
Servicio de autenticación.

Verifica credenciales contra los usuarios almacenados y emite tokens
para las sesiones autenticadas. Los mensajes de error no distinguen
entre usuario inexistente y contraseña incorrecta.
"""

import logging
from dataclasses import dataclass
from typing import FrozenSet, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from perfume_catalog.core.security import PasswordHasher, TokenClaims, TokenService
from perfume_catalog.crud import user_crud
from perfume_catalog.db.models.user_model import User
from perfume_catalog.services.result import ErrorKind, Result

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthSession:
    """Usuario autenticado, independiente de la sesión de base de datos."""
    user_id: int
    username: str
    email: str
    roles: FrozenSet[str]

    @classmethod
    def from_user(cls, user: User) -> "AuthSession":
        return cls(user_id=user.id, username=user.username, email=user.email, roles=frozenset(user.roles))


class AuthService:

    def __init__(self, password_hasher: PasswordHasher, token_service: TokenService):
        self.password_hasher = password_hasher
        self.token_service = token_service

    async def authenticate(self, db: AsyncSession, username: str, password: str) -> Result[AuthSession]:
        """
        Comprueba usuario y contraseña.

        La cuenta desactivada solo se comunica cuando la contraseña es correcta,
        de modo que ese estado no se puede sondear sin conocer la credencial.
        """
        user = await user_crud.get_user_by_username(db, username=username)
        if not user:
            # Mismo coste que una verificación real
            await run_in_threadpool(self.password_hasher.dummy_verify)
            logger.info(f"Login fallido: usuario '{username}' inexistente")
            return Result.failure(ErrorKind.INVALID_CREDENTIALS, "Invalid username or password")

        if not await run_in_threadpool(self.password_hasher.verify_password, password, user.hashed_password):
            logger.info(f"Login fallido: contraseña incorrecta para '{username}'")
            return Result.failure(ErrorKind.INVALID_CREDENTIALS, "Invalid username or password")

        if not user.enabled:
            logger.info(f"Login rechazado: la cuenta '{username}' está desactivada")
            return Result.failure(ErrorKind.ACCOUNT_DISABLED, "Account is disabled")

        return Result.success(AuthSession.from_user(user))

    def issue_token(self, session: AuthSession) -> str:
        return self.token_service.issue_token(session.username, session.roles)

    def validate_token(self, token: Optional[str]) -> Optional[TokenClaims]:
        return self.token_service.validate_token(token)

# backend/perfume_catalog/services/user_service.py

"""
Servicio de gestión de usuarios y cuentas.

Responsabilidades principales:
- Unicidad global de username y email (excluyendo al propio usuario al actualizar)
- Hashing de contraseñas antes de llegar a la base de datos
- Alta, edición completa, activación/desactivación y borrado de usuarios
- Operaciones de autoservicio: perfil y cambio de contraseña
- Creación del administrador inicial al arrancar
"""

import logging
from typing import Awaitable, Callable, Iterable, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from perfume_catalog.core.security import PasswordHasher, Role
from perfume_catalog.crud import user_crud
from perfume_catalog.db.models.user_model import User
from perfume_catalog.schemas import user_schema
from perfume_catalog.services.result import ErrorKind, Result, ServiceError, guarded_write

logger = logging.getLogger(__name__)

DEFAULT_EMAIL_DOMAIN = "example.com"


class UserService:
    """
    Servicio para operaciones de negocio relacionadas con usuarios.

    Recibe el PasswordHasher en el constructor; nunca almacena ni devuelve
    contraseñas en claro.
    """

    def __init__(self, password_hasher: PasswordHasher):
        self.password_hasher = password_hasher

    # ========================================
    # OPERACIONES DE CONSULTA
    # ========================================

    async def get_user_by_id(self, db: AsyncSession, user_id: int) -> Result[User]:
        user = await user_crud.get_user(db, user_id=user_id)
        if not user:
            return Result.failure(ErrorKind.NOT_FOUND, f"User not found with ID: {user_id}")
        return Result.success(user)

    async def get_user_by_username(self, db: AsyncSession, username: str) -> Result[User]:
        user = await user_crud.get_user_by_username(db, username=username)
        if not user:
            return Result.failure(ErrorKind.NOT_FOUND, f"User not found with username: {username}")
        return Result.success(user)

    async def get_all_users(self, db: AsyncSession) -> List[User]:
        return await user_crud.get_users(db, limit=1000)

    # ========================================
    # ALTAS
    # ========================================

    async def create_user(self, db: AsyncSession, user_in: user_schema.UserCreate) -> Result[User]:
        return await self._create(
            db,
            username=user_in.username,
            email=user_in.email,
            password=user_in.password,
            roles=[role.value for role in user_in.roles],
            enabled=user_in.enabled,
        )

    async def create_admin_user(self, db: AsyncSession, admin_in: user_schema.AdminCreateRequest) -> Result[User]:
        return await self._create(
            db,
            username=admin_in.username,
            email=admin_in.email,
            password=admin_in.password,
            roles=[Role.ADMIN.value, Role.USER.value],
        )

    async def register_user(self, db: AsyncSession, username: str, password: str) -> Result[User]:
        """Registro público: rol USER y email por defecto derivado del username."""
        return await self._create(
            db,
            username=username,
            email=f"{username}@{DEFAULT_EMAIL_DOMAIN}",
            password=password,
            roles=[Role.USER.value],
        )

    async def ensure_admin(self, db: AsyncSession, username: str, password: str, email: Optional[str] = None) -> None:
        """Crea el administrador inicial si todavía no existe."""
        if await user_crud.get_user_by_username(db, username=username):
            return
        result = await self._create(
            db,
            username=username,
            email=email or f"{username}@{DEFAULT_EMAIL_DOMAIN}",
            password=password,
            roles=[Role.ADMIN.value, Role.USER.value],
        )
        if result.ok:
            logger.info(f"Administrador inicial '{username}' creado")
        else:
            logger.error(f"No se pudo crear el administrador inicial '{username}': {result.error.message}")

    # ========================================
    # MODIFICACIONES
    # ========================================

    async def update_user(self, db: AsyncSession, user_id: int, user_in: user_schema.UserUpdate) -> Result[User]:
        """
        Reemplazo completo de un usuario por un administrador.

        Solo si la contraseña llega con contenido se genera un nuevo hash;
        vacía o ausente, se conserva la almacenada.
        """
        user = await user_crud.get_user(db, user_id=user_id)
        if not user:
            return Result.failure(ErrorKind.NOT_FOUND, f"User not found with ID: {user_id}")

        conflict = await self._check_unique(db, user_in.username, user_in.email, exclude_id=user_id)
        if conflict:
            return Result(error=conflict)

        user.username = user_in.username
        user.email = user_in.email
        user.enabled = user_in.enabled
        user.set_roles(role.value for role in user_in.roles)
        if user_in.password and user_in.password.strip():
            user.hashed_password = await run_in_threadpool(self.password_hasher.hash_password, user_in.password)

        return await self._write(
            db, lambda: user_crud.save_user(db, user), user_in.username, user_in.email, exclude_id=user_id
        )

    async def update_profile(
        self, db: AsyncSession, current_username: str, profile_in: user_schema.ProfileUpdate
    ) -> Result[User]:
        user = await user_crud.get_user_by_username(db, username=current_username)
        if not user:
            return Result.failure(ErrorKind.NOT_FOUND, f"User not found with username: {current_username}")

        conflict = await self._check_unique(db, profile_in.username, profile_in.email, exclude_id=user.id)
        if conflict:
            return Result(error=conflict)

        user.username = profile_in.username
        user.email = profile_in.email
        return await self._write(
            db, lambda: user_crud.save_user(db, user), profile_in.username, profile_in.email, exclude_id=user.id
        )

    async def change_password(
        self, db: AsyncSession, username: str, password_in: user_schema.ChangePasswordRequest
    ) -> Result[User]:
        """Cambio de contraseña por el propio usuario: exige la contraseña actual."""
        user = await user_crud.get_user_by_username(db, username=username)
        if not user:
            return Result.failure(ErrorKind.NOT_FOUND, f"User not found with username: {username}")

        password_ok = await run_in_threadpool(
            self.password_hasher.verify_password, password_in.current_password, user.hashed_password
        )
        if not password_ok:
            return Result.failure(ErrorKind.VALIDATION, "Current password is incorrect")

        user.hashed_password = await run_in_threadpool(self.password_hasher.hash_password, password_in.new_password)
        return await self._write(db, lambda: user_crud.save_user(db, user), user.username, user.email, exclude_id=user.id)

    async def reset_password(self, db: AsyncSession, user_id: int, new_password: str) -> Result[User]:
        user = await user_crud.get_user(db, user_id=user_id)
        if not user:
            return Result.failure(ErrorKind.NOT_FOUND, f"User not found with ID: {user_id}")
        if not new_password or not new_password.strip():
            return Result.failure(ErrorKind.VALIDATION, "New password is required")

        user.hashed_password = await run_in_threadpool(self.password_hasher.hash_password, new_password)
        return await self._write(db, lambda: user_crud.save_user(db, user), user.username, user.email, exclude_id=user.id)

    async def set_enabled(self, db: AsyncSession, user_id: int, enabled: bool) -> Result[User]:
        user = await user_crud.get_user(db, user_id=user_id)
        if not user:
            return Result.failure(ErrorKind.NOT_FOUND, f"User not found with ID: {user_id}")

        user.enabled = enabled
        result = await self._write(db, lambda: user_crud.save_user(db, user), user.username, user.email, exclude_id=user.id)
        if result.ok:
            logger.info(f"Usuario {user_id} {'activado' if enabled else 'desactivado'}")
        return result

    async def delete_user(self, db: AsyncSession, user_id: int) -> Result[None]:
        user = await user_crud.get_user(db, user_id=user_id)
        if not user:
            return Result.failure(ErrorKind.NOT_FOUND, f"User not found with ID: {user_id}")

        result = await guarded_write(
            db,
            lambda: user_crud.delete_user(db, user),
            ServiceError(ErrorKind.STORAGE, "Storage operation failed"),
        )
        if result.ok:
            logger.info(f"Usuario eliminado: id={user_id}")
        return result

    # ========================================
    # AUXILIARES
    # ========================================

    async def _create(
        self,
        db: AsyncSession,
        username: str,
        email: str,
        password: str,
        roles: Iterable[str],
        enabled: bool = True,
    ) -> Result[User]:
        conflict = await self._check_unique(db, username, email, exclude_id=None)
        if conflict:
            return Result(error=conflict)

        hashed_password = await run_in_threadpool(self.password_hasher.hash_password, password)
        result = await self._write(
            db,
            lambda: user_crud.create_user(
                db,
                username=username,
                email=email,
                hashed_password=hashed_password,
                roles=roles,
                enabled=enabled,
            ),
            username,
            email,
            exclude_id=None,
        )
        if result.ok:
            logger.info(f"Usuario creado: '{username}' con roles {sorted(set(roles))}")
        return result

    async def _check_unique(
        self, db: AsyncSession, username: str, email: str, exclude_id: Optional[int]
    ) -> Optional[ServiceError]:
        by_username = await user_crud.get_user_by_username(db, username=username)
        if by_username and by_username.id != exclude_id:
            return ServiceError(ErrorKind.DUPLICATE_USERNAME, f"Username already exists: {username}")

        by_email = await user_crud.get_user_by_email(db, email=email)
        if by_email and by_email.id != exclude_id:
            return ServiceError(ErrorKind.DUPLICATE_EMAIL, f"Email already exists: {email}")
        return None

    async def _write(
        self,
        db: AsyncSession,
        write: Callable[[], Awaitable[User]],
        username: str,
        email: str,
        exclude_id: Optional[int],
    ) -> Result[User]:
        """
        Escritura protegida. Si la base de datos rechaza un duplicado, se repite
        la comprobación tras el rollback para saber si el conflicto fue
        el username o el email.
        """
        result = await guarded_write(
            db, write, ServiceError(ErrorKind.DUPLICATE_USERNAME, f"Username already exists: {username}")
        )
        if result.error and result.error.kind is ErrorKind.DUPLICATE_USERNAME:
            conflict = await self._check_unique(db, username, email, exclude_id=exclude_id)
            if conflict:
                return Result(error=conflict)
        return result

# backend/perfume_catalog/core/container.py
"""
Raíz de composición de la aplicación.

Construye una sola vez, al arrancar, todos los objetos con estado o
configuración: motor y sesiones de base de datos, hashing de contraseñas,
servicio de tokens, almacenamiento de archivos y servicios de negocio.
create_app guarda el contenedor en app.state y las dependencias de
FastAPI lo leen desde ahí.
"""

from dataclasses import dataclass
from datetime import timedelta

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker

from perfume_catalog.core.config import Settings
from perfume_catalog.core.security import Clock, PasswordHasher, TokenService, utc_now
from perfume_catalog.db.database import create_session_factory
from perfume_catalog.services.auth_service import AuthService
from perfume_catalog.services.brand_service import BrandService
from perfume_catalog.services.category_service import CategoryService
from perfume_catalog.services.file_storage_service import FileStorageService
from perfume_catalog.services.perfume_service import PerfumeService
from perfume_catalog.services.user_service import UserService


@dataclass
class Container:
    settings: Settings
    engine: AsyncEngine
    session_factory: async_sessionmaker
    clock: Clock
    password_hasher: PasswordHasher
    token_service: TokenService
    storage: FileStorageService
    category_service: CategoryService
    brand_service: BrandService
    perfume_service: PerfumeService
    user_service: UserService
    auth_service: AuthService


def build_container(settings: Settings, clock: Clock = utc_now) -> Container:
    engine, session_factory = create_session_factory(settings.DATABASE_URL)
    password_hasher = PasswordHasher(settings.PASSWORD_HASH_SCHEMES)
    token_service = TokenService(
        secret_key=settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
        expires_in=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
        clock=clock,
    )

    return Container(
        settings=settings,
        engine=engine,
        session_factory=session_factory,
        clock=clock,
        password_hasher=password_hasher,
        token_service=token_service,
        storage=FileStorageService(settings.UPLOAD_DIR),
        category_service=CategoryService(),
        brand_service=BrandService(),
        perfume_service=PerfumeService(),
        user_service=UserService(password_hasher),
        auth_service=AuthService(password_hasher, token_service),
    )

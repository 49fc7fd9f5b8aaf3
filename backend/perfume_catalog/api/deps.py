# backend/perfume_catalog/api/deps.py
"""
Módulo de dependencias para FastAPI.

Este archivo centraliza las dependencias que se inyectan en los endpoints.
Todas leen el contenedor que create_app guarda en app.state, de modo que
no existen instancias globales y los tests pueden construir su propia
aplicación con otra configuración.
"""

from typing import AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from perfume_catalog.core.config import Settings
from perfume_catalog.core.container import Container
from perfume_catalog.services.auth_service import AuthService
from perfume_catalog.services.brand_service import BrandService
from perfume_catalog.services.category_service import CategoryService
from perfume_catalog.services.file_storage_service import FileStorageService
from perfume_catalog.services.perfume_service import PerfumeService
from perfume_catalog.services.user_service import UserService


def get_container(request: Request) -> Container:
    return request.app.state.container


async def get_db(container: Container = Depends(get_container)) -> AsyncGenerator[AsyncSession, None]:
    """
    Dependencia de FastAPI para obtener una sesión de base de datos asíncrona.
    Se asegura de que la sesión se cierre siempre después de la petición.
    """
    async with container.session_factory() as session:
        yield session


def get_settings(container: Container = Depends(get_container)) -> Settings:
    return container.settings


def get_category_service(container: Container = Depends(get_container)) -> CategoryService:
    return container.category_service


def get_brand_service(container: Container = Depends(get_container)) -> BrandService:
    return container.brand_service


def get_perfume_service(container: Container = Depends(get_container)) -> PerfumeService:
    return container.perfume_service


def get_user_service(container: Container = Depends(get_container)) -> UserService:
    return container.user_service


def get_auth_service(container: Container = Depends(get_container)) -> AuthService:
    return container.auth_service


def get_storage(container: Container = Depends(get_container)) -> FileStorageService:
    return container.storage

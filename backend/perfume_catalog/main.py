# backend/perfume_catalog/main.py
"""
Punto de entrada principal de la aplicación FastAPI.

create_app construye la aplicación completa a partir de una configuración:
contenedor de dependencias, middleware, manejadores de errores y routers.
No hay instancias globales, por lo que cada test puede crear su propia
aplicación con otra base de datos.

Ejecución:
    uvicorn perfume_catalog.main:create_app --factory
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from perfume_catalog.api.errors import register_error_handlers
from perfume_catalog.api.v1.api_router import api_router_v1
from perfume_catalog.core.config import Settings
from perfume_catalog.core.container import Container, build_container
from perfume_catalog.core.logging_config import setup_logging
from perfume_catalog.core.security import Clock, utc_now
from perfume_catalog.db.database import create_tables
from perfume_catalog.schemas.common_schema import HealthResponse

logger = logging.getLogger(__name__)


async def _bootstrap_admin(container: Container) -> None:
    settings = container.settings
    if not (settings.ADMIN_USERNAME and settings.ADMIN_PASSWORD):
        return
    async with container.session_factory() as db:
        await container.user_service.ensure_admin(
            db, settings.ADMIN_USERNAME, settings.ADMIN_PASSWORD, settings.ADMIN_EMAIL
        )


# ========================================
# CICLO DE VIDA DE LA APLICACIÓN
# ========================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Arranque: logging, esquema de base de datos y administrador inicial.
    Cierre: libera las conexiones del motor.
    """
    container: Container = app.state.container
    setup_logging(container.settings)
    logger.info(f"Iniciando {container.settings.PROJECT_NAME} v{container.settings.PROJECT_VERSION}")

    if container.settings.CREATE_TABLES_ON_STARTUP:
        await create_tables(container.engine)
    await _bootstrap_admin(container)

    yield

    await container.engine.dispose()
    logger.info("Aplicación detenida")


# ========================================
# CONFIGURACIÓN DE LA APLICACIÓN FASTAPI
# ========================================

def create_app(settings: Optional[Settings] = None, clock: Clock = utc_now) -> FastAPI:
    settings = settings or Settings()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        openapi_url=f"{settings.API_V1_STR}/openapi.json",
        version=settings.PROJECT_VERSION,
        description="API para la gestión del catálogo de perfumes",
        lifespan=lifespan,
    )
    app.state.container = build_container(settings, clock=clock)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    # Rutas de la API con prefijo configurable (típicamente "/api/v1")
    app.include_router(api_router_v1, prefix=settings.API_V1_STR)

    @app.get("/health", response_model=HealthResponse, tags=["Root"])
    async def health(request: Request):
        """Health check básico para monitoreo; no requiere autenticación."""
        container = request.app.state.container
        return HealthResponse(service=container.settings.PROJECT_NAME, timestamp=container.clock())

    return app

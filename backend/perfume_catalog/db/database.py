# backend/perfume_catalog/db/database.py

"""
Configuración principal de la base de datos para la aplicación.

Este módulo define los componentes básicos de persistencia:
- Clase base para modelos (Base)
- Fábrica del motor asíncrono y de sesiones (create_session_factory)
- Creación del esquema (create_tables)

El motor ya no se crea al importar el módulo: lo construye el contenedor
de dependencias al arrancar la aplicación a partir de la configuración.
"""

from typing import Tuple

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

# Clase base declarativa para todos los modelos ORM
Base = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite no aplica las claves foráneas salvo que se active por conexión
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_session_factory(database_url: str) -> Tuple[AsyncEngine, async_sessionmaker]:
    """
    Crea el motor asíncrono y su sessionmaker.

    expire_on_commit=False es importante para que los objetos sigan siendo
    utilizables después de que la transacción se haya confirmado.
    """
    if database_url.startswith("sqlite"):
        engine = create_async_engine(database_url)
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    else:
        engine = create_async_engine(database_url, pool_pre_ping=True)

    session_factory = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
    return engine, session_factory


async def create_tables(engine: AsyncEngine) -> None:
    """Crea las tablas que no existan todavía."""
    # Registra todos los modelos en Base.metadata
    from perfume_catalog.db import all_models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

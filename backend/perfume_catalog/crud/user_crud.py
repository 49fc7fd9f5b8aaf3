# backend/perfume_catalog/crud/user_crud.py

"""
Operaciones CRUD para usuarios.

Esta capa recibe siempre la contraseña ya convertida en hash: nunca
maneja contraseñas en claro. Los roles se cargan junto al usuario
(relación selectin), por lo que User.roles está disponible tras cualquier lectura.
"""

from typing import Iterable, List, Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from perfume_catalog.db.models.user_model import User

# ========================================
# OPERACIONES DE LECTURA (READ)
# ========================================

async def get_user(db: AsyncSession, user_id: int) -> Optional[User]:
    result = await db.execute(select(User).filter(User.id == user_id))
    return result.scalars().first()


async def get_user_by_username(db: AsyncSession, username: str) -> Optional[User]:
    result = await db.execute(select(User).filter(User.username == username))
    return result.scalars().first()


async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    result = await db.execute(select(User).filter(User.email == email))
    return result.scalars().first()


async def get_users(db: AsyncSession, skip: int = 0, limit: int = 100) -> List[User]:
    result = await db.execute(select(User).order_by(User.id).offset(skip).limit(limit))
    return result.scalars().all()


# ========================================
# OPERACIONES DE ESCRITURA (CREATE, UPDATE, DELETE)
# ========================================

async def create_user(
    db: AsyncSession,
    username: str,
    email: str,
    hashed_password: str,
    roles: Iterable[str],
    enabled: bool = True,
) -> User:
    """Crea un usuario con sus roles en una sola transacción."""
    db_user = User(
        username=username,
        email=email,
        hashed_password=hashed_password,
        enabled=enabled,
    )
    db_user.set_roles(roles)
    db.add(db_user)
    await db.commit()
    return await get_user(db, db_user.id)


async def save_user(db: AsyncSession, db_user: User) -> User:
    """Persiste los cambios hechos sobre un usuario ya cargado."""
    db.add(db_user)
    await db.commit()
    return await get_user(db, db_user.id)


async def delete_user(db: AsyncSession, db_user: User) -> None:
    # Borrado ORM para que la cascada elimine también sus roles
    await db.delete(db_user)
    await db.commit()

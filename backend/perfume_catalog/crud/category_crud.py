# backend/perfume_catalog/crud/category_crud.py

"""
Operaciones CRUD para el modelo Category.

Este módulo implementa las operaciones de Create, Read, Update, Delete para categorías,
proporcionando una capa de abstracción entre los servicios y la base de datos.

Funcionalidades principales:
- Consultas básicas por ID y nombre
- Consulta explícita de una categoría junto con sus marcas
- Operaciones de paginación y conteo

Las relaciones del modelo están declaradas con lazy="raise": cualquier
relación que se necesite debe pedirse en la consulta (selectinload).
"""

from typing import List, Optional
from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from perfume_catalog.db.models.category_model import Category
from perfume_catalog.schemas import category_schema

# ========================================
# OPERACIONES DE LECTURA (READ)
# ========================================

async def get_category(db: AsyncSession, category_id: int) -> Optional[Category]:
    """
    Obtiene una categoría por su ID.

    Args:
        db: Sesión de SQLAlchemy
        category_id: ID único de la categoría

    Returns:
        Objeto Category si existe, None si no se encuentra
    """
    result = await db.execute(select(Category).filter(Category.id == category_id))
    return result.scalars().first()


async def get_category_by_name(db: AsyncSession, name: str) -> Optional[Category]:
    """
    Obtiene una categoría por su nombre.

    Es la consulta que usa el servicio para validar duplicados antes de
    crear o renombrar una categoría (el nombre es único en todo el catálogo).
    """
    result = await db.execute(select(Category).filter(Category.name == name))
    return result.scalars().first()


async def get_category_with_brands(db: AsyncSession, category_id: int) -> Optional[Category]:
    """
    Obtiene una categoría con sus marcas directas precargadas.

    Se usa antes de borrar: una categoría con marcas no puede eliminarse.
    populate_existing asegura que la lista de marcas refleja la base de datos
    aunque el objeto ya estuviera en la sesión.
    """
    result = await db.execute(
        select(Category)
        .options(selectinload(Category.brands))
        .filter(Category.id == category_id)
        .execution_options(populate_existing=True)
    )
    return result.scalars().first()


async def get_categories(db: AsyncSession, skip: int = 0, limit: int = 100) -> List[Category]:
    """Obtiene una lista paginada de todas las categorías, ordenada por ID."""
    result = await db.execute(select(Category).order_by(Category.id).offset(skip).limit(limit))
    return result.scalars().all()


async def get_total_categories(db: AsyncSession) -> int:
    """Obtiene el número total de categorías en la base de datos."""
    result = await db.execute(select(func.count(Category.id)))
    return result.scalar_one()


# ========================================
# OPERACIONES DE ESCRITURA (CREATE, UPDATE, DELETE)
# ========================================

async def create_category(db: AsyncSession, category: category_schema.CategoryCreate) -> Category:
    """
    Crea una nueva categoría en la base de datos.

    Es importante validar duplicados antes de llamar esta función; si aun así
    se produce un duplicado (carrera entre peticiones), el commit lanza
    IntegrityError y es el servicio quien lo traduce.
    """
    db_category = Category(
        name=category.name,
        description=category.description,
        color=category.color,
    )
    db.add(db_category)
    await db.commit()  # Persiste en la base de datos
    await db.refresh(db_category)  # Recarga el objeto con datos actualizados de la BD
    return db_category


async def update_category(db: AsyncSession, db_category: Category, category_update: category_schema.CategoryUpdate) -> Category:
    """
    Reemplaza los datos de una categoría existente.

    No hay actualización parcial: todos los campos del esquema se escriben.
    """
    for key, value in category_update.model_dump().items():
        setattr(db_category, key, value)

    db.add(db_category)
    await db.commit()
    await db.refresh(db_category)
    return db_category


async def delete_category(db: AsyncSession, category_id: int) -> None:
    """
    Elimina una categoría con una sentencia DELETE explícita.

    No hay cascada hacia las marcas: la clave foránea es RESTRICT y el
    servicio comprueba antes que la categoría esté vacía.
    """
    await db.execute(delete(Category).where(Category.id == category_id))
    await db.commit()

# backend/perfume_catalog/crud/brand_crud.py

"""
Operaciones CRUD para el modelo Brand.

Cada marca pertenece a una categoría y agrupa perfumes. Las respuestas de la
API incluyen el nombre de la categoría, así que las lecturas "para respuesta"
precargan siempre Brand.category.
"""

from typing import List, Optional
from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from perfume_catalog.db.models.brand_model import Brand
from perfume_catalog.schemas import brand_schema

# ========================================
# OPERACIONES DE LECTURA (READ)
# ========================================

async def get_brand(db: AsyncSession, brand_id: int) -> Optional[Brand]:
    """Obtiene una marca por su ID, sin relaciones."""
    result = await db.execute(select(Brand).filter(Brand.id == brand_id))
    return result.scalars().first()


async def get_brand_with_category(db: AsyncSession, brand_id: int) -> Optional[Brand]:
    """Obtiene una marca con su categoría precargada."""
    result = await db.execute(
        select(Brand)
        .options(selectinload(Brand.category))
        .filter(Brand.id == brand_id)
        .execution_options(populate_existing=True)
    )
    return result.scalars().first()


async def get_brand_with_perfumes(db: AsyncSession, brand_id: int) -> Optional[Brand]:
    """
    Obtiene una marca con sus perfumes directos precargados.
    Es la consulta previa al borrado de una marca.
    """
    result = await db.execute(
        select(Brand)
        .options(selectinload(Brand.perfumes))
        .filter(Brand.id == brand_id)
        .execution_options(populate_existing=True)
    )
    return result.scalars().first()


async def get_brand_by_name_and_category(db: AsyncSession, name: str, category_id: int) -> Optional[Brand]:
    """
    Obtiene una marca por nombre dentro de una categoría.

    Implementa la regla de negocio que permite el mismo nombre de marca
    en categorías distintas, pero no dentro de la misma.
    """
    result = await db.execute(
        select(Brand).filter(Brand.name == name, Brand.category_id == category_id)
    )
    return result.scalars().first()


async def get_brands(db: AsyncSession, skip: int = 0, limit: int = 100) -> List[Brand]:
    result = await db.execute(
        select(Brand).options(selectinload(Brand.category)).order_by(Brand.id).offset(skip).limit(limit)
    )
    return result.scalars().all()


async def get_brands_by_category(db: AsyncSession, category_id: int) -> List[Brand]:
    result = await db.execute(
        select(Brand)
        .options(selectinload(Brand.category))
        .filter(Brand.category_id == category_id)
        .order_by(Brand.id)
    )
    return result.scalars().all()


async def get_total_brands(db: AsyncSession) -> int:
    result = await db.execute(select(func.count(Brand.id)))
    return result.scalar_one()


# ========================================
# OPERACIONES DE ESCRITURA (CREATE, UPDATE, DELETE)
# ========================================

async def create_brand(db: AsyncSession, brand: brand_schema.BrandCreate) -> Brand:
    """Crea una nueva marca. La categoría debe haberse validado antes."""
    db_brand = Brand(
        name=brand.name,
        description=brand.description,
        image_url=brand.image_url,
        category_id=brand.category_id,
    )
    db.add(db_brand)
    await db.commit()
    await db.refresh(db_brand)
    return db_brand


async def update_brand(db: AsyncSession, db_brand: Brand, brand_update: brand_schema.BrandUpdate) -> Brand:
    """Reemplaza los datos de una marca, incluida su categoría."""
    for key, value in brand_update.model_dump().items():
        setattr(db_brand, key, value)

    db.add(db_brand)
    await db.commit()
    await db.refresh(db_brand)
    return db_brand


async def delete_brand(db: AsyncSession, brand_id: int) -> None:
    """Elimina una marca. Sus perfumes la protegen mediante FK RESTRICT."""
    await db.execute(delete(Brand).where(Brand.id == brand_id))
    await db.commit()

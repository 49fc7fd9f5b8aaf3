# backend/perfume_catalog/crud/perfume_crud.py

"""
Operaciones CRUD para el modelo Perfume.

Este módulo implementa las operaciones de Create, Read, Update, Delete para perfumes,
siendo la hoja de la jerarquía categoría → marca → perfume.

Funcionalidades principales:
- Consultas con eager loading de marca y categoría (las respuestas incluyen sus nombres)
- Filtrado combinable por texto, nombre de marca y rango de número
- Listados por marca y por categoría
"""

import logging
from typing import List, Optional

from sqlalchemy import delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from perfume_catalog.db.models.brand_model import Brand
from perfume_catalog.db.models.perfume_model import Perfume
from perfume_catalog.schemas import perfume_schema

logger = logging.getLogger(__name__)


def _with_brand_and_category():
    return selectinload(Perfume.brand).selectinload(Brand.category)

# ========================================
# OPERACIONES DE LECTURA (READ)
# ========================================

async def get_perfume(db: AsyncSession, perfume_id: int) -> Optional[Perfume]:
    """Obtiene un perfume por su ID con marca y categoría precargadas."""
    result = await db.execute(
        select(Perfume)
        .options(_with_brand_and_category())
        .filter(Perfume.id == perfume_id)
        .execution_options(populate_existing=True)
    )
    return result.scalars().first()


async def get_perfumes(db: AsyncSession, skip: int = 0, limit: int = 100) -> List[Perfume]:
    result = await db.execute(
        select(Perfume).options(_with_brand_and_category()).order_by(Perfume.id).offset(skip).limit(limit)
    )
    return result.scalars().all()


async def get_perfumes_by_brand(db: AsyncSession, brand_id: int) -> List[Perfume]:
    result = await db.execute(
        select(Perfume)
        .options(_with_brand_and_category())
        .filter(Perfume.brand_id == brand_id)
        .order_by(Perfume.id)
    )
    return result.scalars().all()


async def get_perfumes_by_category(db: AsyncSession, category_id: int) -> List[Perfume]:
    """Obtiene los perfumes de todas las marcas de una categoría."""
    result = await db.execute(
        select(Perfume)
        .join(Brand, Perfume.brand_id == Brand.id)
        .options(_with_brand_and_category())
        .filter(Brand.category_id == category_id)
        .order_by(Perfume.id)
    )
    return result.scalars().all()


async def get_perfumes_by_brand_name(db: AsyncSession, brand_name: str) -> List[Perfume]:
    """Perfumes cuya marca se llama exactamente brand_name (distingue mayúsculas)."""
    result = await db.execute(
        select(Perfume)
        .join(Brand, Perfume.brand_id == Brand.id)
        .options(_with_brand_and_category())
        .filter(Brand.name == brand_name)
        .order_by(Perfume.id)
    )
    return result.scalars().all()


async def search_and_filter(
    db: AsyncSession,
    search_term: Optional[str] = None,
    brand_name: Optional[str] = None,
    min_number: Optional[int] = None,
    max_number: Optional[int] = None,
) -> List[Perfume]:
    """
    Búsqueda combinada de perfumes.

    Cada filtro ausente (None) no restringe la consulta:
    - search_term: subcadena, sin distinguir mayúsculas, del nombre del perfume o de la marca
    - brand_name: subcadena, sin distinguir mayúsculas, del nombre de la marca
    - min_number / max_number: rango inclusivo sobre Perfume.number
    """
    query = (
        select(Perfume)
        .join(Brand, Perfume.brand_id == Brand.id)
        .options(_with_brand_and_category())
    )

    if search_term:
        query = query.filter(
            or_(
                Perfume.name.ilike(f"%{search_term}%"),
                Brand.name.ilike(f"%{search_term}%"),
            )
        )
    if brand_name:
        query = query.filter(Brand.name.ilike(f"%{brand_name}%"))
    if min_number is not None:
        query = query.filter(Perfume.number >= min_number)
    if max_number is not None:
        query = query.filter(Perfume.number <= max_number)

    result = await db.execute(query.order_by(Perfume.id))
    perfumes = result.scalars().all()
    logger.info(f"Búsqueda term='{search_term}' brand='{brand_name}' rango=[{min_number}, {max_number}] encontró {len(perfumes)} perfumes.")
    return perfumes


async def get_total_perfumes(db: AsyncSession) -> int:
    result = await db.execute(select(func.count(Perfume.id)))
    return result.scalar_one()


# ========================================
# OPERACIONES DE ESCRITURA (CREATE, UPDATE, DELETE)
# ========================================

async def create_perfume(db: AsyncSession, perfume_data: perfume_schema.PerfumeCreate) -> Perfume:
    """Crea un nuevo perfume. La marca debe haberse validado antes."""
    db_perfume = Perfume(
        name=perfume_data.name,
        number=perfume_data.number,
        brand_id=perfume_data.brand_id,
    )
    db.add(db_perfume)
    await db.commit()
    await db.refresh(db_perfume)
    return db_perfume


async def update_perfume(db: AsyncSession, db_perfume: Perfume, perfume_update: perfume_schema.PerfumeUpdate) -> Perfume:
    for key, value in perfume_update.model_dump().items():
        setattr(db_perfume, key, value)

    await db.commit()
    await db.refresh(db_perfume)
    return db_perfume


async def delete_perfume(db: AsyncSession, perfume_id: int) -> None:
    await db.execute(delete(Perfume).where(Perfume.id == perfume_id))
    await db.commit()

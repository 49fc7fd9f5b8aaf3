"""
Endpoints REST para operaciones CRUD de marcas.

Las lecturas están disponibles para cualquier usuario autenticado;
crear, modificar y borrar requiere rol ADMIN.
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from perfume_catalog.api import deps
from perfume_catalog.api.access import ADMIN_ONLY, ANY_USER, require
from perfume_catalog.api.errors import unwrap
from perfume_catalog.schemas import brand_schema
from perfume_catalog.services.brand_service import BrandService

router = APIRouter()

# ========================================
# LECTURA
# ========================================

@router.get("", response_model=List[brand_schema.BrandResponse], dependencies=[Depends(require(ANY_USER))])
async def read_brands(
    db: AsyncSession = Depends(deps.get_db),
    brand_service: BrandService = Depends(deps.get_brand_service),
    skip: int = 0,
    limit: int = 100,
):
    return await brand_service.get_all_brands(db, skip=skip, limit=limit)

@router.get(
    "/category/{category_id}",
    response_model=List[brand_schema.BrandResponse],
    dependencies=[Depends(require(ANY_USER))],
)
async def read_brands_by_category(
    *,
    db: AsyncSession = Depends(deps.get_db),
    brand_service: BrandService = Depends(deps.get_brand_service),
    category_id: int,
):
    """Marcas de una categoría. Una categoría inexistente devuelve una lista vacía."""
    return await brand_service.get_brands_by_category(db, category_id)

@router.get("/{brand_id}", response_model=brand_schema.BrandResponse, dependencies=[Depends(require(ANY_USER))])
async def read_brand(
    *,
    db: AsyncSession = Depends(deps.get_db),
    brand_service: BrandService = Depends(deps.get_brand_service),
    brand_id: int,
):
    return unwrap(await brand_service.get_brand_by_id(db, brand_id))

# ========================================
# ESCRITURA (ADMIN)
# ========================================

@router.post(
    "",
    response_model=brand_schema.BrandResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require(ADMIN_ONLY))],
)
async def create_brand(
    *,
    db: AsyncSession = Depends(deps.get_db),
    brand_service: BrandService = Depends(deps.get_brand_service),
    brand_in: brand_schema.BrandCreate,
):
    """Crea una marca dentro de una categoría existente."""
    return unwrap(await brand_service.create_new_brand(db, brand_in))

@router.put("/{brand_id}", response_model=brand_schema.BrandResponse, dependencies=[Depends(require(ADMIN_ONLY))])
async def update_brand(
    *,
    db: AsyncSession = Depends(deps.get_db),
    brand_service: BrandService = Depends(deps.get_brand_service),
    brand_id: int,
    brand_in: brand_schema.BrandUpdate,
):
    return unwrap(await brand_service.update_existing_brand(db, brand_id, brand_in))

@router.delete(
    "/{brand_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require(ADMIN_ONLY))],
)
async def delete_brand(
    *,
    db: AsyncSession = Depends(deps.get_db),
    brand_service: BrandService = Depends(deps.get_brand_service),
    brand_id: int,
) -> Response:
    """Elimina una marca sin perfumes asociados."""
    unwrap(await brand_service.delete_existing_brand(db, brand_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)

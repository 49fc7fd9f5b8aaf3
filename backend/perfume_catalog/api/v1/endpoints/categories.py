"""
Endpoints REST para operaciones CRUD de categorías.
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from perfume_catalog.api import deps
from perfume_catalog.api.access import ADMIN_ONLY, ANY_USER, require
from perfume_catalog.api.errors import unwrap
from perfume_catalog.schemas import category_schema
from perfume_catalog.services.category_service import CategoryService

router = APIRouter()

@router.post(
    "",
    response_model=category_schema.CategoryResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require(ADMIN_ONLY))],
)
async def create_category(
    *,
    db: AsyncSession = Depends(deps.get_db),
    category_service: CategoryService = Depends(deps.get_category_service),
    category_in: category_schema.CategoryCreate,
):
    """Crea una nueva categoría en el sistema."""
    return unwrap(await category_service.create_new_category(db, category_in))

@router.put(
    "/{category_id}",
    response_model=category_schema.CategoryResponse,
    dependencies=[Depends(require(ADMIN_ONLY))],
)
async def update_category(
    *,
    db: AsyncSession = Depends(deps.get_db),
    category_service: CategoryService = Depends(deps.get_category_service),
    category_id: int,
    category_in: category_schema.CategoryUpdate,
):
    """Reemplaza una categoría existente."""
    return unwrap(await category_service.update_existing_category(db, category_id, category_in))

@router.delete(
    "/{category_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require(ADMIN_ONLY))],
)
async def delete_category(
    *,
    db: AsyncSession = Depends(deps.get_db),
    category_service: CategoryService = Depends(deps.get_category_service),
    category_id: int,
) -> Response:
    """Elimina una categoría sin marcas asociadas."""
    unwrap(await category_service.delete_existing_category(db, category_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.get(
    "/{category_id}",
    response_model=category_schema.CategoryResponse,
    dependencies=[Depends(require(ANY_USER))],
)
async def read_category(
    *,
    db: AsyncSession = Depends(deps.get_db),
    category_service: CategoryService = Depends(deps.get_category_service),
    category_id: int,
):
    """Obtiene los detalles de una categoría específica por su ID."""
    return unwrap(await category_service.get_category_by_id(db, category_id))

@router.get(
    "",
    response_model=List[category_schema.CategoryResponse],
    dependencies=[Depends(require(ANY_USER))],
)
async def read_categories(
    db: AsyncSession = Depends(deps.get_db),
    category_service: CategoryService = Depends(deps.get_category_service),
    skip: int = 0,
    limit: int = 100,
):
    """Obtiene una lista de categorías con paginación."""
    return await category_service.get_all_categories(db, skip=skip, limit=limit)

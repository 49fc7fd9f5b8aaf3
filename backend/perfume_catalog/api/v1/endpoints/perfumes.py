"""
Endpoints REST para operaciones CRUD de perfumes y búsqueda del catálogo.
"""

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from perfume_catalog.api import deps
from perfume_catalog.api.access import ADMIN_ONLY, ANY_USER, require
from perfume_catalog.api.errors import unwrap
from perfume_catalog.schemas import perfume_schema
from perfume_catalog.services.perfume_service import PerfumeService

router = APIRouter()
search_router = APIRouter()

# ========================================
# LECTURA
# ========================================

@router.get("", response_model=List[perfume_schema.PerfumeResponse], dependencies=[Depends(require(ANY_USER))])
async def read_perfumes(
    db: AsyncSession = Depends(deps.get_db),
    perfume_service: PerfumeService = Depends(deps.get_perfume_service),
    skip: int = 0,
    limit: int = 100,
):
    return await perfume_service.get_all_perfumes(db, skip=skip, limit=limit)

@router.get(
    "/brand/{brand_id}",
    response_model=List[perfume_schema.PerfumeResponse],
    dependencies=[Depends(require(ANY_USER))],
)
async def read_perfumes_by_brand(
    *,
    db: AsyncSession = Depends(deps.get_db),
    perfume_service: PerfumeService = Depends(deps.get_perfume_service),
    brand_id: int,
):
    return await perfume_service.get_perfumes_by_brand(db, brand_id)

@router.get(
    "/category/{category_id}",
    response_model=List[perfume_schema.PerfumeResponse],
    dependencies=[Depends(require(ANY_USER))],
)
async def read_perfumes_by_category(
    *,
    db: AsyncSession = Depends(deps.get_db),
    perfume_service: PerfumeService = Depends(deps.get_perfume_service),
    category_id: int,
):
    return await perfume_service.get_perfumes_by_category(db, category_id)

@router.get("/{perfume_id}", response_model=perfume_schema.PerfumeResponse, dependencies=[Depends(require(ANY_USER))])
async def read_perfume(
    *,
    db: AsyncSession = Depends(deps.get_db),
    perfume_service: PerfumeService = Depends(deps.get_perfume_service),
    perfume_id: int,
):
    return unwrap(await perfume_service.get_perfume_by_id(db, perfume_id))

# ========================================
# ESCRITURA (ADMIN)
# ========================================

@router.post(
    "",
    response_model=perfume_schema.PerfumeResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require(ADMIN_ONLY))],
)
async def create_perfume(
    *,
    db: AsyncSession = Depends(deps.get_db),
    perfume_service: PerfumeService = Depends(deps.get_perfume_service),
    perfume_in: perfume_schema.PerfumeCreate,
):
    return unwrap(await perfume_service.create_new_perfume(db, perfume_in))

@router.put("/{perfume_id}", response_model=perfume_schema.PerfumeResponse, dependencies=[Depends(require(ADMIN_ONLY))])
async def update_perfume(
    *,
    db: AsyncSession = Depends(deps.get_db),
    perfume_service: PerfumeService = Depends(deps.get_perfume_service),
    perfume_id: int,
    perfume_in: perfume_schema.PerfumeUpdate,
):
    return unwrap(await perfume_service.update_existing_perfume(db, perfume_id, perfume_in))

@router.delete(
    "/{perfume_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require(ADMIN_ONLY))],
)
async def delete_perfume(
    *,
    db: AsyncSession = Depends(deps.get_db),
    perfume_service: PerfumeService = Depends(deps.get_perfume_service),
    perfume_id: int,
) -> Response:
    unwrap(await perfume_service.delete_existing_perfume(db, perfume_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)

# ========================================
# BÚSQUEDA
# ========================================

@search_router.post(
    "/search",
    response_model=List[perfume_schema.PerfumeResponse],
    dependencies=[Depends(require(ANY_USER))],
)
async def search_perfumes(
    *,
    db: AsyncSession = Depends(deps.get_db),
    perfume_service: PerfumeService = Depends(deps.get_perfume_service),
    search_in: perfume_schema.PerfumeSearchRequest,
):
    """
    Búsqueda combinada: texto en nombre de perfume o marca, nombre de marca
    y rango de número (inclusivo). Los filtros vacíos se ignoran.
    """
    return await perfume_service.search_and_filter(db, search_in)

@search_router.get(
    "/search/{search_term}",
    response_model=List[perfume_schema.PerfumeResponse],
    dependencies=[Depends(require(ANY_USER))],
)
async def search_perfumes_by_term(
    *,
    db: AsyncSession = Depends(deps.get_db),
    perfume_service: PerfumeService = Depends(deps.get_perfume_service),
    search_term: str,
):
    return await perfume_service.search_by_term(db, search_term)

@search_router.get(
    "/brand-name/{brand_name}",
    response_model=List[perfume_schema.PerfumeResponse],
    dependencies=[Depends(require(ANY_USER))],
)
async def read_perfumes_by_brand_name(
    *,
    db: AsyncSession = Depends(deps.get_db),
    perfume_service: PerfumeService = Depends(deps.get_perfume_service),
    brand_name: str,
):
    """Coincidencia exacta con el nombre de la marca."""
    return await perfume_service.find_by_brand_name(db, brand_name)

@search_router.get(
    "/number-range",
    response_model=List[perfume_schema.PerfumeResponse],
    dependencies=[Depends(require(ANY_USER))],
)
async def read_perfumes_by_number_range(
    *,
    db: AsyncSession = Depends(deps.get_db),
    perfume_service: PerfumeService = Depends(deps.get_perfume_service),
    min_number: int = Query(..., alias="minNumber"),
    max_number: int = Query(..., alias="maxNumber"),
):
    return await perfume_service.find_by_number_range(db, min_number, max_number)

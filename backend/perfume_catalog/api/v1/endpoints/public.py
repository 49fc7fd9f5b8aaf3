"""
Catálogo público de solo lectura.

Replica las lecturas del catálogo sin exigir autenticación, para la
tienda web que consultan los visitantes.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from perfume_catalog.api import deps
from perfume_catalog.api.access import PUBLIC, require
from perfume_catalog.schemas import brand_schema, category_schema, perfume_schema
from perfume_catalog.services.brand_service import BrandService
from perfume_catalog.services.category_service import CategoryService
from perfume_catalog.services.perfume_service import PerfumeService

router = APIRouter(dependencies=[Depends(require(PUBLIC))])


@router.get("/categories", response_model=List[category_schema.CategoryResponse])
async def read_public_categories(
    db: AsyncSession = Depends(deps.get_db),
    category_service: CategoryService = Depends(deps.get_category_service),
):
    return await category_service.get_all_categories(db, limit=1000)


@router.get("/brands", response_model=List[brand_schema.BrandResponse])
async def read_public_brands(
    db: AsyncSession = Depends(deps.get_db),
    brand_service: BrandService = Depends(deps.get_brand_service),
):
    return await brand_service.get_all_brands(db, limit=1000)


@router.get("/brands/category/{category_id}", response_model=List[brand_schema.BrandResponse])
async def read_public_brands_by_category(
    category_id: int,
    db: AsyncSession = Depends(deps.get_db),
    brand_service: BrandService = Depends(deps.get_brand_service),
):
    return await brand_service.get_brands_by_category(db, category_id)


@router.get("/perfumes", response_model=List[perfume_schema.PerfumeResponse])
async def read_public_perfumes(
    db: AsyncSession = Depends(deps.get_db),
    perfume_service: PerfumeService = Depends(deps.get_perfume_service),
):
    return await perfume_service.get_all_perfumes(db, limit=1000)


@router.get("/perfumes/brand/{brand_id}", response_model=List[perfume_schema.PerfumeResponse])
async def read_public_perfumes_by_brand(
    brand_id: int,
    db: AsyncSession = Depends(deps.get_db),
    perfume_service: PerfumeService = Depends(deps.get_perfume_service),
):
    return await perfume_service.get_perfumes_by_brand(db, brand_id)


@router.get("/perfumes/category/{category_id}", response_model=List[perfume_schema.PerfumeResponse])
async def read_public_perfumes_by_category(
    category_id: int,
    db: AsyncSession = Depends(deps.get_db),
    perfume_service: PerfumeService = Depends(deps.get_perfume_service),
):
    return await perfume_service.get_perfumes_by_category(db, category_id)


@router.post("/perfumes/search", response_model=List[perfume_schema.PerfumeResponse])
async def search_public_perfumes(
    search_in: perfume_schema.PerfumeSearchRequest,
    db: AsyncSession = Depends(deps.get_db),
    perfume_service: PerfumeService = Depends(deps.get_perfume_service),
):
    return await perfume_service.search_and_filter(db, search_in)

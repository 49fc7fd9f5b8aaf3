"""
Servicio para operaciones de negocio relacionadas con marcas.

Reglas que aplica:
- La categoría referenciada debe existir (REFERENCE_NOT_FOUND)
- El nombre de la marca es único dentro de su categoría, no globalmente
- Una marca con perfumes no puede eliminarse
"""

import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from perfume_catalog.crud import brand_crud, category_crud
from perfume_catalog.db.models.brand_model import Brand
from perfume_catalog.schemas import brand_schema
from perfume_catalog.services.result import ErrorKind, Result, ServiceError, guarded_write

logger = logging.getLogger(__name__)


class BrandService:

    # ========================================
    # OPERACIONES DE CONSULTA
    # ========================================

    async def get_brand_by_id(self, db: AsyncSession, brand_id: int) -> Result[Brand]:
        brand = await brand_crud.get_brand_with_category(db, brand_id=brand_id)
        if not brand:
            return Result.failure(ErrorKind.NOT_FOUND, f"Brand with ID {brand_id} not found.")
        return Result.success(brand)

    async def get_all_brands(self, db: AsyncSession, skip: int = 0, limit: int = 100) -> List[Brand]:
        return await brand_crud.get_brands(db, skip=skip, limit=min(limit, 1000))

    async def get_brands_by_category(self, db: AsyncSession, category_id: int) -> List[Brand]:
        return await brand_crud.get_brands_by_category(db, category_id=category_id)

    async def count_brands(self, db: AsyncSession) -> int:
        return await brand_crud.get_total_brands(db)

    # ========================================
    # OPERACIONES DE ESCRITURA CON LÓGICA DE NEGOCIO
    # ========================================

    async def create_new_brand(self, db: AsyncSession, brand_in: brand_schema.BrandCreate) -> Result[Brand]:
        """Crea una marca dentro de una categoría existente."""
        error = await self._validate(db, brand_in, brand_id=None)
        if error:
            return Result(error=error)

        result = await guarded_write(
            db, lambda: brand_crud.create_brand(db, brand=brand_in), self._duplicate_name(brand_in.name)
        )
        if not result.ok:
            return result
        logger.info(f"Marca creada: '{brand_in.name}' en categoría {brand_in.category_id}")
        return await self.get_brand_by_id(db, result.value.id)

    async def update_existing_brand(
        self, db: AsyncSession, brand_id: int, brand_in: brand_schema.BrandUpdate
    ) -> Result[Brand]:
        """
        Reemplaza una marca. Si cambia de categoría, la unicidad del nombre
        se comprueba en la categoría de destino.
        """
        db_brand = await brand_crud.get_brand(db, brand_id=brand_id)
        if not db_brand:
            return Result.failure(ErrorKind.NOT_FOUND, f"Brand with ID {brand_id} not found.")

        error = await self._validate(db, brand_in, brand_id=brand_id)
        if error:
            return Result(error=error)

        result = await guarded_write(
            db, lambda: brand_crud.update_brand(db, db_brand, brand_in), self._duplicate_name(brand_in.name)
        )
        if not result.ok:
            return result
        return await self.get_brand_by_id(db, brand_id)

    async def delete_existing_brand(self, db: AsyncSession, brand_id: int) -> Result[None]:
        brand = await brand_crud.get_brand_with_perfumes(db, brand_id=brand_id)
        if not brand:
            return Result.failure(ErrorKind.NOT_FOUND, f"Brand with ID {brand_id} not found.")

        has_dependents = ServiceError(ErrorKind.HAS_DEPENDENTS, "Cannot delete brand with existing perfumes")
        if brand.perfumes:
            logger.warning(f"Borrado rechazado: la marca {brand_id} tiene {len(brand.perfumes)} perfumes")
            return Result(error=has_dependents)

        result = await guarded_write(db, lambda: brand_crud.delete_brand(db, brand_id), has_dependents)
        if result.ok:
            logger.info(f"Marca eliminada: id={brand_id}")
        return result

    # ========================================
    # VALIDACIONES
    # ========================================

    async def _validate(
        self, db: AsyncSession, brand_in: brand_schema.BrandBase, brand_id: Optional[int]
    ) -> Optional[ServiceError]:
        category = await category_crud.get_category(db, category_id=brand_in.category_id)
        if not category:
            return ServiceError(
                ErrorKind.REFERENCE_NOT_FOUND, f"Category not found with ID: {brand_in.category_id}"
            )

        existing = await brand_crud.get_brand_by_name_and_category(
            db, name=brand_in.name, category_id=brand_in.category_id
        )
        if existing and existing.id != brand_id:
            return self._duplicate_name(brand_in.name)
        return None

    @staticmethod
    def _duplicate_name(name: str) -> ServiceError:
        return ServiceError(ErrorKind.DUPLICATE_NAME, f"Brand with name '{name}' already exists in this category")

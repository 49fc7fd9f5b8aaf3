# backend/perfume_catalog/services/perfume_service.py

"""
Capa de servicios para operaciones de negocio relacionadas con perfumes.

El perfume es la hoja de la jerarquía: solo se valida que la marca
referenciada exista, no hay restricciones de unicidad y el borrado es
incondicional una vez confirmada su existencia.
"""

import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from perfume_catalog.crud import brand_crud, perfume_crud
from perfume_catalog.db.models.perfume_model import Perfume
from perfume_catalog.schemas import perfume_schema
from perfume_catalog.services.result import ErrorKind, Result, ServiceError, guarded_write

logger = logging.getLogger(__name__)


class PerfumeService:
    """
    Servicio para operaciones de negocio relacionadas con perfumes.

    Todas las lecturas devuelven perfumes con marca y categoría precargadas,
    listos para serializarse con PerfumeResponse.
    """

    # ========================================
    # OPERACIONES DE CONSULTA
    # ========================================

    async def get_perfume_by_id(self, db: AsyncSession, perfume_id: int) -> Result[Perfume]:
        perfume = await perfume_crud.get_perfume(db, perfume_id=perfume_id)
        if not perfume:
            return Result.failure(ErrorKind.NOT_FOUND, f"Perfume with ID {perfume_id} not found.")
        return Result.success(perfume)

    async def get_all_perfumes(self, db: AsyncSession, skip: int = 0, limit: int = 100) -> List[Perfume]:
        return await perfume_crud.get_perfumes(db, skip=skip, limit=min(limit, 1000))

    async def get_perfumes_by_brand(self, db: AsyncSession, brand_id: int) -> List[Perfume]:
        return await perfume_crud.get_perfumes_by_brand(db, brand_id=brand_id)

    async def get_perfumes_by_category(self, db: AsyncSession, category_id: int) -> List[Perfume]:
        return await perfume_crud.get_perfumes_by_category(db, category_id=category_id)

    async def count_perfumes(self, db: AsyncSession) -> int:
        return await perfume_crud.get_total_perfumes(db)

    async def search_and_filter(self, db: AsyncSession, search: perfume_schema.PerfumeSearchRequest) -> List[Perfume]:
        """
        Búsqueda combinada por texto, marca y rango de número.

        Un rango invertido (min > max) no es un error: simplemente no hay resultados.
        """
        return await perfume_crud.search_and_filter(
            db,
            search_term=search.search_term,
            brand_name=search.brand_name,
            min_number=search.min_number,
            max_number=search.max_number,
        )

    async def search_by_term(self, db: AsyncSession, search_term: str) -> List[Perfume]:
        return await self.search_and_filter(db, perfume_schema.PerfumeSearchRequest(search_term=search_term))

    async def find_by_brand_name(self, db: AsyncSession, brand_name: str) -> List[Perfume]:
        return await perfume_crud.get_perfumes_by_brand_name(db, brand_name=brand_name)

    async def find_by_number_range(self, db: AsyncSession, min_number: int, max_number: int) -> List[Perfume]:
        return await self.search_and_filter(
            db, perfume_schema.PerfumeSearchRequest(min_number=min_number, max_number=max_number)
        )

    # ========================================
    # OPERACIONES DE ESCRITURA CON LÓGICA DE NEGOCIO
    # ========================================

    async def create_new_perfume(self, db: AsyncSession, perfume_in: perfume_schema.PerfumeCreate) -> Result[Perfume]:
        missing_brand = await self._check_brand(db, perfume_in.brand_id)
        if missing_brand:
            return Result(error=missing_brand)

        # Sin restricciones de unicidad: un IntegrityError solo puede venir de la FK
        result = await guarded_write(
            db,
            lambda: perfume_crud.create_perfume(db, perfume_data=perfume_in),
            self._brand_not_found(perfume_in.brand_id),
        )
        if not result.ok:
            return result
        logger.info(f"Perfume creado: '{perfume_in.name}' nº {perfume_in.number} (marca {perfume_in.brand_id})")
        return await self.get_perfume_by_id(db, result.value.id)

    async def update_existing_perfume(
        self, db: AsyncSession, perfume_id: int, perfume_in: perfume_schema.PerfumeUpdate
    ) -> Result[Perfume]:
        db_perfume = await perfume_crud.get_perfume(db, perfume_id=perfume_id)
        if not db_perfume:
            return Result.failure(ErrorKind.NOT_FOUND, f"Perfume with ID {perfume_id} not found.")

        missing_brand = await self._check_brand(db, perfume_in.brand_id)
        if missing_brand:
            return Result(error=missing_brand)

        result = await guarded_write(
            db,
            lambda: perfume_crud.update_perfume(db, db_perfume, perfume_in),
            self._brand_not_found(perfume_in.brand_id),
        )
        if not result.ok:
            return result
        return await self.get_perfume_by_id(db, perfume_id)

    async def delete_existing_perfume(self, db: AsyncSession, perfume_id: int) -> Result[None]:
        perfume = await perfume_crud.get_perfume(db, perfume_id=perfume_id)
        if not perfume:
            return Result.failure(ErrorKind.NOT_FOUND, f"Perfume with ID {perfume_id} not found.")

        result = await guarded_write(
            db,
            lambda: perfume_crud.delete_perfume(db, perfume_id),
            ServiceError(ErrorKind.STORAGE, "Storage operation failed"),
        )
        if result.ok:
            logger.info(f"Perfume eliminado: id={perfume_id}")
        return result

    # ========================================
    # VALIDACIONES
    # ========================================

    async def _check_brand(self, db: AsyncSession, brand_id: int) -> Optional[ServiceError]:
        brand = await brand_crud.get_brand(db, brand_id=brand_id)
        if not brand:
            return self._brand_not_found(brand_id)
        return None

    @staticmethod
    def _brand_not_found(brand_id: int) -> ServiceError:
        return ServiceError(ErrorKind.REFERENCE_NOT_FOUND, f"Brand not found with ID: {brand_id}")

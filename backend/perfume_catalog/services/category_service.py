"""
Servicio para operaciones de negocio relacionadas con categorías.

Este servicio se encarga de gestionar la lógica de negocio para el manejo de categorías:
unicidad del nombre en todo el catálogo y protección del borrado mientras
la categoría tenga marcas.
"""

import logging
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from perfume_catalog.crud import category_crud
from perfume_catalog.db.models.category_model import Category
from perfume_catalog.schemas import category_schema
from perfume_catalog.services.result import ErrorKind, Result, ServiceError, guarded_write

logger = logging.getLogger(__name__)


class CategoryService:
    """
    Servicio para operaciones de negocio relacionadas con categorías.

    Características:
    - Validación de nombres duplicados (excluyendo la propia categoría al actualizar)
    - Borrado protegido: una categoría con marcas no se elimina
    - Los fallos esperados se devuelven como Result, no como excepciones
    """

    # ========================================
    # OPERACIONES DE CONSULTA
    # ========================================

    async def get_category_by_id(self, db: AsyncSession, category_id: int) -> Result[Category]:
        category = await category_crud.get_category(db, category_id=category_id)
        if not category:
            return Result.failure(ErrorKind.NOT_FOUND, f"Category with ID {category_id} not found.")
        return Result.success(category)

    async def get_all_categories(self, db: AsyncSession, skip: int = 0, limit: int = 100) -> List[Category]:
        if limit > 1000: # Prevenir consultas excesivamente grandes
            limit = 1000
        return await category_crud.get_categories(db, skip=skip, limit=limit)

    async def count_categories(self, db: AsyncSession) -> int:
        return await category_crud.get_total_categories(db)

    # ========================================
    # OPERACIONES DE ESCRITURA CON LÓGICA DE NEGOCIO
    # ========================================

    async def create_new_category(self, db: AsyncSession, category_in: category_schema.CategoryCreate) -> Result[Category]:
        """
        Crea una nueva categoría validando que el nombre no exista.

        La comprobación previa no está protegida por bloqueos: si otra petición
        inserta el mismo nombre entre la comprobación y el commit, la restricción
        UNIQUE de la base de datos lo detecta y se devuelve el mismo DUPLICATE_NAME.
        """
        duplicate = self._duplicate_name(category_in.name)
        existing = await category_crud.get_category_by_name(db, name=category_in.name)
        if existing:
            return Result(error=duplicate)

        result = await guarded_write(
            db, lambda: category_crud.create_category(db, category=category_in), duplicate
        )
        if result.ok:
            logger.info(f"Categoría creada: '{result.value.name}' (id={result.value.id})")
        return result

    async def update_existing_category(
        self, db: AsyncSession, category_id: int, category_in: category_schema.CategoryUpdate
    ) -> Result[Category]:
        """
        Reemplaza una categoría existente.

        Mantener el mismo nombre está permitido; solo es conflicto que el nombre
        pertenezca a otra categoría.
        """
        db_category = await category_crud.get_category(db, category_id=category_id)
        if not db_category:
            return Result.failure(ErrorKind.NOT_FOUND, f"Category with ID {category_id} not found.")

        duplicate = self._duplicate_name(category_in.name)
        existing = await category_crud.get_category_by_name(db, name=category_in.name)
        if existing and existing.id != category_id:
            return Result(error=duplicate)

        return await guarded_write(
            db, lambda: category_crud.update_category(db, db_category, category_in), duplicate
        )

    async def delete_existing_category(self, db: AsyncSession, category_id: int) -> Result[None]:
        """
        Elimina una categoría solo si no tiene marcas.

        El borrado se rechaza (no se propaga en cascada) mientras existan
        marcas asociadas: hay que eliminarlas o moverlas antes.
        """
        category = await category_crud.get_category_with_brands(db, category_id=category_id)
        if not category:
            return Result.failure(ErrorKind.NOT_FOUND, f"Category with ID {category_id} not found.")

        has_dependents = ServiceError(ErrorKind.HAS_DEPENDENTS, "Cannot delete category with existing brands")
        if category.brands:
            logger.warning(f"Borrado rechazado: la categoría {category_id} tiene {len(category.brands)} marcas")
            return Result(error=has_dependents)

        result = await guarded_write(db, lambda: category_crud.delete_category(db, category_id), has_dependents)
        if result.ok:
            logger.info(f"Categoría eliminada: id={category_id}")
        return result

    @staticmethod
    def _duplicate_name(name: str) -> ServiceError:
        return ServiceError(ErrorKind.DUPLICATE_NAME, f"Category with name '{name}' already exists")

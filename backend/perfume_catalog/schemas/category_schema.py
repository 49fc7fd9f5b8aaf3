# backend/perfume_catalog/schemas/category_schema.py

"""
Esquemas Pydantic para el modelo Category.

Los esquemas definen la estructura de datos que fluye a través de la API:
- Validación automática de tipos de datos
- Serialización/deserialización JSON
- Documentación automática en OpenAPI/Swagger
- Separación entre modelo de base de datos y API

Patrón de esquemas utilizado:
- CategoryBase: Propiedades comunes compartidas
- CategoryCreate: Para crear nuevas categorías (POST)
- CategoryUpdate: Para reemplazar categorías existentes (PUT)
- CategoryResponse: Para respuestas de la API (GET)
"""

from typing import Optional
from pydantic import ConfigDict, Field

from .common_schema import CatalogSchema

# ========================================
# ESQUEMA BASE
# ========================================

class CategoryBase(CatalogSchema):
    """Propiedades comunes compartidas entre esquemas de categoría."""
    name: str = Field(..., min_length=2, max_length=50)
    description: Optional[str] = Field(default=None, max_length=500)
    color: str = Field(..., min_length=1, max_length=20)


# ========================================
# ESQUEMAS PARA OPERACIONES
# ========================================

class CategoryCreate(CategoryBase):
    """Esquema para crear una nueva categoría. El ID lo asigna la base de datos."""
    pass


class CategoryUpdate(CategoryBase):
    """
    Esquema para actualizar una categoría.

    La actualización es un reemplazo completo: no hay campos opcionales
    más allá de los del esquema base.
    """
    pass


# ========================================
# ESQUEMA DE RESPUESTA
# ========================================

class CategoryResponse(CategoryBase):
    """Esquema para las respuestas de la API al leer categorías."""
    id: int

    model_config = ConfigDict(from_attributes=True)

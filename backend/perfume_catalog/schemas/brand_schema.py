# backend/perfume_catalog/schemas/brand_schema.py
"""
Se encarga de definir los esquemas Pydantic para el modelo Brand.
"""

from typing import Optional
from pydantic import ConfigDict, Field

from .common_schema import CatalogSchema

# ========================================
# ESQUEMA BASE
# ========================================

class BrandBase(CatalogSchema):
    """Propiedades comunes compartidas entre esquemas de marca."""
    name: str = Field(..., min_length=2, max_length=100)
    description: Optional[str] = Field(default=None, max_length=1000)
    image_url: Optional[str] = Field(default=None, max_length=500)  # Referencia a la imagen subida
    category_id: int


# ========================================
# ESQUEMAS PARA OPERACIONES
# ========================================

class BrandCreate(BrandBase):
    """Esquema para crear una nueva marca dentro de una categoría."""
    pass


class BrandUpdate(BrandBase):
    """Esquema para reemplazar una marca. Permite moverla a otra categoría."""
    pass


# ========================================
# ESQUEMA DE RESPUESTA
# ========================================

class BrandResponse(BrandBase):
    """Esquema para las respuestas de la API al leer marcas."""
    id: int
    category_name: str  # Requiere la categoría precargada

    model_config = ConfigDict(from_attributes=True)

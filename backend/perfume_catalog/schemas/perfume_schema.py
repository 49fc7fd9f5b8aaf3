# backend/perfume_catalog/schemas/perfume_schema.py
"""
Esquemas Pydantic para el modelo Perfume.

Incluye los esquemas CRUD y los de búsqueda y filtrado del catálogo.
"""

from typing import Optional
from pydantic import ConfigDict, Field, model_validator

from .common_schema import CatalogSchema

# ========================================
# ESQUEMA BASE
# ========================================

class PerfumeBase(CatalogSchema):
    """Propiedades comunes compartidas entre esquemas de perfume."""
    name: str = Field(..., min_length=2, max_length=100)
    number: int = Field(..., gt=0, description="Número identificativo del perfume (no es un precio).")
    brand_id: int


# ========================================
# ESQUEMAS PARA OPERACIONES
# ========================================

class PerfumeCreate(PerfumeBase):
    """Esquema para crear un nuevo perfume."""
    pass


class PerfumeUpdate(PerfumeBase):
    """Esquema para reemplazar un perfume existente."""
    pass


# ========================================
# ESQUEMA DE RESPUESTA
# ========================================

class PerfumeResponse(PerfumeBase):
    """
    Resumen de un perfume con los nombres de su marca y categoría.
    Requiere brand y brand.category precargados.
    """
    id: int
    brand_name: str
    category_id: int
    category_name: str

    model_config = ConfigDict(from_attributes=True)


# ========================================
# BÚSQUEDA
# ========================================

class PerfumeSearchRequest(CatalogSchema):
    """
    Filtros de búsqueda. Todos son opcionales: un filtro ausente (o en
    blanco) no restringe ese campo.
    """
    search_term: Optional[str] = Field(default=None, description="Texto en el nombre del perfume o de la marca.")
    brand_name: Optional[str] = None
    min_number: Optional[int] = None
    max_number: Optional[int] = None

    @model_validator(mode="after")
    def normalize_blank_terms(self):
        if self.search_term is not None and not self.search_term.strip():
            self.search_term = None
        if self.brand_name is not None and not self.brand_name.strip():
            self.brand_name = None
        return self

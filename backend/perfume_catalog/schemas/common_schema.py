# backend/perfume_catalog/schemas/common_schema.py
"""
Esquemas Pydantic compartidos por toda la API.

- CatalogSchema: base con alias camelCase (el cliente web envía y recibe
  camelCase, pero también se aceptan los nombres snake_case)
- ErrorResponse: cuerpo estructurado de todas las respuestas de error
- MessageResponse: respuestas simples con un mensaje
"""

from datetime import datetime
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CatalogSchema(BaseModel):
    """Base de todos los esquemas de la API."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ErrorResponse(CatalogSchema):
    """Cuerpo de error: hora, estado, etiqueta corta y mensaje legible."""
    timestamp: datetime
    status: int
    error: str
    message: str
    path: Optional[str] = None
    # Solo en errores de validación: campo -> mensaje
    errors: Optional[Dict[str, str]] = None


class MessageResponse(CatalogSchema):
    message: str


class HealthResponse(CatalogSchema):
    status: str = "UP"
    service: str
    timestamp: datetime


class DashboardStats(CatalogSchema):
    """Totales del catálogo para el panel de administración."""
    total_categories: int
    total_brands: int
    total_perfumes: int

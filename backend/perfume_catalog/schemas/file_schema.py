# backend/perfume_catalog/schemas/file_schema.py
"""
Se encarga de definir los esquemas Pydantic para la subida de imágenes.
"""

from typing import Optional

from .common_schema import CatalogSchema


class FileUploadResponse(CatalogSchema):
    """Nombre con el que se almacenó el fichero y URL para recuperarlo."""
    success: bool = True
    filename: str
    url: str
    message: str = "File uploaded successfully"


class FileDeleteResponse(CatalogSchema):
    success: bool = True
    deleted: bool
    message: Optional[str] = None

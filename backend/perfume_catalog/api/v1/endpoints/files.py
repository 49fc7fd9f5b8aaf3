"""
Subida, descarga y borrado de imágenes de marcas.

La subida y el borrado son operaciones de administración; la descarga es
pública porque las imágenes se muestran en el catálogo.
"""

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import FileResponse

from perfume_catalog.api import deps
from perfume_catalog.api.access import ADMIN_ONLY, PUBLIC, require
from perfume_catalog.api.errors import ServiceFailure, unwrap
from perfume_catalog.core.config import Settings
from perfume_catalog.schemas import file_schema
from perfume_catalog.services.file_storage_service import FileStorageService
from perfume_catalog.services.result import ErrorKind, ServiceError

router = APIRouter()

NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache, no-store, must-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}


@router.post(
    "/admin/upload",
    response_model=file_schema.FileUploadResponse,
    dependencies=[Depends(require(ADMIN_ONLY))],
)
async def upload_file(
    file: UploadFile = File(...),
    storage: FileStorageService = Depends(deps.get_storage),
    settings: Settings = Depends(deps.get_settings),
):
    """Guarda una imagen y devuelve el nombre generado y su URL pública."""
    data = await file.read()
    filename = unwrap(await storage.store(file.filename, file.content_type, data))
    return file_schema.FileUploadResponse(
        filename=filename,
        url=f"{settings.API_V1_STR}{settings.FILES_URL_PATH}/{filename}",
    )


@router.get("/files/{filename}", dependencies=[Depends(require(PUBLIC))])
async def serve_file(filename: str, storage: FileStorageService = Depends(deps.get_storage)):
    path = await storage.resolve(filename)
    if path is None:
        raise ServiceFailure(ServiceError(ErrorKind.NOT_FOUND, f"File not found: {filename}"))

    return FileResponse(
        path,
        media_type=storage.media_type_for(filename),
        headers={"Content-Disposition": f'inline; filename="{filename}"', **NO_CACHE_HEADERS},
    )


@router.delete(
    "/admin/files/{filename}",
    response_model=file_schema.FileDeleteResponse,
    dependencies=[Depends(require(ADMIN_ONLY))],
)
async def delete_file(filename: str, storage: FileStorageService = Depends(deps.get_storage)):
    """Borra una imagen. Borrar una imagen que ya no existe no es un error."""
    deleted = unwrap(await storage.delete(filename))
    message = "File deleted successfully" if deleted else "File did not exist"
    return file_schema.FileDeleteResponse(deleted=deleted, message=message)

# backend/perfume_catalog/services/file_storage_service.py

"""
Almacenamiento de imágenes subidas en un directorio local.

El directorio se trata como un almacén de blobs: cada archivo recibe un
nombre aleatorio al guardarse y solo se accede a él por ese nombre, nunca
por rutas. Las operaciones de disco son bloqueantes, así que se ejecutan
en el threadpool de Starlette.
"""

import logging
import os
import tempfile
import uuid
from pathlib import Path
from typing import Optional

from starlette.concurrency import run_in_threadpool

from perfume_catalog.services.result import ErrorKind, Result

logger = logging.getLogger(__name__)

MEDIA_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".svg": "image/svg+xml",
}
DEFAULT_MEDIA_TYPE = "application/octet-stream"


def media_type_for(filename: str) -> str:
    return MEDIA_TYPES.get(Path(filename).suffix.lower(), DEFAULT_MEDIA_TYPE)


def is_safe_name(filename: Optional[str]) -> bool:
    """
    Un nombre válido es un único componente: sin separadores ni '..'.
    Los nombres ocultos (temporales de subida en curso) tampoco se sirven.
    """
    if not filename or filename.startswith(".") or ".." in filename:
        return False
    return "/" not in filename and "\\" not in filename


class FileStorageService:

    def __init__(self, upload_dir: Path):
        self.upload_dir = Path(upload_dir)

    # ========================================
    # ESCRITURA
    # ========================================

    async def store(self, original_filename: Optional[str], content_type: Optional[str], data: bytes) -> Result[str]:
        """
        Guarda el contenido y devuelve el nombre generado.

        Se escribe primero en un archivo temporal del mismo directorio y
        después se renombra, para que nunca se sirva un archivo a medias.
        """
        if not data:
            return Result.failure(ErrorKind.VALIDATION, "Please select a file to upload")
        if original_filename and ".." in original_filename:
            return Result.failure(ErrorKind.VALIDATION, f"Invalid file name: {original_filename}")
        if not content_type or not content_type.startswith("image/"):
            return Result.failure(ErrorKind.VALIDATION, "Only image files are allowed")

        extension = Path(original_filename or "").suffix.lower()
        filename = f"{uuid.uuid4().hex}{extension}"
        try:
            await run_in_threadpool(self._write_atomically, filename, data)
        except OSError:
            logger.exception(f"No se pudo guardar el archivo '{original_filename}'")
            return Result.failure(ErrorKind.STORAGE, "Could not store file")

        logger.info(f"Archivo guardado: {filename} ({len(data)} bytes, {content_type})")
        return Result.success(filename)

    async def delete(self, filename: str) -> Result[bool]:
        """Borra un archivo si existe. Borrar uno inexistente no es un error."""
        if not is_safe_name(filename):
            return Result.failure(ErrorKind.VALIDATION, f"Invalid file name: {filename}")
        try:
            deleted = await run_in_threadpool(self._remove, self.upload_dir / filename)
        except OSError:
            logger.exception(f"No se pudo borrar el archivo '{filename}'")
            return Result.failure(ErrorKind.STORAGE, "Could not delete file")

        if deleted:
            logger.info(f"Archivo eliminado: {filename}")
        return Result.success(deleted)

    # ========================================
    # LECTURA
    # ========================================

    async def resolve(self, filename: str) -> Optional[Path]:
        if not is_safe_name(filename):
            return None
        path = self.upload_dir / filename
        if not await run_in_threadpool(path.is_file):
            return None
        return path

    media_type_for = staticmethod(media_type_for)

    # ========================================
    # OPERACIONES DE DISCO (bloqueantes)
    # ========================================

    def _write_atomically(self, filename: str, data: bytes) -> None:
        self.upload_dir.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.upload_dir, prefix=".upload-", suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as tmp_file:
                tmp_file.write(data)
            os.replace(tmp_path, self.upload_dir / filename)
        except OSError:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

    @staticmethod
    def _remove(path: Path) -> bool:
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        return True

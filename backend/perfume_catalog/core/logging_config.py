"""
Configuración del sistema de logging de la aplicación.

Cada módulo obtiene su propio logger con logging.getLogger(__name__);
aquí solo se fija el nivel, el formato y el destino de los mensajes.
"""

import logging
from pathlib import Path

from perfume_catalog.core.config import Settings


def setup_logging(settings: Settings) -> None:
    """
    Configura el logger raíz a partir de la configuración.

    Si LOG_FILE_PATH está definido, además de la consola se escribe
    en ese fichero (creando el directorio si no existe).
    """
    handlers = [logging.StreamHandler()]
    if settings.LOG_FILE_PATH:
        log_path = Path(settings.LOG_FILE_PATH)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format=settings.LOG_FORMAT,
        handlers=handlers,
        force=True,
    )
    # SQLAlchemy es muy verboso a nivel INFO
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

# backend/perfume_catalog/api/v1/api_router.py
"""
Este archivo contiene el router principal para la API versión 1.

Se encarga de registrar todos los routers de la versión 1 de la API.
Las reglas de acceso no se configuran aquí: cada endpoint declara la suya.
"""

from fastapi import APIRouter

from perfume_catalog.api.v1.endpoints import (
    admin,
    auth,
    brands,
    categories,
    files,
    perfumes,
    public,
    users,
)

# ========================================
# CONFIGURACIÓN DEL ROUTER PRINCIPAL V1
# ========================================

api_router_v1 = APIRouter()

# ========================================
# REGISTRO DE ROUTERS POR DOMINIO
# ========================================

# AUTENTICACIÓN (público)
api_router_v1.include_router(auth.router, prefix="/auth", tags=["Auth"])

# CATÁLOGO: lectura para usuarios autenticados, escritura solo ADMIN
api_router_v1.include_router(categories.router, prefix="/categories", tags=["Categories"])
api_router_v1.include_router(brands.router, prefix="/brands", tags=["Brands"])
api_router_v1.include_router(perfumes.router, prefix="/perfumes", tags=["Perfumes"])
api_router_v1.include_router(perfumes.search_router, tags=["Perfumes"])

# CATÁLOGO PÚBLICO (sin autenticación)
api_router_v1.include_router(public.router, prefix="/public", tags=["Public"])

# ARCHIVOS: /admin/upload, /files/{filename}, /admin/files/{filename}
api_router_v1.include_router(files.router, tags=["Files"])

# ADMINISTRACIÓN
api_router_v1.include_router(admin.router, prefix="/admin", tags=["Admin"])

# AUTOSERVICIO DEL USUARIO
api_router_v1.include_router(users.router, prefix="/users", tags=["Users"])

"""
Endpoints de administración: panel, estado del sistema y gestión de usuarios.

Todas las rutas de este router exigen rol ADMIN.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from perfume_catalog.api import deps
from perfume_catalog.api.access import ADMIN_ONLY, require
from perfume_catalog.api.errors import unwrap
from perfume_catalog.core.container import Container
from perfume_catalog.schemas import user_schema
from perfume_catalog.schemas.common_schema import DashboardStats, HealthResponse, MessageResponse
from perfume_catalog.services.brand_service import BrandService
from perfume_catalog.services.category_service import CategoryService
from perfume_catalog.services.perfume_service import PerfumeService
from perfume_catalog.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require(ADMIN_ONLY))])

# ========================================
# PANEL Y ESTADO
# ========================================

@router.get("/dashboard", response_model=DashboardStats)
async def read_dashboard(
    db: AsyncSession = Depends(deps.get_db),
    category_service: CategoryService = Depends(deps.get_category_service),
    brand_service: BrandService = Depends(deps.get_brand_service),
    perfume_service: PerfumeService = Depends(deps.get_perfume_service),
):
    return DashboardStats(
        total_categories=await category_service.count_categories(db),
        total_brands=await brand_service.count_brands(db),
        total_perfumes=await perfume_service.count_perfumes(db),
    )


@router.get("/system/health", response_model=HealthResponse)
async def read_system_health(container: Container = Depends(deps.get_container)):
    return HealthResponse(service=container.settings.PROJECT_NAME, timestamp=container.clock())

# ========================================
# GESTIÓN DE USUARIOS
# ========================================

@router.get("/users", response_model=List[user_schema.UserResponse])
async def read_users(
    db: AsyncSession = Depends(deps.get_db),
    user_service: UserService = Depends(deps.get_user_service),
):
    return await user_service.get_all_users(db)


@router.post("/users", response_model=user_schema.UserActionResponse)
async def create_user(
    *,
    db: AsyncSession = Depends(deps.get_db),
    user_service: UserService = Depends(deps.get_user_service),
    user_in: user_schema.UserCreate,
):
    user = unwrap(await user_service.create_user(db, user_in))
    return user_schema.UserActionResponse(
        message="User created successfully", user=user_schema.UserResponse.model_validate(user)
    )


@router.post("/users/create-admin", response_model=user_schema.UserActionResponse)
async def create_admin(
    *,
    db: AsyncSession = Depends(deps.get_db),
    user_service: UserService = Depends(deps.get_user_service),
    admin_in: user_schema.AdminCreateRequest,
):
    user = unwrap(await user_service.create_admin_user(db, admin_in))
    return user_schema.UserActionResponse(
        message="Admin user created successfully", user=user_schema.UserResponse.model_validate(user)
    )


@router.put("/users/{user_id}", response_model=user_schema.UserActionResponse)
async def update_user(
    *,
    db: AsyncSession = Depends(deps.get_db),
    user_service: UserService = Depends(deps.get_user_service),
    user_id: int,
    user_in: user_schema.UserUpdate,
):
    """Reemplazo completo. Una contraseña vacía conserva la actual."""
    user = unwrap(await user_service.update_user(db, user_id, user_in))
    return user_schema.UserActionResponse(
        message="User updated successfully", user=user_schema.UserResponse.model_validate(user)
    )


@router.delete("/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    *,
    db: AsyncSession = Depends(deps.get_db),
    user_service: UserService = Depends(deps.get_user_service),
    user_id: int,
) -> Response:
    unwrap(await user_service.delete_user(db, user_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/users/{user_id}/enable", response_model=MessageResponse)
async def enable_user(
    *,
    db: AsyncSession = Depends(deps.get_db),
    user_service: UserService = Depends(deps.get_user_service),
    user_id: int,
):
    unwrap(await user_service.set_enabled(db, user_id, True))
    return MessageResponse(message="User enabled successfully")


@router.post("/users/{user_id}/disable", response_model=MessageResponse)
async def disable_user(
    *,
    db: AsyncSession = Depends(deps.get_db),
    user_service: UserService = Depends(deps.get_user_service),
    user_id: int,
):
    unwrap(await user_service.set_enabled(db, user_id, False))
    return MessageResponse(message="User disabled successfully")


@router.post("/users/{user_id}/change-password", response_model=MessageResponse)
async def reset_user_password(
    *,
    db: AsyncSession = Depends(deps.get_db),
    user_service: UserService = Depends(deps.get_user_service),
    user_id: int,
    password_in: user_schema.PasswordResetRequest,
):
    unwrap(await user_service.reset_password(db, user_id, password_in.new_password))
    return MessageResponse(message="Password changed successfully")

"""
Autoservicio del usuario autenticado: perfil y contraseña.

El usuario se identifica siempre por el token, nunca por un ID en la ruta.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from perfume_catalog.api import deps
from perfume_catalog.api.access import ANY_USER, require
from perfume_catalog.api.errors import unwrap
from perfume_catalog.core.security import TokenClaims
from perfume_catalog.schemas import user_schema
from perfume_catalog.schemas.common_schema import MessageResponse
from perfume_catalog.services.user_service import UserService

router = APIRouter()


@router.get("/me", response_model=user_schema.ProfileResponse)
async def read_profile(
    claims: TokenClaims = Depends(require(ANY_USER)),
    db: AsyncSession = Depends(deps.get_db),
    user_service: UserService = Depends(deps.get_user_service),
):
    return unwrap(await user_service.get_user_by_username(db, claims.username))


@router.put("/me", response_model=user_schema.UserActionResponse)
async def update_profile(
    profile_in: user_schema.ProfileUpdate,
    claims: TokenClaims = Depends(require(ANY_USER)),
    db: AsyncSession = Depends(deps.get_db),
    user_service: UserService = Depends(deps.get_user_service),
):
    """
    Cambia username y email. Si cambia el username, el token actual deja de
    identificar al usuario y hay que volver a iniciar sesión.
    """
    user = unwrap(await user_service.update_profile(db, claims.username, profile_in))
    return user_schema.UserActionResponse(
        message="Profile updated successfully", user=user_schema.UserResponse.model_validate(user)
    )


@router.put("/me/password", response_model=MessageResponse)
async def change_password(
    password_in: user_schema.ChangePasswordRequest,
    claims: TokenClaims = Depends(require(ANY_USER)),
    db: AsyncSession = Depends(deps.get_db),
    user_service: UserService = Depends(deps.get_user_service),
):
    unwrap(await user_service.change_password(db, claims.username, password_in))
    return MessageResponse(message="Password changed successfully")

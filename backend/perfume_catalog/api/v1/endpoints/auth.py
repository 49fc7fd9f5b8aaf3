"""
Endpoints de autenticación: login, registro y validación de tokens.

Son rutas públicas. Los fallos de login y registro no usan el cuerpo de
error estándar sino un LoginResponse con los campos a null, que es lo
que espera el cliente web.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from perfume_catalog.api import deps
from perfume_catalog.api.access import PUBLIC, extract_bearer_token, require
from perfume_catalog.schemas import user_schema
from perfume_catalog.services.auth_service import AuthService, AuthSession
from perfume_catalog.services.result import ErrorKind
from perfume_catalog.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require(PUBLIC))])

INVALID_LOGIN_MESSAGE = "Invalid username or password"


def _failed(message: str) -> JSONResponse:
    body = user_schema.LoginResponse(message=message)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body.model_dump(by_alias=True))


@router.post("/login", response_model=user_schema.LoginResponse)
async def login(
    *,
    db: AsyncSession = Depends(deps.get_db),
    auth_service: AuthService = Depends(deps.get_auth_service),
    login_in: user_schema.LoginRequest,
):
    """Verifica las credenciales y devuelve un token de acceso."""
    result = await auth_service.authenticate(db, login_in.username, login_in.password)
    if not result.ok:
        # Usuario inexistente, contraseña incorrecta o cuenta desactivada: mismo mensaje
        return _failed(INVALID_LOGIN_MESSAGE)

    session = result.value
    return user_schema.LoginResponse(
        token=auth_service.issue_token(session),
        username=session.username,
        email=session.email,
        message="Login successful",
    )


@router.post("/register", response_model=user_schema.LoginResponse)
async def register(
    *,
    db: AsyncSession = Depends(deps.get_db),
    auth_service: AuthService = Depends(deps.get_auth_service),
    user_service: UserService = Depends(deps.get_user_service),
    register_in: user_schema.RegisterRequest,
):
    """Crea una cuenta con rol USER y devuelve su token."""
    result = await user_service.register_user(db, register_in.username, register_in.password)
    if not result.ok:
        if result.error.kind is ErrorKind.DUPLICATE_USERNAME:
            return _failed("Username already exists")
        return _failed(f"Registration failed: {result.error.message}")

    session = AuthSession.from_user(result.value)
    logger.info(f"Nuevo registro: '{session.username}'")
    return user_schema.LoginResponse(
        token=auth_service.issue_token(session),
        username=session.username,
        email=session.email,
        message="Registration successful",
    )


@router.get("/validate", response_model=bool)
async def validate_token(
    authorization: Optional[str] = Header(default=None),
    auth_service: AuthService = Depends(deps.get_auth_service),
) -> bool:
    token = extract_bearer_token(authorization)
    return auth_service.validate_token(token) is not None

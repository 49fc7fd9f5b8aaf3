# backend/perfume_catalog/schemas/user_schema.py
"""
Esquemas Pydantic para usuarios y autenticación.

La contraseña nunca forma parte de una respuesta: solo aparece en los
esquemas de entrada y se transforma en hash antes de llegar a la base de datos.
"""

from typing import List, Optional
from pydantic import ConfigDict, EmailStr, Field, field_validator

from perfume_catalog.core.security import Role
from .common_schema import CatalogSchema

# ========================================
# AUTENTICACIÓN
# ========================================

class LoginRequest(CatalogSchema):
    username: str = Field(..., min_length=1, max_length=50)
    password: str = Field(..., min_length=1)


# El registro deriva el email de cuenta de "<username>@example.com"
REGISTER_USERNAME_PATTERN = r"^[A-Za-z0-9_-]+(\.[A-Za-z0-9_-]+)*$"


class RegisterRequest(CatalogSchema):
    username: str = Field(..., min_length=3, max_length=50, pattern=REGISTER_USERNAME_PATTERN)
    password: str = Field(..., min_length=6)


class LoginResponse(CatalogSchema):
    """Respuesta de login y registro. En caso de fallo solo lleva el mensaje."""
    token: Optional[str] = None
    username: Optional[str] = None
    email: Optional[str] = None
    message: str


# ========================================
# GESTIÓN DE USUARIOS
# ========================================

class UserBase(CatalogSchema):
    username: str = Field(..., min_length=3, max_length=50)
    email: EmailStr


class UserCreate(UserBase):
    """Alta de un usuario por un administrador."""
    password: str = Field(..., min_length=6)
    enabled: bool = True
    roles: List[Role] = Field(default_factory=lambda: [Role.USER])

    @field_validator("roles")
    @classmethod
    def roles_not_empty(cls, value):
        if not value:
            raise ValueError("At least one role is required")
        return value


class UserUpdate(UserBase):
    """
    Reemplazo completo de un usuario. Si la contraseña llega vacía
    o ausente, se conserva el hash almacenado.
    """
    password: Optional[str] = None
    enabled: bool = True
    roles: List[Role]

    @field_validator("password")
    @classmethod
    def password_min_length(cls, value):
        if value is not None and value.strip() and len(value) < 6:
            raise ValueError("Password must be at least 6 characters long")
        return value


class AdminCreateRequest(UserBase):
    password: str = Field(..., min_length=6)


class ProfileUpdate(UserBase):
    """Datos de perfil que el propio usuario puede cambiar."""
    pass


class ChangePasswordRequest(CatalogSchema):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=6)


class PasswordResetRequest(CatalogSchema):
    """Cambio de contraseña forzado por un administrador."""
    new_password: str = Field(..., min_length=6)


class UserResponse(CatalogSchema):
    id: int
    username: str
    email: str
    enabled: bool
    roles: List[str]

    model_config = ConfigDict(from_attributes=True)


class ProfileResponse(CatalogSchema):
    username: str
    email: str
    roles: List[str]

    model_config = ConfigDict(from_attributes=True)


class UserActionResponse(CatalogSchema):
    """Resultado de una operación de gestión: mensaje y usuario afectado."""
    message: str
    user: Optional[UserResponse] = None

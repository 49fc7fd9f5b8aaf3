# backend/perfume_catalog/db/models/user_model.py
"""
Se encarga de definir los modelos de usuario y roles para la aplicación.
"""

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from perfume_catalog.db.database import Base

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), nullable=False, unique=True, index=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    hashed_password = Column(String(255), nullable=False)
    enabled = Column(Boolean, nullable=False, default=True)

    # Los roles son valores propios del usuario: se cargan siempre y se borran con él
    role_entries = relationship("UserRole", back_populates="user", lazy="selectin", cascade="all, delete-orphan")

    @property
    def roles(self) -> list:
        return sorted(entry.role for entry in self.role_entries)

    def set_roles(self, roles) -> None:
        wanted = set(roles)
        kept = [entry for entry in self.role_entries if entry.role in wanted]
        present = {entry.role for entry in kept}
        self.role_entries = kept + [UserRole(role=role) for role in sorted(wanted - present)]


class UserRole(Base):
    __tablename__ = "user_roles"

    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    role = Column(String(20), primary_key=True)

    user = relationship("User", back_populates="role_entries")

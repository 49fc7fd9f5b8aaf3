# backend/perfume_catalog/db/models/category_model.py
"""
Se encarga de definir el modelo de categoría para la aplicación.
"""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from perfume_catalog.db.database import Base

class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), nullable=False, unique=True)
    description = Column(String(500), nullable=True)
    color = Column(String(20), nullable=False)

    # Sin cascada ni carga perezosa: las marcas se cargan con consultas explícitas
    # y el borrado lo protege el servicio (y la FK RESTRICT de brands)
    brands = relationship("Brand", back_populates="category", lazy="raise", passive_deletes="all")

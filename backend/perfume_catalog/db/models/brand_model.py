# backend/perfume_catalog/db/models/brand_model.py
"""
Se encarga de definir el modelo de marca para la aplicación.
"""

from sqlalchemy import Column, Integer, String, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from perfume_catalog.db.database import Base

class Brand(Base):
    __tablename__ = "brands"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    description = Column(String(1000), nullable=True)
    image_url = Column(String(500), nullable=True)
    category_id = Column(Integer, ForeignKey("categories.id", ondelete="RESTRICT"), nullable=False, index=True)

    category = relationship("Category", back_populates="brands", lazy="raise")
    perfumes = relationship("Perfume", back_populates="brand", lazy="raise", passive_deletes="all")

    __table_args__ = (
        # El nombre es único dentro de su categoría, no globalmente
        UniqueConstraint('name', 'category_id', name='uq_brand_name_category'),
    )

    @property
    def category_name(self) -> str:
        return self.category.name

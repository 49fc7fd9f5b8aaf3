# backend/perfume_catalog/db/models/perfume_model.py
from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship

from perfume_catalog.db.database import Base

class Perfume(Base):
    __tablename__ = "perfumes"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, index=True)
    number = Column(Integer, nullable=False, index=True)  # Número identificativo, no un precio
    brand_id = Column(Integer, ForeignKey("brands.id", ondelete="RESTRICT"), nullable=False, index=True)

    brand = relationship("Brand", back_populates="perfumes", lazy="raise")

    # Los siguientes atributos requieren brand y brand.category precargados
    @property
    def brand_name(self) -> str:
        return self.brand.name

    @property
    def category_id(self) -> int:
        return self.brand.category_id

    @property
    def category_name(self) -> str:
        return self.brand.category.name

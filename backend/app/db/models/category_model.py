# backend/app/db/models/category_model.py
"""
Se encarga de definir los modelos de categoría y subcategoría para la aplicación.
"""

from sqlalchemy import Column, Integer, String, Text, ForeignKey, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.db.database import Base
from app.db.relations import reconstruct_related


class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    slug = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=True)
    order_index = Column(Integer, nullable=False, default=0)
    image_url = Column(Text, nullable=True)
    icon_url = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    subcategories = relationship("SubCategory", back_populates="category")
    region_mappings = relationship("RegionCategoryMapping", back_populates="category", passive_deletes=True)

    @property
    def regions(self):
        """Regiones asociadas, sin las filas de unión cuyo destino ya no existe."""
        return reconstruct_related(self.region_mappings, "region")


class SubCategory(Base):
    __tablename__ = "sub_categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    slug = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=True)
    order_index = Column(Integer, nullable=False, default=0)
    image_url = Column(Text, nullable=True)
    icon_url = Column(Text, nullable=True)
    category_id = Column(Integer, ForeignKey("categories.id", ondelete="SET NULL"), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    category = relationship("Category", back_populates="subcategories")
    products = relationship("Product", back_populates="subcategory")
    region_mappings = relationship("RegionSubCategoryMapping", back_populates="subcategory", passive_deletes=True)

    @property
    def regions(self):
        return reconstruct_related(self.region_mappings, "region")

# backend/app/db/models/product_model.py
"""
Modelos de producto, sus variantes de color y sus instrucciones de cuidado.
"""

from sqlalchemy import Column, Integer, String, ForeignKey, Text, Numeric, Boolean, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.db.database import Base
from app.db.relations import reconstruct_related


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    slug = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=True)
    subcategory_id = Column(Integer, ForeignKey("sub_categories.id", ondelete="SET NULL"), nullable=True, index=True)
    price = Column(Numeric(10, 2), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    # Atributos descriptivos del tejido
    reference = Column(String(255), nullable=True)
    composition = Column(Text, nullable=True)
    technique = Column(Text, nullable=True)
    width = Column(String(100), nullable=True)
    weight = Column(String(100), nullable=True)
    martindale = Column(String(100), nullable=True)
    repeats = Column(String(100), nullable=True)
    end_use = Column(Text, nullable=True)

    image_url = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    subcategory = relationship("SubCategory", back_populates="products")
    region_mappings = relationship("RegionProductMapping", back_populates="product", passive_deletes=True)
    colors = relationship(
        "ProductColor",
        back_populates="product",
        order_by="ProductColor.id",
        passive_deletes=True,
    )
    care_instructions = relationship(
        "ProductCareInstruction",
        back_populates="product",
        order_by="ProductCareInstruction.id",
        passive_deletes=True,
    )

    @property
    def regions(self):
        return reconstruct_related(self.region_mappings, "region")


class ProductColor(Base):
    __tablename__ = "product_colors"

    id = Column(Integer, primary_key=True, autoincrement=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    color_code = Column(String(50), nullable=True)
    image_url = Column(Text, nullable=True)
    is_default = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    product = relationship("Product", back_populates="colors")


class ProductCareInstruction(Base):
    __tablename__ = "product_care_instructions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True)
    instruction = Column(Text, nullable=False)
    icon = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    product = relationship("Product", back_populates="care_instructions")

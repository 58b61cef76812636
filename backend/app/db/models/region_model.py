# backend/app/db/models/region_model.py
"""
Modelos de región y de las tablas de unión región <-> categoría/subcategoría/producto.

Las tablas de unión no tienen identidad propia más allá del par (izquierda, derecha);
el id autoincremental existe solo porque así está definido el esquema remoto.
"""

from sqlalchemy import Column, Integer, String, Text, Boolean, ForeignKey, DateTime, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.db.database import Base
from app.db.relations import reconstruct_related


class Region(Base):
    __tablename__ = "regions"

    id = Column(Integer, primary_key=True, index=True)
    # name, locale y code son inmutables tras la creación
    name = Column(String(255), nullable=False)
    locale = Column(String(20), nullable=True)
    code = Column(String(20), nullable=False, unique=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    image_url_1 = Column(Text, nullable=True)
    image_url_2 = Column(Text, nullable=True)
    image_url_3 = Column(Text, nullable=True)
    image_url_4 = Column(Text, nullable=True)
    icon_url = Column(Text, nullable=True)

    address_1 = Column(Text, nullable=True)
    address_2 = Column(Text, nullable=True)
    contact_no_1 = Column(String(50), nullable=True)
    contact_no_2 = Column(String(50), nullable=True)
    email_1 = Column(String(255), nullable=True)
    email_2 = Column(String(255), nullable=True)
    whatsapp_no = Column(String(50), nullable=True)
    city = Column(String(255), nullable=True)
    country = Column(String(255), nullable=True)
    map_url = Column(Text, nullable=True)
    enable_business_hours = Column(Boolean, nullable=False, default=False)
    business_hours = Column(Text, nullable=True)

    category_mappings = relationship("RegionCategoryMapping", back_populates="region", passive_deletes=True)

    @property
    def categories(self):
        return reconstruct_related(self.category_mappings, "category")


class RegionCategoryMapping(Base):
    __tablename__ = "region_category_mapping"

    id = Column(Integer, primary_key=True, autoincrement=True)
    region_id = Column(Integer, ForeignKey("regions.id", ondelete="CASCADE"), nullable=False, index=True)
    category_id = Column(Integer, ForeignKey("categories.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    region = relationship("Region", back_populates="category_mappings")
    category = relationship("Category", back_populates="region_mappings")

    __table_args__ = (
        UniqueConstraint('region_id', 'category_id', name='uq_region_category'),
    )


class RegionSubCategoryMapping(Base):
    __tablename__ = "region_subcategory_mapping"

    id = Column(Integer, primary_key=True, autoincrement=True)
    region_id = Column(Integer, ForeignKey("regions.id", ondelete="CASCADE"), nullable=False, index=True)
    subcategory_id = Column(Integer, ForeignKey("sub_categories.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    region = relationship("Region")
    subcategory = relationship("SubCategory", back_populates="region_mappings")

    __table_args__ = (
        UniqueConstraint('region_id', 'subcategory_id', name='uq_region_subcategory'),
    )


class RegionProductMapping(Base):
    __tablename__ = "region_product_mapping"

    id = Column(Integer, primary_key=True, autoincrement=True)
    region_id = Column(Integer, ForeignKey("regions.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    region = relationship("Region")
    product = relationship("Product", back_populates="region_mappings")

    __table_args__ = (
        UniqueConstraint('region_id', 'product_id', name='uq_region_product'),
    )

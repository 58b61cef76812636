# backend/app/schemas/subcategory_schema.py
"""
Esquemas Pydantic para el modelo SubCategory.
"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.core.utils import build_slug

from .category_schema import CategoryBase, CategoryBrief
from .region_schema import RegionBrief


class SubCategoryOption(BaseModel):
    """Opción del desplegable dependiente de la categoría."""
    id: int
    name: str
    category_id: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)


class SubCategoryCreate(CategoryBase):
    name: str
    category_id: int
    region_ids: List[int] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Name is required")
        if not build_slug(value):
            raise ValueError("Name must contain letters or digits")
        return value


class SubCategoryUpdate(CategoryBase):
    name: Optional[str] = None
    order_index: Optional[int] = None
    category_id: Optional[int] = None
    region_ids: Optional[List[int]] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        value = value.strip()
        if not value:
            raise ValueError("Name cannot be empty")
        if not build_slug(value):
            raise ValueError("Name must contain letters or digits")
        return value


class SubCategoryResponse(CategoryBase):
    id: int
    name: str
    slug: str
    category_id: Optional[int] = None
    category: Optional[CategoryBrief] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    regions: List[RegionBrief] = []

    model_config = ConfigDict(from_attributes=True)

# backend/app/schemas/product_schema.py
"""
Esquemas Pydantic para el modelo Product.

Un producto se escribe junto con sus listas dependientes (regiones, colores e
instrucciones de cuidado). Cada lista enviada en una actualización reemplaza a
la existente; una lista omitida no se toca.
"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.core.utils import build_slug

from .category_schema import CategoryBrief
from .region_schema import RegionBrief

# ========================================
# ESQUEMAS AUXILIARES
# ========================================

class ProductColorBase(BaseModel):
    name: str
    color_code: Optional[str] = None
    image_url: Optional[str] = None
    is_default: bool = False


class ProductColorCreate(ProductColorBase):
    pass


class ProductColorResponse(ProductColorBase):
    id: int

    model_config = ConfigDict(from_attributes=True)


class CareInstructionBase(BaseModel):
    instruction: str
    icon: Optional[str] = None


class CareInstructionCreate(CareInstructionBase):
    pass


class CareInstructionResponse(CareInstructionBase):
    id: int

    model_config = ConfigDict(from_attributes=True)


class ProductSubCategory(BaseModel):
    """Subcategoría anidada en el producto, con su categoría padre."""
    id: int
    name: str
    category_id: Optional[int] = None
    category: Optional[CategoryBrief] = None

    model_config = ConfigDict(from_attributes=True)


def _instructions_from_text(value):
    """Permite enviar las instrucciones como lista de textos."""
    if value is None:
        return value
    return [{"instruction": item} if isinstance(item, str) else item for item in value]


# ========================================
# ESQUEMA BASE
# ========================================

class ProductBase(BaseModel):
    """Propiedades comunes compartidas entre esquemas de producto."""
    description: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    is_active: bool = True
    reference: Optional[str] = None
    composition: Optional[str] = None
    technique: Optional[str] = None
    width: Optional[str] = None
    weight: Optional[str] = None
    martindale: Optional[str] = None
    repeats: Optional[str] = None
    end_use: Optional[str] = None
    image_url: Optional[str] = None


# ========================================
# ESQUEMAS PARA OPERACIONES
# ========================================

class ProductCreate(ProductBase):
    name: str
    subcategory_id: int
    region_ids: List[int] = Field(default_factory=list)
    colors: List[ProductColorCreate] = Field(default_factory=list)
    care_instructions: List[CareInstructionCreate] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Name is required")
        if not build_slug(value):
            raise ValueError("Name must contain letters or digits")
        return value

    @field_validator("care_instructions", mode="before")
    @classmethod
    def parse_instructions(cls, value):
        return _instructions_from_text(value)


class ProductUpdate(ProductBase):
    """Esquema para actualizar un producto. Todos los campos son opcionales."""
    name: Optional[str] = None
    subcategory_id: Optional[int] = None
    is_active: Optional[bool] = None
    region_ids: Optional[List[int]] = None
    colors: Optional[List[ProductColorCreate]] = None
    care_instructions: Optional[List[CareInstructionCreate]] = None

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

    @field_validator("care_instructions", mode="before")
    @classmethod
    def parse_instructions(cls, value):
        return _instructions_from_text(value)


# ========================================
# ESQUEMA DE RESPUESTA
# ========================================

class ProductResponse(ProductBase):
    """
    Esquema de respuesta para un producto, incluyendo relaciones anidadas:
    subcategoría (con su categoría), regiones, colores e instrucciones.
    """
    id: int
    name: str
    slug: str
    subcategory_id: Optional[int] = None
    subcategory: Optional[ProductSubCategory] = None
    regions: List[RegionBrief] = []
    colors: List[ProductColorResponse] = []
    care_instructions: List[CareInstructionResponse] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

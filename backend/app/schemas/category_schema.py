# backend/app/schemas/category_schema.py

"""
Esquemas Pydantic para el modelo Category.

Los esquemas definen la estructura de datos que fluye a través de la API:
- Validación automática de tipos de datos
- Serialización/deserialización JSON
- Documentación automática en OpenAPI/Swagger
- Separación entre modelo de base de datos y API

Patrón de esquemas utilizado:
- CategoryBase: Propiedades comunes compartidas
- CategoryCreate: Para crear nuevas categorías (POST)
- CategoryUpdate: Para actualizar categorías existentes (PUT)
- CategoryResponse: Para respuestas de la API (GET)

El slug nunca se recibe del cliente: se deriva del nombre en el servicio.
"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.core.utils import build_slug

from .region_schema import RegionBrief


class CategoryBrief(BaseModel):
    """Referencia corta a una categoría (desplegables, entidades anidadas)."""
    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


# ========================================
# ESQUEMA BASE
# ========================================

class CategoryBase(BaseModel):
    """Propiedades comunes compartidas entre esquemas de categoría."""
    description: Optional[str] = None
    order_index: int = 0
    image_url: Optional[str] = None
    icon_url: Optional[str] = None


# ========================================
# ESQUEMAS PARA OPERACIONES
# ========================================

class CategoryCreate(CategoryBase):
    name: str
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


class CategoryUpdate(CategoryBase):
    """Todos los campos son opcionales. Si llega region_ids, reemplaza las asignaciones."""
    name: Optional[str] = None
    order_index: Optional[int] = None
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


# ========================================
# ESQUEMA DE RESPUESTA
# ========================================

class CategoryResponse(CategoryBase):
    id: int
    name: str
    slug: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    regions: List[RegionBrief] = []

    model_config = ConfigDict(from_attributes=True)

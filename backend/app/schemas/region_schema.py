# backend/app/schemas/region_schema.py

"""
Esquemas Pydantic para el modelo Region.

Patrón de esquemas utilizado:
- RegionBrief: Referencia corta anidada en categorías, subcategorías y productos
- RegionBase: Metadatos editables (contacto, dirección, horario, imágenes)
- RegionCreate: Para crear regiones (POST); name y code son obligatorios
- RegionUpdate: Para actualizar (PUT); no admite name, code ni locale
- RegionResponse: Para respuestas de la API (GET)
"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class RegionBrief(BaseModel):
    """Referencia a una región dentro de otra entidad."""
    id: int
    name: str
    code: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


# ========================================
# ESQUEMA BASE
# ========================================

class RegionBase(BaseModel):
    """Metadatos de la región que pueden cambiar después de crearla."""
    image_url_1: Optional[str] = None
    image_url_2: Optional[str] = None
    image_url_3: Optional[str] = None
    image_url_4: Optional[str] = None
    icon_url: Optional[str] = None
    address_1: Optional[str] = None
    address_2: Optional[str] = None
    contact_no_1: Optional[str] = None
    contact_no_2: Optional[str] = None
    email_1: Optional[str] = None
    email_2: Optional[str] = None
    whatsapp_no: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    map_url: Optional[str] = None
    enable_business_hours: bool = False
    business_hours: Optional[str] = None


# ========================================
# ESQUEMAS PARA OPERACIONES
# ========================================

class RegionCreate(RegionBase):
    name: str
    code: str
    locale: Optional[str] = None
    category_ids: List[int] = Field(default_factory=list)

    @field_validator("name", "code")
    @classmethod
    def required_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Region name and code are required")
        return value


class RegionUpdate(RegionBase):
    """
    Actualización parcial. name, code y locale no forman parte del esquema:
    si llegan en el cuerpo se ignoran.
    """
    enable_business_hours: Optional[bool] = None
    category_ids: Optional[List[int]] = None


# ========================================
# ESQUEMA DE RESPUESTA
# ========================================

class RegionResponse(RegionBase):
    id: int
    name: str
    code: str
    locale: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

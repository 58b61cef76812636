# backend/app/schemas/image_schema.py
"""
Se encarga de definir los esquemas Pydantic de la subida de imágenes al CDN.
"""

from pydantic import BaseModel, ConfigDict, Field


class AuthParameters(BaseModel):
    """Credenciales firmadas de corta duración para una ventana de subida."""
    token: str
    expire: int  # Timestamp Unix en segundos
    signature: str


class UploadedImage(BaseModel):
    """Resultado de una subida: URL canónica e id asignado por el CDN."""
    url: str
    file_id: str = Field(alias="fileId")
    name: str

    model_config = ConfigDict(populate_by_name=True)

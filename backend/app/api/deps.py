# backend/app/api/deps.py
"""
Módulo de dependencias para FastAPI.

Este archivo centraliza todas las dependencias que pueden ser inyectadas
en los endpoints de la API: sesión de base de datos, configuración y el
servicio de subida de imágenes. En las pruebas se sustituyen con
app.dependency_overrides.
"""

from typing import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings, settings
from app.db.database import AsyncSessionLocal
from app.services.upload_service import ImageUploadService


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependencia de FastAPI para obtener una sesión de base de datos asíncrona.
    Se asegura de que la sesión se cierre siempre después de la petición.
    """
    async with AsyncSessionLocal() as session:
        yield session


def get_settings() -> Settings:
    """
    Dependencia de FastAPI para obtener el objeto de configuración.
    """
    return settings


def get_upload_service(app_settings: Settings = Depends(get_settings)) -> ImageUploadService:
    """Servicio de subida construido a partir de la configuración actual."""
    return ImageUploadService.from_settings(app_settings)

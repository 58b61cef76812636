"""
Este archivo contiene la configuración de la aplicación.
"""

from pydantic_settings import BaseSettings
from typing import Optional
from pathlib import Path
import os

# Apunta al directorio 'backend/'
BASE_DIR = Path(__file__).resolve().parent.parent.parent

class Settings(BaseSettings):
    """
    Configuración de la aplicación usando Pydantic BaseSettings.
    Variables sensibles desde .env, defaults seguros para el resto.
    """
    # Configuración general del proyecto
    BASE_DIR: Path = BASE_DIR
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "Catalog Admin API"
    PROJECT_VERSION: str = "0.1.0"

    # Configuración de la base de datos (Postgres gestionado)
    POSTGRES_SERVER: str = os.getenv("POSTGRES_SERVER", "localhost")
    POSTGRES_USER: str = os.getenv("POSTGRES_USER", "postgres")
    POSTGRES_PASSWORD: str = os.getenv("POSTGRES_PASSWORD", "postgres")
    POSTGRES_DB: str = os.getenv("POSTGRES_DB", "postgres")
    POSTGRES_PORT: str = os.getenv("POSTGRES_PORT", "5432")

    # Permite apuntar a otra base (p. ej. la cadena completa del proveedor)
    DATABASE_URL_OVERRIDE: Optional[str] = None

    @property
    def DATABASE_URL(self) -> str:
        """URL de conexión a la base de datos asíncrona."""
        if self.DATABASE_URL_OVERRIDE:
            return self.DATABASE_URL_OVERRIDE
        return f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

    # ImageKit - Claves sensibles del .env
    IMAGEKIT_PUBLIC_KEY: Optional[str] = None
    IMAGEKIT_PRIVATE_KEY: Optional[str] = None
    IMAGEKIT_URL_ENDPOINT: Optional[str] = None

    # ImageKit - Endpoints con defaults
    IMAGEKIT_AUTH_URL: Optional[str] = None
    IMAGEKIT_UPLOAD_URL: str = "https://upload.imagekit.io/api/v1/files/upload"
    IMAGEKIT_API_URL: str = "https://api.imagekit.io/v1"
    IMAGEKIT_TIMEOUT_SECONDS: float = 30.0
    AUTH_TOKEN_TTL_SECONDS: int = 3600

    # Compresión de imágenes
    IMAGE_MAX_DIMENSION: int = 800
    MEDIA_LIBRARY_MAX_DIMENSION: int = 1920
    IMAGE_JPEG_QUALITY: int = 70
    IMAGE_MAX_UPLOAD_BYTES: int = 20 * 1024 * 1024
    IMAGE_MAX_PIXELS: int = 50_000_000

    # Logging - Defaults seguros
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # App Info - Del .env con defaults
    APP_ENVIRONMENT: str = "development"

    # Server - Del .env con defaults
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    @property
    def IMAGEKIT_AUTH_ENDPOINT(self) -> str:
        """URL de la función de firma; por defecto, la propia API."""
        if self.IMAGEKIT_AUTH_URL:
            return self.IMAGEKIT_AUTH_URL
        return f"http://localhost:{self.PORT}{self.API_V1_STR}/imagekit/auth"

    class Config:
        env_file = ".env"
        case_sensitive = False

# Instancia global de la configuración
settings = Settings()

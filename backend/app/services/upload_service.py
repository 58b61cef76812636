# backend/app/services/upload_service.py

"""
Orquestación de la subida de imágenes.

Una subida son tres pasos estrictamente secuenciales:
1. Comprimir la imagen (en un hilo, Pillow es bloqueante)
2. Pedir credenciales firmadas a la función de autenticación
3. Subir los bytes comprimidos al CDN con esas credenciales

Si un paso falla, la operación entera se aborta con su excepción propia y los
pasos siguientes no se ejecutan. No hay reintentos.
"""

import asyncio
import logging
from pathlib import Path
from typing import Optional

import httpx
from pydantic import ValidationError

from app.core.config import Settings
from app.core.exceptions import ImageAuthenticationError
from app.schemas.image_schema import AuthParameters, UploadedImage
from app.services.image_service import compress_image
from app.services.imagekit_client import ImageKitClient

logger = logging.getLogger(__name__)


class ImageUploadService:
    """
    Servicio de subida y borrado de imágenes.

    Args:
        imagekit_client: Cliente del CDN
        auth_url: URL de la función que firma las credenciales
        max_dimension: Límite por defecto del lado mayor
        quality: Calidad JPEG de la recodificación
        max_pixels: Ancho x alto máximo aceptado antes de decodificar
        timeout: Timeout de la llamada de autenticación
        transport: Transporte httpx alternativo (pruebas)
    """

    def __init__(
        self,
        imagekit_client: ImageKitClient,
        auth_url: str,
        max_dimension: int = 800,
        quality: int = 70,
        max_pixels: Optional[int] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.imagekit_client = imagekit_client
        self.auth_url = auth_url
        self.max_dimension = max_dimension
        self.quality = quality
        self.max_pixels = max_pixels
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(
        cls, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None
    ) -> "ImageUploadService":
        client = ImageKitClient(
            public_key=settings.IMAGEKIT_PUBLIC_KEY,
            private_key=settings.IMAGEKIT_PRIVATE_KEY,
            upload_url=settings.IMAGEKIT_UPLOAD_URL,
            api_url=settings.IMAGEKIT_API_URL,
            timeout=settings.IMAGEKIT_TIMEOUT_SECONDS,
            transport=transport,
        )
        return cls(
            imagekit_client=client,
            auth_url=settings.IMAGEKIT_AUTH_ENDPOINT,
            max_dimension=settings.IMAGE_MAX_DIMENSION,
            quality=settings.IMAGE_JPEG_QUALITY,
            max_pixels=settings.IMAGE_MAX_PIXELS,
            timeout=settings.IMAGEKIT_TIMEOUT_SECONDS,
            transport=transport,
        )

    # ========================================
    # PASOS DE LA SUBIDA
    # ========================================

    async def fetch_credentials(self) -> AuthParameters:
        """
        Pide {token, expire, signature} a la función de autenticación.

        Raises:
            ImageAuthenticationError: respuesta no 2xx, error de red o cuerpo inválido
        """
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(self.auth_url)
                response.raise_for_status()
                return AuthParameters.model_validate(response.json())
        except httpx.HTTPStatusError as e:
            logger.error(f"❌ ERROR: La función de autenticación respondió {e.response.status_code}")
            raise ImageAuthenticationError() from e
        except httpx.HTTPError as e:
            logger.error(f"❌ ERROR: No se pudo contactar con la función de autenticación: {e}")
            raise ImageAuthenticationError() from e
        except (ValidationError, ValueError) as e:
            logger.error(f"❌ ERROR: Credenciales de subida con formato inválido: {e}")
            raise ImageAuthenticationError() from e

    async def upload_image(
        self, data: bytes, file_name: str, max_dimension: Optional[int] = None
    ) -> UploadedImage:
        """
        Comprime, obtiene credenciales y sube la imagen.

        El resultado siempre es JPEG, así que el nombre enviado al CDN lleva la
        extensión .jpg ("photo.png" -> "photo.jpg").

        Returns:
            URL canónica e id del fichero en el CDN
        """
        limit = max_dimension or self.max_dimension
        compressed = await asyncio.to_thread(compress_image, data, limit, self.quality, self.max_pixels)
        credentials = await self.fetch_credentials()
        jpeg_name = f"{Path(file_name).stem or 'image'}.jpg"
        uploaded = await self.imagekit_client.upload(compressed, jpeg_name, credentials)
        logger.info(f"🖼️ MEDIA: Subida '{uploaded.name}' ({uploaded.file_id})")
        return uploaded

    async def delete_image(self, file_id: str) -> None:
        await self.imagekit_client.delete(file_id)
        logger.info(f"🗑️ MEDIA: Eliminado fichero {file_id}")

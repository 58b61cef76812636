# backend/app/services/imagekit_client.py
"""
Cliente HTTP del CDN de imágenes (ImageKit).

Solo cubre las dos llamadas que usa el back-office: subida multipart firmada y
borrado por file id. Cada llamada abre su propio httpx.AsyncClient con timeout
acotado.
"""

import logging
from typing import Optional

import httpx

from app.core.exceptions import ImageDeleteError, ImageUploadFailedError
from app.schemas.image_schema import AuthParameters, UploadedImage

logger = logging.getLogger(__name__)


class ImageKitClient:

    def __init__(
        self,
        public_key: Optional[str],
        private_key: Optional[str],
        upload_url: str,
        api_url: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.public_key = public_key
        self.private_key = private_key
        self.upload_url = upload_url
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self._transport)

    async def upload(self, data: bytes, file_name: str, auth: AuthParameters) -> UploadedImage:
        """
        Sube un fichero con las credenciales firmadas.

        Raises:
            ImageUploadFailedError: respuesta no 2xx, error de red o respuesta ilegible
        """
        form = {
            "fileName": file_name,
            "publicKey": self.public_key or "",
            "signature": auth.signature,
            "expire": str(auth.expire),
            "token": auth.token,
            "useUniqueFileName": "true",
        }
        files = {"file": (file_name, data, "image/jpeg")}

        try:
            async with self._client() as client:
                response = await client.post(self.upload_url, data=form, files=files)
                response.raise_for_status()
                return UploadedImage.model_validate(response.json())
        except httpx.HTTPStatusError as e:
            logger.error(f"❌ ERROR: Subida rechazada por el CDN: {e.response.status_code} - {e.response.text}")
            raise ImageUploadFailedError() from e
        except httpx.HTTPError as e:
            logger.error(f"❌ ERROR: Fallo de red subiendo '{file_name}': {e}")
            raise ImageUploadFailedError() from e
        except ValueError as e:
            logger.error(f"❌ ERROR: Respuesta de subida no válida para '{file_name}': {e}")
            raise ImageUploadFailedError() from e

    async def delete(self, file_id: str) -> None:
        """
        Borra un fichero del CDN. No se reintenta.

        Raises:
            ImageDeleteError: respuesta no 2xx o error de red
        """
        url = f"{self.api_url}/files/{file_id}"
        try:
            async with self._client() as client:
                response = await client.delete(url, auth=(self.private_key or "", ""))
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"❌ ERROR: Borrado rechazado para {file_id}: {e.response.status_code} - {e.response.text}")
            raise ImageDeleteError() from e
        except httpx.HTTPError as e:
            logger.error(f"❌ ERROR: Fallo de red borrando {file_id}: {e}")
            raise ImageDeleteError() from e

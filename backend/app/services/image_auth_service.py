# backend/app/services/image_auth_service.py
"""
Firma de credenciales de subida para el CDN de imágenes.

Cada llamada genera una ventana de subida nueva: la expiración es la hora actual
más el TTL configurado y la firma es HMAC-SHA1 de esa expiración con la clave
privada, codificada en base64.
"""

import base64
import hashlib
import hmac
import logging
import time
from typing import Optional

from app.core.exceptions import ConfigurationError
from app.schemas.image_schema import AuthParameters

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 3600


def sign_expire(private_key: str, expire: int) -> str:
    """Firma base64(HMAC-SHA1(private_key, str(expire)))."""
    digest = hmac.new(
        private_key.encode("utf-8"),
        str(expire).encode("utf-8"),
        hashlib.sha1,
    ).digest()
    return base64.b64encode(digest).decode("ascii")


def get_authentication_parameters(
    private_key: Optional[str],
    public_key: Optional[str],
    now: Optional[float] = None,
    ttl: int = DEFAULT_TTL_SECONDS,
) -> AuthParameters:
    """
    Genera {token, expire, signature} para una subida.

    Args:
        private_key: Clave privada del CDN, nunca sale del servidor
        public_key: Clave pública, se devuelve como token
        now: Hora actual en segundos (inyectable para pruebas)
        ttl: Duración de la ventana en segundos

    Raises:
        ConfigurationError: si falta alguna de las dos claves
    """
    if not private_key or not public_key:
        raise ConfigurationError("ImageKit credentials not configured")

    current = time.time() if now is None else now
    expire = int(current) + ttl
    return AuthParameters(
        token=public_key,
        expire=expire,
        signature=sign_expire(private_key, expire),
    )

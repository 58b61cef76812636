"""
Función de autenticación para subidas directas al CDN.

Devuelve {token, expire, signature} firmados con la clave privada. Responde
también al preflight CORS, porque el navegador la llama desde otro origen.
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, PlainTextResponse

from app.api import deps
from app.core.config import Settings
from app.services.image_auth_service import get_authentication_parameters

logger = logging.getLogger(__name__)
router = APIRouter()

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}


@router.options("/auth")
async def auth_preflight() -> PlainTextResponse:
    return PlainTextResponse("ok", headers=CORS_HEADERS)


@router.get("/auth")
async def get_upload_auth(app_settings: Settings = Depends(deps.get_settings)) -> JSONResponse:
    """
    Genera credenciales de subida nuevas en cada llamada.

    Cualquier error (incluida la falta de claves) se devuelve como 500 con
    {"error": mensaje}.
    """
    try:
        params = get_authentication_parameters(
            private_key=app_settings.IMAGEKIT_PRIVATE_KEY,
            public_key=app_settings.IMAGEKIT_PUBLIC_KEY,
            ttl=app_settings.AUTH_TOKEN_TTL_SECONDS,
        )
    except Exception as e:
        logger.error(f"❌ ERROR: No se pudieron generar credenciales de subida: {e}", exc_info=True)
        return JSONResponse(status_code=500, content={"error": str(e)}, headers=CORS_HEADERS)

    return JSONResponse(content=params.model_dump(), headers=CORS_HEADERS)

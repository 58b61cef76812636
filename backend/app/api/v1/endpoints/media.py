"""
Endpoints de la biblioteca de medios: subida y borrado de imágenes en el CDN.

Los errores de la cadena de subida se devuelven como 502 con un mensaje corto;
el detalle completo queda en el log.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status

from app.api import deps
from app.core.config import Settings
from app.core.exceptions import ImageProcessingError
from app.schemas.image_schema import UploadedImage
from app.services.upload_service import ImageUploadService

logger = logging.getLogger(__name__)
router = APIRouter()


async def _read_limited(file: UploadFile, max_bytes: int) -> bytes:
    """
    Lee como mucho max_bytes + 1 bytes; más que eso es un 413.

    Si el tamaño ya se conoce, el fichero se rechaza sin leerlo.
    """
    too_large = file.size is not None and file.size > max_bytes
    data = b""
    if not too_large:
        data = await file.read(max_bytes + 1)
        too_large = len(data) > max_bytes
    if too_large:
        logger.warning(f"⚠️ MEDIA: Rechazado '{file.filename}', supera {max_bytes} bytes")
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"File too large. Limit: {max_bytes} bytes",
        )
    return data


async def _upload(
    upload_service: ImageUploadService, file: UploadFile, max_dimension: int, max_bytes: int
) -> UploadedImage:
    data = await _read_limited(file, max_bytes)
    file_name = file.filename or "image.jpg"
    logger.info(f"🖼️ MEDIA: Subiendo '{file_name}' ({len(data)} bytes, límite {max_dimension}px)")
    try:
        return await upload_service.upload_image(data, file_name, max_dimension=max_dimension)
    except ImageProcessingError as e:
        logger.error(f"❌ ERROR: Falló la subida de '{file_name}': {e.message}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message)


@router.post("/", response_model=UploadedImage, status_code=status.HTTP_201_CREATED)
async def upload_media(
    file: UploadFile = File(...),
    max_dimension: Optional[int] = Form(None, gt=0),
    app_settings: Settings = Depends(deps.get_settings),
    upload_service: ImageUploadService = Depends(deps.get_upload_service),
) -> UploadedImage:
    """Sube una imagen a la biblioteca de medios (1920px por defecto)."""
    return await _upload(
        upload_service,
        file,
        max_dimension or app_settings.MEDIA_LIBRARY_MAX_DIMENSION,
        app_settings.IMAGE_MAX_UPLOAD_BYTES,
    )


@router.post("/catalog", response_model=UploadedImage, status_code=status.HTTP_201_CREATED)
async def upload_catalog_image(
    file: UploadFile = File(...),
    app_settings: Settings = Depends(deps.get_settings),
    upload_service: ImageUploadService = Depends(deps.get_upload_service),
) -> UploadedImage:
    """Sube la imagen de una categoría, subcategoría, producto o color (800px)."""
    return await _upload(
        upload_service, file, app_settings.IMAGE_MAX_DIMENSION, app_settings.IMAGE_MAX_UPLOAD_BYTES
    )


@router.delete("/{file_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_media(
    file_id: str,
    upload_service: ImageUploadService = Depends(deps.get_upload_service),
) -> None:
    """Borra un fichero del CDN. Si el CDN falla, responde 502 y no se reintenta."""
    try:
        await upload_service.delete_image(file_id)
    except ImageProcessingError as e:
        logger.error(f"❌ ERROR: No se pudo borrar {file_id}: {e.message}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message)

# backend/app/services/image_service.py
"""
Compresión de imágenes antes de subirlas al CDN.

La imagen se reduce hasta caber en un cuadrado de max_dimension x max_dimension
conservando la proporción, se convierte a RGB y se recodifica como JPEG.
Nunca se amplía una imagen más pequeña que el límite.

Las dimensiones se comprueban con la cabecera, antes de decodificar los píxeles:
una imagen que supera max_pixels (o el límite de Pillow) se rechaza sin cargarla.
"""

import io
import logging
import warnings
from typing import Optional

from PIL import Image, UnidentifiedImageError

from app.core.exceptions import ImageCompressionError

logger = logging.getLogger(__name__)


def compress_image(
    data: bytes, max_dimension: int, quality: int = 70, max_pixels: Optional[int] = None
) -> bytes:
    """
    Devuelve la imagen comprimida como bytes JPEG.

    Args:
        data: Bytes originales
        max_dimension: Lado máximo del resultado
        quality: Calidad JPEG
        max_pixels: Ancho x alto máximo aceptado (None = solo el límite de Pillow)

    Raises:
        ImageCompressionError: bytes no decodificables o imagen demasiado grande
    """
    try:
        with warnings.catch_warnings():
            warnings.simplefilter("error", Image.DecompressionBombWarning)
            with Image.open(io.BytesIO(data)) as img:
                original_size = img.size
                if max_pixels is not None and original_size[0] * original_size[1] > max_pixels:
                    raise ImageCompressionError(
                        f"Image too large: {original_size[0]}x{original_size[1]} exceeds {max_pixels} pixels"
                    )

                # thumbnail() conserva la proporción y no amplía
                img.thumbnail((max_dimension, max_dimension), Image.Resampling.LANCZOS)

                if img.mode != "RGB":
                    img = img.convert("RGB")

                buffer = io.BytesIO()
                img.save(buffer, format="JPEG", quality=quality, optimize=True)
    except ImageCompressionError as e:
        logger.error(f"❌ ERROR: {e.message}")
        raise
    except (Image.DecompressionBombError, Image.DecompressionBombWarning) as e:
        logger.error(f"❌ ERROR: Imagen rechazada por tamaño: {e}")
        raise ImageCompressionError() from e
    except (UnidentifiedImageError, OSError, ValueError) as e:
        logger.error(f"❌ ERROR: No se pudo comprimir la imagen: {e}")
        raise ImageCompressionError() from e

    compressed = buffer.getvalue()
    logger.debug(
        f"🖼️ MEDIA: {original_size[0]}x{original_size[1]} comprimida de {len(data)} a {len(compressed)} bytes"
    )
    return compressed

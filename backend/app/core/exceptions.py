# backend/app/core/exceptions.py
"""
Excepciones propias del back-office del catálogo.

Los errores de negocio de los endpoints se siguen lanzando como HTTPException
desde los servicios. Estas clases cubren lo que ocurre fuera de la base de datos:
configuración incompleta y la cadena de subida de imágenes
(compresión -> credenciales -> subida), que el endpoint de medios traduce a
una respuesta HTTP con un mensaje corto.
"""


class CatalogError(Exception):
    """Excepción base de la aplicación."""

    default_message = "Catalog error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ConfigurationError(CatalogError):
    """Faltan credenciales o variables de entorno obligatorias."""
    default_message = "Required configuration is missing"


# ========================================
# CADENA DE SUBIDA DE IMÁGENES
# ========================================

class ImageProcessingError(CatalogError):
    """Base de los errores de la cadena de subida. Aborta toda la operación."""
    default_message = "Image processing failed"


class ImageCompressionError(ImageProcessingError):
    default_message = "Failed to compress image"


class ImageAuthenticationError(ImageProcessingError):
    """La función de firma no devolvió credenciales válidas."""
    default_message = "Authentication failed"


class ImageUploadFailedError(ImageProcessingError):
    default_message = "Upload failed"


class ImageDeleteError(ImageProcessingError):
    default_message = "Failed to delete image"

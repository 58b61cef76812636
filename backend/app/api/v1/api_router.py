# backend/app/api/v1/api_router.py
"""
Este archivo contiene el router principal para la API versión 1.

Se encarga de registrar y configurar todos los routers de la versión 1 de la API.
"""

from fastapi import APIRouter

# Importación de routers especializados por dominio de negocio
from app.api.v1.endpoints import (
    categories,
    subcategories,
    products,
    regions,
    messages,
    media,
    image_auth,
)

# ========================================
# CONFIGURACIÓN DEL ROUTER PRINCIPAL V1
# ========================================

api_router_v1 = APIRouter()

# ========================================
# REGISTRO DE ROUTERS POR DOMINIO DE NEGOCIO
# ========================================

# ROUTER DE CATEGORÍAS
api_router_v1.include_router(
    categories.router,              # Router con endpoints de categorías
    prefix="/categories",           # Prefijo: /api/v1/categories
    tags=["Categories"]             # Tag para documentación OpenAPI/Swagger
)

# ROUTER DE SUBCATEGORÍAS
api_router_v1.include_router(
    subcategories.router,
    prefix="/subcategories",
    tags=["SubCategories"]
)

# ROUTER DE PRODUCTOS
# CRUD del catálogo con filtro compuesto (texto, categoría, subcategoría, regiones)
api_router_v1.include_router(
    products.router,
    prefix="/products",
    tags=["Products"]
)

# ROUTER DE REGIONES
api_router_v1.include_router(
    regions.router,
    prefix="/regions",
    tags=["Regions"]
)

# ROUTERS DE MENSAJES Y PANEL
api_router_v1.include_router(
    messages.router,
    prefix="/messages",
    tags=["Messages"]
)
api_router_v1.include_router(
    messages.dashboard_router,
    prefix="/dashboard",
    tags=["Dashboard"]
)

# ROUTER DE MEDIOS
# Subida y borrado de imágenes en el CDN
api_router_v1.include_router(
    media.router,
    prefix="/media",
    tags=["Media"]
)

# FUNCIÓN DE AUTENTICACIÓN DEL CDN
api_router_v1.include_router(
    image_auth.router,
    prefix="/imagekit",
    tags=["ImageKit"]
)

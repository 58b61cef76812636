# backend/app/api/v1/endpoints/products.py

"""
Endpoints REST para operaciones CRUD y filtrado de productos.
"""

from fastapi import APIRouter, Depends, status, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
import logging

from app.api import deps
from app.schemas import product_schema
from app.schemas.filter_schema import ProductFilter
from app.services.product_service import product_service

logger = logging.getLogger(__name__)
router = APIRouter()

@router.post("/", response_model=product_schema.ProductResponse, status_code=status.HTTP_201_CREATED)
async def create_product(
    *,
    db: AsyncSession = Depends(deps.get_db),
    product_in: product_schema.ProductCreate,
) -> product_schema.ProductResponse:
    """Crea un nuevo producto en el catálogo."""
    logger.info(f"🆕 PRODUCTO: Creando producto '{product_in.name}'")
    return await product_service.create_new_product(db=db, product_in=product_in)


@router.put("/{product_id}", response_model=product_schema.ProductResponse)
async def update_product(
    *,
    db: AsyncSession = Depends(deps.get_db),
    product_id: int,
    product_in: product_schema.ProductUpdate,
) -> product_schema.ProductResponse:
    """Actualiza un producto existente."""
    logger.info(f"🔄 PRODUCTO: Actualizando producto {product_id}")
    return await product_service.update_existing_product(db=db, product_id=product_id, product_in=product_in)


@router.delete("/{product_id}", response_model=product_schema.ProductResponse)
async def delete_product(
    *,
    db: AsyncSession = Depends(deps.get_db),
    product_id: int,
) -> product_schema.ProductResponse:
    """Elimina un producto junto con sus colores, instrucciones y regiones."""
    return await product_service.delete_existing_product(db=db, product_id=product_id)


@router.get("/{product_id}", response_model=product_schema.ProductResponse)
async def read_product(
    *,
    db: AsyncSession = Depends(deps.get_db),
    product_id: int,
) -> product_schema.ProductResponse:
    """Obtiene los detalles completos de un producto específico."""
    return await product_service.get_product_by_id(db=db, product_id=product_id)


@router.get("/", response_model=List[product_schema.ProductResponse])
async def read_products(
    db: AsyncSession = Depends(deps.get_db),
    search: Optional[str] = Query(None, description="Texto a buscar en nombre, descripción o referencia"),
    region_ids: List[int] = Query(default=[], description="Regiones seleccionadas (basta con una)"),
    category_id: Optional[int] = Query(None, description="Filtrar por categoría"),
    subcategory_id: Optional[int] = Query(None, description="Filtrar por subcategoría"),
) -> List[product_schema.ProductResponse]:
    """
    Obtiene la lista de productos con los cuatro filtros combinados.

    Si subcategory_id no pertenece a category_id, se ignora la subcategoría.
    """
    criteria = ProductFilter(
        search_query=search,
        region_ids=region_ids,
        category_id=category_id,
        subcategory_id=subcategory_id,
    )
    return await product_service.get_all_products_with_details(db, criteria)

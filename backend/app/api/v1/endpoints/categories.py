"""
Endpoints REST para operaciones CRUD de categorías.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.schemas import category_schema
from app.schemas.filter_schema import CategoryFilter
from app.services.category_service import category_service

router = APIRouter()


@router.post("/", response_model=category_schema.CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    *,
    db: AsyncSession = Depends(deps.get_db),
    category_in: category_schema.CategoryCreate
) -> category_schema.CategoryResponse:
    """Crea una nueva categoría en el sistema."""
    return await category_service.create_new_category(db=db, category_in=category_in)


@router.get("/options", response_model=List[category_schema.CategoryBrief])
async def read_category_options(db: AsyncSession = Depends(deps.get_db)) -> List[category_schema.CategoryBrief]:
    """Lista id/nombre de todas las categorías para los desplegables."""
    return await category_service.get_category_options(db)


@router.put("/{category_id}", response_model=category_schema.CategoryResponse)
async def update_category(
    *,
    db: AsyncSession = Depends(deps.get_db),
    category_id: int,
    category_in: category_schema.CategoryUpdate,
) -> category_schema.CategoryResponse:
    """Actualiza una categoría existente."""
    return await category_service.update_existing_category(db=db, category_id=category_id, category_in=category_in)


@router.delete("/{category_id}", response_model=category_schema.CategoryResponse)
async def delete_category(
    *,
    db: AsyncSession = Depends(deps.get_db),
    category_id: int,
) -> category_schema.CategoryResponse:
    """Elimina una categoría del sistema."""
    return await category_service.delete_existing_category(db=db, category_id=category_id)


@router.get("/{category_id}", response_model=category_schema.CategoryResponse)
async def read_category(
    *,
    db: AsyncSession = Depends(deps.get_db),
    category_id: int,
) -> category_schema.CategoryResponse:
    """Obtiene los detalles de una categoría específica por su ID."""
    return await category_service.get_category_by_id(db=db, category_id=category_id)


@router.get("/", response_model=List[category_schema.CategoryResponse])
async def read_categories(
    db: AsyncSession = Depends(deps.get_db),
    search: Optional[str] = None,
    region_ids: List[int] = Query(default=[]),
) -> List[category_schema.CategoryResponse]:
    """Obtiene la lista de categorías filtrada por texto y regiones."""
    criteria = CategoryFilter(search_query=search, region_ids=region_ids)
    return await category_service.get_all_categories(db, criteria)

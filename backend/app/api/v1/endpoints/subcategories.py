"""
Endpoints REST para operaciones CRUD de subcategorías.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.schemas import subcategory_schema
from app.schemas.filter_schema import SubCategoryFilter
from app.services.subcategory_service import subcategory_service

router = APIRouter()


@router.post("/", response_model=subcategory_schema.SubCategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_subcategory(
    *,
    db: AsyncSession = Depends(deps.get_db),
    subcategory_in: subcategory_schema.SubCategoryCreate
) -> subcategory_schema.SubCategoryResponse:
    """Crea una subcategoría dentro de una categoría existente."""
    return await subcategory_service.create_new_subcategory(db=db, subcategory_in=subcategory_in)


@router.get("/options", response_model=List[subcategory_schema.SubCategoryOption])
async def read_subcategory_options(
    db: AsyncSession = Depends(deps.get_db),
    category_id: Optional[int] = None,
) -> List[subcategory_schema.SubCategoryOption]:
    """
    Opciones del desplegable de subcategoría.

    Con category_id devuelve solo las subcategorías de esa categoría; sin él,
    todas.
    """
    return await subcategory_service.get_subcategory_options(db, category_id=category_id)


@router.put("/{subcategory_id}", response_model=subcategory_schema.SubCategoryResponse)
async def update_subcategory(
    *,
    db: AsyncSession = Depends(deps.get_db),
    subcategory_id: int,
    subcategory_in: subcategory_schema.SubCategoryUpdate,
) -> subcategory_schema.SubCategoryResponse:
    return await subcategory_service.update_existing_subcategory(
        db=db, subcategory_id=subcategory_id, subcategory_in=subcategory_in
    )


@router.delete("/{subcategory_id}", response_model=subcategory_schema.SubCategoryResponse)
async def delete_subcategory(
    *,
    db: AsyncSession = Depends(deps.get_db),
    subcategory_id: int,
) -> subcategory_schema.SubCategoryResponse:
    return await subcategory_service.delete_existing_subcategory(db=db, subcategory_id=subcategory_id)


@router.get("/{subcategory_id}", response_model=subcategory_schema.SubCategoryResponse)
async def read_subcategory(
    *,
    db: AsyncSession = Depends(deps.get_db),
    subcategory_id: int,
) -> subcategory_schema.SubCategoryResponse:
    return await subcategory_service.get_subcategory_by_id(db=db, subcategory_id=subcategory_id)


@router.get("/", response_model=List[subcategory_schema.SubCategoryResponse])
async def read_subcategories(
    db: AsyncSession = Depends(deps.get_db),
    search: Optional[str] = None,
    region_ids: List[int] = Query(default=[]),
    category_id: Optional[int] = None,
) -> List[subcategory_schema.SubCategoryResponse]:
    """Lista de subcategorías filtrada por texto, regiones y categoría."""
    criteria = SubCategoryFilter(search_query=search, region_ids=region_ids, category_id=category_id)
    return await subcategory_service.get_all_subcategories(db, criteria)

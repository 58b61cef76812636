"""
Endpoints REST para regiones.

Las regiones no se eliminan desde la API.
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.schemas.category_schema import CategoryBrief
from app.schemas.region_schema import RegionCreate, RegionResponse, RegionUpdate
from app.services.region_service import region_service

router = APIRouter()


@router.post("/", response_model=RegionResponse, status_code=status.HTTP_201_CREATED)
async def create_region(
    *,
    db: AsyncSession = Depends(deps.get_db),
    region_in: RegionCreate,
) -> RegionResponse:
    """Crea una región. name y code son obligatorios y code debe ser único."""
    return await region_service.create_new_region(db, region_in)


@router.get("/", response_model=List[RegionResponse])
async def read_regions(db: AsyncSession = Depends(deps.get_db)) -> List[RegionResponse]:
    return await region_service.get_all_regions(db)


@router.get("/{region_id}", response_model=RegionResponse)
async def read_region(*, db: AsyncSession = Depends(deps.get_db), region_id: int) -> RegionResponse:
    return await region_service.get_region_by_id(db, region_id)


@router.get("/{region_id}/categories", response_model=List[CategoryBrief])
async def read_region_categories(*, db: AsyncSession = Depends(deps.get_db), region_id: int) -> List[CategoryBrief]:
    """Categorías asignadas a la región."""
    return await region_service.get_region_categories(db, region_id)


@router.put("/{region_id}", response_model=RegionResponse)
async def update_region(
    *,
    db: AsyncSession = Depends(deps.get_db),
    region_id: int,
    region_in: RegionUpdate,
) -> RegionResponse:
    """Actualiza los metadatos de una región (name, code y locale son fijos)."""
    return await region_service.update_existing_region(db, region_id, region_in)

# backend/app/services/region_service.py
"""
Servicio para operaciones de negocio relacionadas con regiones.

Reglas principales:
- name y code son obligatorios al crear (validado por el esquema)
- name, code y locale no cambian después de la creación
- code es único
- Las categorías asignadas a una región se reemplazan en bloque
"""

import logging
from typing import List

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette import status

from app.crud import region_crud
from app.db.models.category_model import Category
from app.db.models.region_model import Region, RegionCategoryMapping
from app.schemas.category_schema import CategoryBrief
from app.schemas.region_schema import RegionCreate, RegionResponse, RegionUpdate

logger = logging.getLogger(__name__)

# Campos que no se pueden modificar tras la creación
IMMUTABLE_FIELDS = {"name", "code", "locale"}


class RegionService:
    """
    Servicio para operaciones de negocio relacionadas con regiones.
    """

    # ========================================
    # VALIDACIONES COMPARTIDAS
    # ========================================

    async def validate_region_ids(self, db: AsyncSession, region_ids: List[int]) -> None:
        """Lanza 404 si alguno de los ids no corresponde a una región existente."""
        missing = await region_crud.find_missing_ids(db, Region, region_ids)
        if missing:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Regions not found: {', '.join(str(i) for i in missing)}"
            )

    async def _validate_category_ids(self, db: AsyncSession, category_ids: List[int]) -> None:
        missing = await region_crud.find_missing_ids(db, Category, category_ids)
        if missing:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Categories not found: {', '.join(str(i) for i in missing)}"
            )

    # ========================================
    # OPERACIONES DE CONSULTA
    # ========================================

    async def get_all_regions(self, db: AsyncSession) -> List[RegionResponse]:
        regions = await region_crud.get_regions(db)
        return [RegionResponse.model_validate(region) for region in regions]

    async def get_region_by_id(self, db: AsyncSession, region_id: int) -> RegionResponse:
        region = await region_crud.get_region(db, region_id)
        if not region:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Region with ID {region_id} not found.")
        return RegionResponse.model_validate(region)

    async def get_region_categories(self, db: AsyncSession, region_id: int) -> List[CategoryBrief]:
        """Categorías asignadas a la región (las filas huérfanas se descartan)."""
        region = await region_crud.get_region(db, region_id)
        if not region:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Region with ID {region_id} not found.")
        return [CategoryBrief.model_validate(category) for category in region.categories]

    # ========================================
    # OPERACIONES DE ESCRITURA CON LÓGICA DE NEGOCIO
    # ========================================

    async def create_new_region(self, db: AsyncSession, region_in: RegionCreate) -> RegionResponse:
        if await region_crud.get_region_by_code(db, region_in.code):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"Region with code '{region_in.code}' already exists."
            )
        await self._validate_category_ids(db, region_in.category_ids)

        try:
            db_region = await region_crud.create_region(db, region_in.model_dump(exclude={"category_ids"}))
            await region_crud.replace_mappings(
                db, RegionCategoryMapping, "region_id", db_region.id, "category_id", region_in.category_ids
            )
            await db.commit()
        except SQLAlchemyError:
            await db.rollback()
            logger.error(f"❌ ERROR: No se pudo crear la región '{region_in.code}'", exc_info=True)
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error creating region")

        logger.info(f"✅ REGIÓN: Creada '{region_in.code}' con id {db_region.id}")
        return await self.get_region_by_id(db, db_region.id)

    async def update_existing_region(self, db: AsyncSession, region_id: int, region_in: RegionUpdate) -> RegionResponse:
        """
        Actualiza los metadatos de una región.

        name, code y locale nunca forman parte del payload de actualización.
        """
        db_region = await region_crud.get_region(db, region_id)
        if not db_region:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Region with ID {region_id} not found.")

        update_data = region_in.model_dump(exclude_unset=True, exclude={"category_ids"})
        for field in IMMUTABLE_FIELDS:
            update_data.pop(field, None)
        if update_data.get("enable_business_hours") is None:
            update_data.pop("enable_business_hours", None)

        category_ids = region_in.category_ids
        if category_ids is not None:
            await self._validate_category_ids(db, category_ids)

        try:
            await region_crud.update_region(db, db_region, update_data)
            if category_ids is not None:
                await region_crud.replace_mappings(
                    db, RegionCategoryMapping, "region_id", region_id, "category_id", category_ids
                )
            await db.commit()
        except SQLAlchemyError:
            await db.rollback()
            logger.error(f"❌ ERROR: No se pudo actualizar la región {region_id}", exc_info=True)
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error updating region")

        logger.info(f"🔄 REGIÓN: Actualizada región {region_id}")
        return await self.get_region_by_id(db, region_id)

# ========================================
# INSTANCIA SINGLETON DEL SERVICIO
# ========================================

region_service = RegionService()

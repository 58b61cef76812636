# backend/app/services/subcategory_service.py
"""
Servicio para operaciones de negocio relacionadas con subcategorías.

Además de las reglas compartidas con las categorías (slug, regiones), una
subcategoría debe pertenecer a una categoría existente.
"""

import logging
from typing import List, Optional

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette import status

from app.core.utils import build_slug
from app.crud import category_crud, subcategory_crud
from app.schemas import subcategory_schema
from app.schemas.filter_schema import SubCategoryFilter
from app.services.filter_service import filter_subcategories
from app.services.region_service import region_service

logger = logging.getLogger(__name__)


class SubCategoryService:

    async def _ensure_category_exists(self, db: AsyncSession, category_id: int) -> None:
        if not await category_crud.get_category(db, category_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Category with id {category_id} not found."
            )

    # ========================================
    # OPERACIONES DE CONSULTA
    # ========================================

    async def get_subcategory_by_id(self, db: AsyncSession, subcategory_id: int) -> subcategory_schema.SubCategoryResponse:
        subcategory = await subcategory_crud.get_subcategory(db, subcategory_id)
        if not subcategory:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"SubCategory with ID {subcategory_id} not found."
            )
        return subcategory_schema.SubCategoryResponse.model_validate(subcategory)

    async def get_all_subcategories(
        self, db: AsyncSession, criteria: SubCategoryFilter
    ) -> List[subcategory_schema.SubCategoryResponse]:
        """
        Lista filtrada de subcategorías.

        La búsqueda de texto incluye el nombre de la categoría padre, de modo que
        buscar "rug" devuelve todas las subcategorías de la categoría "Rugs".
        """
        subcategories = await subcategory_crud.get_subcategories(db)
        responses = [subcategory_schema.SubCategoryResponse.model_validate(sc) for sc in subcategories]
        return filter_subcategories(responses, criteria)

    async def get_subcategory_options(
        self, db: AsyncSession, category_id: Optional[int] = None
    ) -> List[subcategory_schema.SubCategoryOption]:
        """Opciones del desplegable de subcategoría, recalculadas según la categoría."""
        subcategories = await subcategory_crud.get_subcategory_options(db, category_id=category_id)
        return [subcategory_schema.SubCategoryOption.model_validate(sc) for sc in subcategories]

    # ========================================
    # OPERACIONES DE ESCRITURA CON LÓGICA DE NEGOCIO
    # ========================================

    async def create_new_subcategory(
        self, db: AsyncSession, subcategory_in: subcategory_schema.SubCategoryCreate
    ) -> subcategory_schema.SubCategoryResponse:
        await self._ensure_category_exists(db, subcategory_in.category_id)
        await region_service.validate_region_ids(db, subcategory_in.region_ids)

        data = subcategory_in.model_dump(exclude={"region_ids"})
        data["slug"] = build_slug(subcategory_in.name)

        try:
            db_subcategory = await subcategory_crud.create_subcategory(db, data, subcategory_in.region_ids)
            await db.commit()
        except SQLAlchemyError:
            await db.rollback()
            logger.error(f"❌ ERROR: No se pudo crear la subcategoría '{subcategory_in.name}'", exc_info=True)
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error saving subcategory")

        logger.info(f"✅ SUBCATEGORÍA: Creada '{db_subcategory.name}' en categoría {db_subcategory.category_id}")
        return await self.get_subcategory_by_id(db, db_subcategory.id)

    async def update_existing_subcategory(
        self, db: AsyncSession, subcategory_id: int, subcategory_in: subcategory_schema.SubCategoryUpdate
    ) -> subcategory_schema.SubCategoryResponse:
        db_subcategory = await subcategory_crud.get_subcategory(db, subcategory_id)
        if not db_subcategory:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"SubCategory with ID {subcategory_id} not found."
            )

        update_data = subcategory_in.model_dump(exclude_unset=True, exclude={"region_ids"})
        for field in ("name", "order_index", "category_id"):
            if update_data.get(field) is None:
                update_data.pop(field, None)
        if "name" in update_data:
            update_data["slug"] = build_slug(update_data["name"])
        if "category_id" in update_data:
            await self._ensure_category_exists(db, update_data["category_id"])

        region_ids = subcategory_in.region_ids
        if region_ids is not None:
            await region_service.validate_region_ids(db, region_ids)

        try:
            await subcategory_crud.update_subcategory(db, db_subcategory, update_data, region_ids)
            await db.commit()
        except SQLAlchemyError:
            await db.rollback()
            logger.error(f"❌ ERROR: No se pudo actualizar la subcategoría {subcategory_id}", exc_info=True)
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error saving subcategory")

        logger.info(f"🔄 SUBCATEGORÍA: Actualizada subcategoría {subcategory_id}")
        return await self.get_subcategory_by_id(db, subcategory_id)

    async def delete_existing_subcategory(
        self, db: AsyncSession, subcategory_id: int
    ) -> subcategory_schema.SubCategoryResponse:
        deleted = await self.get_subcategory_by_id(db, subcategory_id)

        try:
            await subcategory_crud.delete_subcategory(db, subcategory_id)
            await db.commit()
        except SQLAlchemyError:
            await db.rollback()
            logger.error(f"❌ ERROR: No se pudo eliminar la subcategoría {subcategory_id}", exc_info=True)
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error deleting subcategory")

        logger.info(f"🗑️ SUBCATEGORÍA: Eliminada subcategoría {subcategory_id}")
        return deleted


subcategory_service = SubCategoryService()

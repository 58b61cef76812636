# backend/app/services/category_service.py
"""
Servicio para operaciones de negocio relacionadas con categorías.

Este servicio se encarga de gestionar la lógica de negocio para el manejo de categorías:
derivación del slug, validación de las regiones asignadas, reemplazo de asignaciones
y relectura completa de la entidad tras cada escritura.
"""

import logging
from typing import List

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette import status

from app.core.utils import build_slug
from app.crud import category_crud
from app.schemas import category_schema
from app.schemas.filter_schema import CategoryFilter
from app.services.filter_service import filter_categories
from app.services.region_service import region_service

logger = logging.getLogger(__name__)


class CategoryService:
    """
    Servicio para operaciones de negocio relacionadas con categorías.

    Características:
    - El slug se recalcula a partir del nombre, nunca se acepta del cliente
    - Las regiones se validan antes de escribir
    - Las asignaciones región-categoría se borran antes que la categoría
    - Filtrado en memoria por texto y regiones sobre la lista completa
    """

    # ========================================
    # OPERACIONES DE CONSULTA
    # ========================================

    async def get_category_by_id(self, db: AsyncSession, category_id: int) -> category_schema.CategoryResponse:
        """
        Obtiene una categoría por su ID, con sus regiones reconstruidas.

        Raises:
            HTTPException 404 si la categoría no existe
        """
        category = await category_crud.get_category(db, category_id=category_id)
        if not category:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Category with ID {category_id} not found.")
        return category_schema.CategoryResponse.model_validate(category)

    async def get_all_categories(
        self, db: AsyncSession, criteria: CategoryFilter
    ) -> List[category_schema.CategoryResponse]:
        """
        Obtiene todas las categorías y aplica los filtros de texto y región.

        Args:
            db: Sesión de SQLAlchemy
            criteria: Búsqueda (name/description) y regiones seleccionadas

        Returns:
            Lista ordenada por order_index
        """
        categories = await category_crud.get_categories(db)
        responses = [category_schema.CategoryResponse.model_validate(c) for c in categories]
        return filter_categories(responses, criteria)

    async def get_category_options(self, db: AsyncSession) -> List[category_schema.CategoryBrief]:
        categories = await category_crud.get_category_options(db)
        return [category_schema.CategoryBrief.model_validate(c) for c in categories]

    # ========================================
    # OPERACIONES DE ESCRITURA CON LÓGICA DE NEGOCIO
    # ========================================

    async def create_new_category(
        self, db: AsyncSession, category_in: category_schema.CategoryCreate
    ) -> category_schema.CategoryResponse:
        """
        Crea una nueva categoría con su slug y sus asignaciones de región.

        Args:
            db: Sesión de SQLAlchemy
            category_in: Esquema Pydantic con datos de la nueva categoría

        Returns:
            La categoría recién creada, releída desde la base de datos
        """
        await region_service.validate_region_ids(db, category_in.region_ids)

        data = category_in.model_dump(exclude={"region_ids"})
        data["slug"] = build_slug(category_in.name)

        try:
            db_category = await category_crud.create_category(db, data, category_in.region_ids)
            await db.commit()
        except SQLAlchemyError:
            await db.rollback()
            logger.error(f"❌ ERROR: No se pudo crear la categoría '{category_in.name}'", exc_info=True)
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error saving category")

        logger.info(f"✅ CATEGORÍA: Creada '{db_category.name}' ({db_category.slug})")
        return await self.get_category_by_id(db, db_category.id)

    async def update_existing_category(
        self, db: AsyncSession, category_id: int, category_in: category_schema.CategoryUpdate
    ) -> category_schema.CategoryResponse:
        """
        Actualiza una categoría existente.

        Un cambio de nombre recalcula el slug. Si el cuerpo trae region_ids, las
        asignaciones se reemplazan por completo (una lista vacía las elimina todas).
        """
        db_category = await category_crud.get_category(db, category_id)
        if not db_category:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Category with ID {category_id} not found.")

        update_data = category_in.model_dump(exclude_unset=True, exclude={"region_ids"})
        for field in ("name", "order_index"):
            if update_data.get(field) is None:
                update_data.pop(field, None)
        if "name" in update_data:
            update_data["slug"] = build_slug(update_data["name"])

        region_ids = category_in.region_ids
        if region_ids is not None:
            await region_service.validate_region_ids(db, region_ids)

        try:
            await category_crud.update_category(db, db_category, update_data, region_ids)
            await db.commit()
        except SQLAlchemyError:
            await db.rollback()
            logger.error(f"❌ ERROR: No se pudo actualizar la categoría {category_id}", exc_info=True)
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error saving category")

        logger.info(f"🔄 CATEGORÍA: Actualizada categoría {category_id}")
        return await self.get_category_by_id(db, category_id)

    async def delete_existing_category(self, db: AsyncSession, category_id: int) -> category_schema.CategoryResponse:
        """
        Elimina una categoría junto con sus asignaciones de región.

        Returns:
            La categoría tal como estaba antes de eliminarla
        """
        deleted = await self.get_category_by_id(db, category_id)

        try:
            await category_crud.delete_category(db, category_id=category_id)
            await db.commit()
        except SQLAlchemyError:
            await db.rollback()
            logger.error(f"❌ ERROR: No se pudo eliminar la categoría {category_id}", exc_info=True)
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error deleting category")

        logger.info(f"🗑️ CATEGORÍA: Eliminada categoría {category_id}")
        return deleted

# ========================================
# INSTANCIA SINGLETON DEL SERVICIO
# ========================================

# Instancia única del servicio para uso en endpoints
category_service = CategoryService()

# backend/app/services/product_service.py

"""
Capa de servicios para operaciones de negocio relacionadas con productos.

Esta capa implementa el patrón Service Layer para el dominio de productos,
orquestando operaciones CRUD que afectan a varias tablas a la vez.

Responsabilidades principales:
- Validar que la subcategoría y las regiones referenciadas existen
- Derivar el slug del nombre
- Mantener como mucho un color por defecto por producto antes de persistir
- Reemplazar en bloque regiones, colores e instrucciones de cuidado
- Aplicar el filtro compuesto (texto x categoría x subcategoría x regiones)

Características del dominio de productos:
- Pertenencia obligatoria a una subcategoría
- Asociación many-to-many con regiones
- Lista ordenada de variantes de color y de instrucciones de cuidado
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette import status

from app.core.utils import build_slug
from app.crud import product_crud, subcategory_crud
from app.schemas import product_schema
from app.schemas.filter_schema import ProductFilter
from app.services.filter_service import ensure_single_default, filter_products
from app.services.region_service import region_service

# Configurar logger
logger = logging.getLogger(__name__)

# Campos que no admiten NULL en la base de datos
_NOT_NULL_FIELDS = ("name", "subcategory_id", "is_active")


class ProductService:
    """
    Servicio para operaciones de negocio relacionadas con productos.

    Todas las escrituras de un producto (fila principal, regiones, colores,
    instrucciones) se confirman en una sola transacción y después se relee el
    producto completo.
    """

    # ========================================
    # VALIDACIONES
    # ========================================

    async def _ensure_subcategory_exists(self, db: AsyncSession, subcategory_id: int) -> None:
        if not await subcategory_crud.get_subcategory(db, subcategory_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"SubCategory with id {subcategory_id} not found."
            )

    @staticmethod
    def _color_rows(colors: Optional[List[product_schema.ProductColorCreate]]) -> Optional[List[Dict[str, Any]]]:
        if colors is None:
            return None
        return ensure_single_default([color.model_dump() for color in colors])

    @staticmethod
    def _instruction_rows(
        instructions: Optional[List[product_schema.CareInstructionCreate]]
    ) -> Optional[List[Dict[str, Any]]]:
        if instructions is None:
            return None
        return [item.model_dump() for item in instructions]

    # ========================================
    # OPERACIONES DE CONSULTA
    # ========================================

    async def get_product_by_id(self, db: AsyncSession, product_id: int) -> product_schema.ProductResponse:
        """Obtiene los detalles completos de un producto."""
        product = await product_crud.get_product(db, product_id)
        if not product:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Product with ID {product_id} not found.")
        return product_schema.ProductResponse.model_validate(product)

    async def get_all_products_with_details(
        self, db: AsyncSession, criteria: ProductFilter
    ) -> List[product_schema.ProductResponse]:
        """
        Obtiene la lista filtrada de productos.

        Si la subcategoría seleccionada no pertenece a la categoría seleccionada,
        se descarta antes de filtrar (equivale a haber cambiado de categoría).
        """
        if criteria.category_id is not None and criteria.subcategory_id is not None:
            options = await subcategory_crud.get_subcategory_options(db)
            criteria = criteria.normalized(options)

        products = await product_crud.get_products(db)
        responses = [product_schema.ProductResponse.model_validate(p) for p in products]
        filtered = filter_products(responses, criteria)
        logger.debug(f"📋 PRODUCTOS: {len(filtered)} de {len(responses)} tras aplicar filtros")
        return filtered

    # ========================================
    # OPERACIONES DE ESCRITURA
    # ========================================

    async def create_new_product(
        self, db: AsyncSession, product_in: product_schema.ProductCreate
    ) -> product_schema.ProductResponse:
        """
        Crea un producto con sus regiones, colores e instrucciones de cuidado.
        """
        await self._ensure_subcategory_exists(db, product_in.subcategory_id)
        await region_service.validate_region_ids(db, product_in.region_ids)

        data = product_in.model_dump(exclude={"region_ids", "colors", "care_instructions"})
        data["slug"] = build_slug(product_in.name)

        try:
            db_product = await product_crud.create_product(db, data)
            await product_crud.replace_product_relations(
                db,
                db_product.id,
                region_ids=product_in.region_ids,
                colors=self._color_rows(product_in.colors),
                care_instructions=self._instruction_rows(product_in.care_instructions),
            )
            await db.commit()
        except SQLAlchemyError:
            await db.rollback()
            logger.error(f"❌ ERROR: Error saving product '{product_in.name}'", exc_info=True)
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error saving product")

        logger.info(f"✅ PRODUCTO: Creado exitosamente '{db_product.name}' con id {db_product.id}")
        return await self.get_product_by_id(db, db_product.id)

    async def update_existing_product(
        self, db: AsyncSession, product_id: int, product_in: product_schema.ProductUpdate
    ) -> product_schema.ProductResponse:
        """
        Actualiza un producto existente.

        Las listas enviadas (region_ids, colors, care_instructions) reemplazan a
        las actuales; las omitidas se conservan.
        """
        db_product = await product_crud.get_product(db, product_id)
        if not db_product:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Product with ID {product_id} not found.")

        update_data = product_in.model_dump(
            exclude_unset=True, exclude={"region_ids", "colors", "care_instructions"}
        )
        for field in _NOT_NULL_FIELDS:
            if update_data.get(field) is None:
                update_data.pop(field, None)
        if "name" in update_data:
            update_data["slug"] = build_slug(update_data["name"])
        if "subcategory_id" in update_data:
            await self._ensure_subcategory_exists(db, update_data["subcategory_id"])
        if product_in.region_ids is not None:
            await region_service.validate_region_ids(db, product_in.region_ids)

        try:
            await product_crud.update_product(db, db_product, update_data)
            await product_crud.replace_product_relations(
                db,
                product_id,
                region_ids=product_in.region_ids,
                colors=self._color_rows(product_in.colors),
                care_instructions=self._instruction_rows(product_in.care_instructions),
            )
            await db.commit()
        except SQLAlchemyError:
            await db.rollback()
            logger.error(f"❌ ERROR: No se pudo actualizar el producto {product_id}", exc_info=True)
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error saving product")

        logger.info(f"✅ PRODUCTO: Actualizado exitosamente producto {product_id}")
        return await self.get_product_by_id(db, product_id)

    async def delete_existing_product(self, db: AsyncSession, product_id: int) -> product_schema.ProductResponse:
        """Elimina un producto y todas sus filas dependientes."""
        deleted = await self.get_product_by_id(db, product_id)

        try:
            await product_crud.delete_product(db, product_id)
            await db.commit()
        except SQLAlchemyError:
            await db.rollback()
            logger.error(f"❌ ERROR: Error deleting product {product_id}", exc_info=True)
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error deleting product")

        logger.info(f"🗑️ PRODUCTO: Eliminado producto {product_id}")
        return deleted

# ========================================
# INSTANCIA SINGLETON DEL SERVICIO
# ========================================

product_service = ProductService()

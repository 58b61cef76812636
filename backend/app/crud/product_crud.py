# backend/app/crud/product_crud.py

"""
Operaciones CRUD para el modelo Product.

Este módulo implementa las operaciones de Create, Read, Update, Delete para productos,
siendo el corazón del catálogo. Maneja las relaciones con subcategorías, regiones,
colores e instrucciones de cuidado.

Estrategias implementadas:
- selectinload() para cargar todas las relaciones de un producto sin consultas N+1
- Reemplazo completo de listas dependientes (borrar + insertar), igual que las
  asignaciones de región
- Flush sin commit: el servicio confirma toda la operación de una vez
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import select, delete, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.db.models.category_model import SubCategory
from app.db.models.product_model import Product, ProductColor, ProductCareInstruction
from app.db.models.region_model import RegionProductMapping
from app.crud import region_crud

import logging

logger = logging.getLogger(__name__)

_DETAIL_OPTIONS = (
    selectinload(Product.subcategory).selectinload(SubCategory.category),
    selectinload(Product.region_mappings).selectinload(RegionProductMapping.region),
    selectinload(Product.colors),
    selectinload(Product.care_instructions),
)

# ========================================
# OPERACIONES DE LECTURA (READ)
# ========================================

async def get_product(db: AsyncSession, product_id: int) -> Optional[Product]:
    """Obtiene un producto por su ID, con relaciones precargadas."""
    result = await db.execute(
        select(Product)
        .options(*_DETAIL_OPTIONS)
        .filter(Product.id == product_id)
        .execution_options(populate_existing=True)
    )
    return result.scalars().first()


async def get_products(db: AsyncSession) -> List[Product]:
    """Todos los productos con relaciones, ordenados por nombre."""
    result = await db.execute(
        select(Product)
        .options(*_DETAIL_OPTIONS)
        .order_by(Product.name, Product.id)
    )
    return result.scalars().all()


async def get_total_products(db: AsyncSession) -> int:
    result = await db.execute(select(func.count(Product.id)))
    return result.scalar_one()

# ========================================
# LISTAS DEPENDIENTES
# ========================================

async def replace_colors(db: AsyncSession, product_id: int, colors: List[Dict[str, Any]]) -> None:
    await db.execute(delete(ProductColor).where(ProductColor.product_id == product_id))
    if colors:
        db.add_all([ProductColor(product_id=product_id, **color) for color in colors])
    await db.flush()


async def replace_care_instructions(db: AsyncSession, product_id: int, instructions: List[Dict[str, Any]]) -> None:
    await db.execute(delete(ProductCareInstruction).where(ProductCareInstruction.product_id == product_id))
    if instructions:
        db.add_all([ProductCareInstruction(product_id=product_id, **item) for item in instructions])
    await db.flush()

# ========================================
# OPERACIONES DE ESCRITURA (CREATE, UPDATE, DELETE)
# ========================================

async def create_product(db: AsyncSession, data: Dict[str, Any]) -> Product:
    db_product = Product(**data)
    db.add(db_product)
    await db.flush()
    logger.debug(f"Producto insertado con id {db_product.id}")
    return db_product


async def update_product(db: AsyncSession, db_product: Product, data: Dict[str, Any]) -> Product:
    for key, value in data.items():
        setattr(db_product, key, value)
    db.add(db_product)
    await db.flush()
    return db_product


async def replace_product_relations(
    db: AsyncSession,
    product_id: int,
    region_ids: Optional[List[int]] = None,
    colors: Optional[List[Dict[str, Any]]] = None,
    care_instructions: Optional[List[Dict[str, Any]]] = None,
) -> None:
    """Reemplaza cada lista que no sea None; las que sean None quedan intactas."""
    if region_ids is not None:
        await region_crud.replace_mappings(
            db, RegionProductMapping, "product_id", product_id, "region_id", region_ids
        )
    if colors is not None:
        await replace_colors(db, product_id, colors)
    if care_instructions is not None:
        await replace_care_instructions(db, product_id, care_instructions)


async def delete_product(db: AsyncSession, product_id: int) -> None:
    """Borra asignaciones de región, colores e instrucciones, y después el producto."""
    await region_crud.delete_mappings(db, RegionProductMapping, "product_id", product_id)
    await db.execute(delete(ProductColor).where(ProductColor.product_id == product_id))
    await db.execute(delete(ProductCareInstruction).where(ProductCareInstruction.product_id == product_id))
    await db.execute(delete(Product).where(Product.id == product_id))

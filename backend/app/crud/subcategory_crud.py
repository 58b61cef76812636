# backend/app/crud/subcategory_crud.py

"""
Operaciones CRUD para el modelo SubCategory.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.db.models.category_model import SubCategory
from app.db.models.region_model import RegionSubCategoryMapping
from app.crud import region_crud

_DETAIL_OPTIONS = (
    selectinload(SubCategory.category),
    selectinload(SubCategory.region_mappings).selectinload(RegionSubCategoryMapping.region),
)

# ========================================
# OPERACIONES DE LECTURA (READ)
# ========================================

async def get_subcategory(db: AsyncSession, subcategory_id: int) -> Optional[SubCategory]:
    """Subcategoría con su categoría padre y sus regiones."""
    result = await db.execute(
        select(SubCategory)
        .options(*_DETAIL_OPTIONS)
        .filter(SubCategory.id == subcategory_id)
        .execution_options(populate_existing=True)
    )
    return result.scalars().first()


async def get_subcategories(db: AsyncSession) -> List[SubCategory]:
    """Todas las subcategorías con detalles, ordenadas por order_index."""
    result = await db.execute(
        select(SubCategory)
        .options(*_DETAIL_OPTIONS)
        .order_by(SubCategory.order_index, SubCategory.id)
    )
    return result.scalars().all()


async def get_subcategory_options(db: AsyncSession, category_id: Optional[int] = None) -> List[SubCategory]:
    """Lista ligera ordenada por nombre; filtrada por categoría si se indica."""
    query = select(SubCategory).order_by(SubCategory.name)
    if category_id is not None:
        query = query.filter(SubCategory.category_id == category_id)
    result = await db.execute(query)
    return result.scalars().all()

# ========================================
# OPERACIONES DE ESCRITURA (CREATE, UPDATE, DELETE)
# ========================================

async def create_subcategory(db: AsyncSession, data: Dict[str, Any], region_ids: List[int]) -> SubCategory:
    db_subcategory = SubCategory(**data)
    db.add(db_subcategory)
    await db.flush()
    await region_crud.replace_mappings(
        db, RegionSubCategoryMapping, "subcategory_id", db_subcategory.id, "region_id", region_ids
    )
    return db_subcategory


async def update_subcategory(
    db: AsyncSession,
    db_subcategory: SubCategory,
    data: Dict[str, Any],
    region_ids: Optional[List[int]] = None,
) -> SubCategory:
    for key, value in data.items():
        setattr(db_subcategory, key, value)
    db.add(db_subcategory)
    await db.flush()
    if region_ids is not None:
        await region_crud.replace_mappings(
            db, RegionSubCategoryMapping, "subcategory_id", db_subcategory.id, "region_id", region_ids
        )
    return db_subcategory


async def delete_subcategory(db: AsyncSession, subcategory_id: int) -> None:
    """Borra primero las asignaciones de región y después la subcategoría."""
    await region_crud.delete_mappings(db, RegionSubCategoryMapping, "subcategory_id", subcategory_id)
    await db.execute(delete(SubCategory).where(SubCategory.id == subcategory_id))

# backend/app/crud/category_crud.py

"""
Operaciones CRUD para el modelo Category.

Este módulo implementa las operaciones de Create, Read, Update, Delete para categorías,
proporcionando una capa de abstracción entre los servicios y la base de datos remota.

Funcionalidades principales:
- Consultas por ID con las regiones asociadas precargadas
- Listado ordenado por order_index
- Borrado explícito de las asignaciones región-categoría antes de la fila principal

Las escrituras hacen flush sin commit; el servicio confirma la transacción.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import select, delete, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.db.models.category_model import Category
from app.db.models.region_model import RegionCategoryMapping
from app.crud import region_crud

# Carga de regiones a través de la tabla de unión
_WITH_REGIONS = selectinload(Category.region_mappings).selectinload(RegionCategoryMapping.region)

# ========================================
# OPERACIONES DE LECTURA (READ)
# ========================================

async def get_category(db: AsyncSession, category_id: int) -> Optional[Category]:
    """
    Obtiene una categoría por su ID con sus regiones.

    populate_existing fuerza a recargar las relaciones aunque el objeto ya esté
    en la sesión, que es lo que necesita la relectura tras una escritura.
    """
    result = await db.execute(
        select(Category)
        .options(_WITH_REGIONS)
        .filter(Category.id == category_id)
        .execution_options(populate_existing=True)
    )
    return result.scalars().first()


async def get_categories(db: AsyncSession) -> List[Category]:
    """Todas las categorías con sus regiones, ordenadas por order_index."""
    result = await db.execute(
        select(Category)
        .options(_WITH_REGIONS)
        .order_by(Category.order_index, Category.id)
    )
    return result.scalars().all()


async def get_category_options(db: AsyncSession) -> List[Category]:
    """Lista ligera (id, name) ordenada por nombre, para desplegables."""
    result = await db.execute(select(Category).order_by(Category.name))
    return result.scalars().all()


async def get_total_categories(db: AsyncSession) -> int:
    """
    Obtiene el número total de categorías en la base de datos.

    Returns:
        Número total de categorías (int)
    """
    result = await db.execute(select(func.count(Category.id)))
    return result.scalar_one()

# ========================================
# OPERACIONES DE ESCRITURA (CREATE, UPDATE, DELETE)
# ========================================

async def create_category(db: AsyncSession, data: Dict[str, Any], region_ids: List[int]) -> Category:
    db_category = Category(**data)
    db.add(db_category)
    await db.flush()  # Asigna el id antes de crear las asignaciones
    await region_crud.replace_mappings(
        db, RegionCategoryMapping, "category_id", db_category.id, "region_id", region_ids
    )
    return db_category


async def update_category(
    db: AsyncSession,
    db_category: Category,
    data: Dict[str, Any],
    region_ids: Optional[List[int]] = None,
) -> Category:
    """
    Actualización parcial. Si region_ids no es None, reemplaza las asignaciones.
    """
    for key, value in data.items():
        setattr(db_category, key, value)
    db.add(db_category)
    await db.flush()
    if region_ids is not None:
        await region_crud.replace_mappings(
            db, RegionCategoryMapping, "category_id", db_category.id, "region_id", region_ids
        )
    return db_category


async def delete_category(db: AsyncSession, category_id: int) -> None:
    """Borra primero las filas de region_category_mapping y después la categoría."""
    await region_crud.delete_mappings(db, RegionCategoryMapping, "category_id", category_id)
    await db.execute(delete(Category).where(Category.id == category_id))

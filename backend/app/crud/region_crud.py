# backend/app/crud/region_crud.py

"""
Operaciones CRUD para regiones y para las tablas de unión con regiones.

Las funciones de escritura hacen flush pero no commit: el servicio confirma la
transacción cuando termina toda la operación (fila principal + asignaciones),
de modo que una escritura es todo o nada.
"""

from typing import Any, Dict, Iterable, List, Optional, Type

from sqlalchemy import select, delete, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.db.models.region_model import Region, RegionCategoryMapping

# ========================================
# TABLAS DE UNIÓN
# ========================================

async def delete_mappings(db: AsyncSession, mapping_model: Type[Any], owner_column: str, owner_id: int) -> None:
    """Borra todas las filas de unión de un propietario (p. ej. category_id=3)."""
    await db.execute(delete(mapping_model).where(getattr(mapping_model, owner_column) == owner_id))


async def replace_mappings(
    db: AsyncSession,
    mapping_model: Type[Any],
    owner_column: str,
    owner_id: int,
    target_column: str,
    target_ids: Iterable[int],
) -> None:
    """
    Reemplaza las asociaciones de un propietario: borra las existentes e inserta
    una fila por cada id destino (sin duplicados, en el orden recibido).
    """
    await delete_mappings(db, mapping_model, owner_column, owner_id)
    rows = [
        mapping_model(**{owner_column: owner_id, target_column: target_id})
        for target_id in dict.fromkeys(target_ids)
    ]
    if rows:
        db.add_all(rows)
    await db.flush()


async def find_missing_ids(db: AsyncSession, model: Type[Any], ids: Iterable[int]) -> List[int]:
    """Devuelve los ids que no existen en la tabla de `model`."""
    wanted = set(ids)
    if not wanted:
        return []
    result = await db.execute(select(model.id).where(model.id.in_(wanted)))
    found = set(result.scalars().all())
    return sorted(wanted - found)

# ========================================
# OPERACIONES DE LECTURA (READ)
# ========================================

async def get_region(db: AsyncSession, region_id: int) -> Optional[Region]:
    result = await db.execute(
        select(Region)
        .options(selectinload(Region.category_mappings).selectinload(RegionCategoryMapping.category))
        .filter(Region.id == region_id)
        .execution_options(populate_existing=True)
    )
    return result.scalars().first()


async def get_region_by_code(db: AsyncSession, code: str) -> Optional[Region]:
    result = await db.execute(select(Region).filter(Region.code == code))
    return result.scalars().first()


async def get_regions(db: AsyncSession) -> List[Region]:
    """Todas las regiones ordenadas por nombre."""
    result = await db.execute(select(Region).order_by(Region.name))
    return result.scalars().all()


async def get_total_regions(db: AsyncSession) -> int:
    result = await db.execute(select(func.count(Region.id)))
    return result.scalar_one()

# ========================================
# OPERACIONES DE ESCRITURA (CREATE, UPDATE, DELETE)
# ========================================

async def create_region(db: AsyncSession, data: Dict[str, Any]) -> Region:
    db_region = Region(**data)
    db.add(db_region)
    await db.flush()
    return db_region


async def update_region(db: AsyncSession, db_region: Region, data: Dict[str, Any]) -> Region:
    for key, value in data.items():
        setattr(db_region, key, value)
    db.add(db_region)
    await db.flush()
    return db_region

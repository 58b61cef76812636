"""
Endpoints de mensajes de contacto y del resumen del panel.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.schemas.message_schema import DashboardCounts, MessageResponse
from app.services.message_service import message_service

router = APIRouter()
dashboard_router = APIRouter()


@router.get("/", response_model=List[MessageResponse])
async def read_messages(
    db: AsyncSession = Depends(deps.get_db),
    unread_only: bool = False,
) -> List[MessageResponse]:
    """Mensajes recibidos, los más recientes primero."""
    return await message_service.get_messages(db, unread_only=unread_only)


@router.patch("/{message_id}/read", response_model=MessageResponse)
async def mark_message_read(*, db: AsyncSession = Depends(deps.get_db), message_id: int) -> MessageResponse:
    return await message_service.mark_message_as_read(db, message_id)


@router.delete("/{message_id}", response_model=MessageResponse)
async def delete_message(*, db: AsyncSession = Depends(deps.get_db), message_id: int) -> MessageResponse:
    return await message_service.delete_message(db, message_id)


@dashboard_router.get("/", response_model=DashboardCounts)
async def read_dashboard(db: AsyncSession = Depends(deps.get_db)) -> DashboardCounts:
    """Totales de categorías, productos y regiones."""
    return await message_service.get_dashboard_counts(db)

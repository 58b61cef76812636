# backend/app/services/message_service.py
"""
Servicio para los mensajes de contacto y los totales del panel principal.
"""

import logging
from typing import List

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette import status

from app.crud import category_crud, message_crud, product_crud, region_crud
from app.schemas.message_schema import DashboardCounts, MessageResponse

logger = logging.getLogger(__name__)


class MessageService:

    async def get_messages(self, db: AsyncSession, unread_only: bool = False) -> List[MessageResponse]:
        messages = await message_crud.get_messages(db, unread_only=unread_only)
        return [MessageResponse.model_validate(m) for m in messages]

    async def mark_message_as_read(self, db: AsyncSession, message_id: int) -> MessageResponse:
        db_message = await message_crud.get_message(db, message_id)
        if not db_message:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Message with ID {message_id} not found.")
        try:
            db_message = await message_crud.mark_as_read(db, db_message)
            await db.commit()
            await db.refresh(db_message)
        except SQLAlchemyError:
            await db.rollback()
            logger.error(f"❌ ERROR: No se pudo marcar como leído el mensaje {message_id}", exc_info=True)
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error updating message")

        logger.info(f"📨 MENSAJE: Marcado como leído {message_id}")
        return MessageResponse.model_validate(db_message)

    async def delete_message(self, db: AsyncSession, message_id: int) -> MessageResponse:
        db_message = await message_crud.get_message(db, message_id)
        if not db_message:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Message with ID {message_id} not found.")
        deleted = MessageResponse.model_validate(db_message)
        try:
            await message_crud.delete_message(db, message_id)
            await db.commit()
        except SQLAlchemyError:
            await db.rollback()
            logger.error(f"❌ ERROR: No se pudo eliminar el mensaje {message_id}", exc_info=True)
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error deleting message")

        logger.info(f"🗑️ MENSAJE: Eliminado {message_id}")
        return deleted

    async def get_dashboard_counts(self, db: AsyncSession) -> DashboardCounts:
        """
        Totales de categorías, productos y regiones.

        Las tres consultas comparten la sesión de la petición, así que se lanzan
        una detrás de otra.
        """
        return DashboardCounts(
            categories=await category_crud.get_total_categories(db),
            products=await product_crud.get_total_products(db),
            regions=await region_crud.get_total_regions(db),
        )


message_service = MessageService()

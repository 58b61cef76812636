# backend/app/crud/message_crud.py

"""
Operaciones CRUD para los mensajes del formulario de contacto.
"""

from typing import List, Optional

from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.message_model import ContactMessage


async def get_message(db: AsyncSession, message_id: int) -> Optional[ContactMessage]:
    result = await db.execute(select(ContactMessage).filter(ContactMessage.id == message_id))
    return result.scalars().first()


async def get_messages(db: AsyncSession, unread_only: bool = False) -> List[ContactMessage]:
    """Mensajes del más reciente al más antiguo."""
    query = select(ContactMessage).order_by(ContactMessage.created_at.desc(), ContactMessage.id.desc())
    if unread_only:
        query = query.filter(ContactMessage.mark_as_read.is_(False))
    result = await db.execute(query)
    return result.scalars().all()


async def mark_as_read(db: AsyncSession, db_message: ContactMessage) -> ContactMessage:
    db_message.mark_as_read = True
    db.add(db_message)
    await db.flush()
    return db_message


async def delete_message(db: AsyncSession, message_id: int) -> None:
    await db.execute(delete(ContactMessage).where(ContactMessage.id == message_id))

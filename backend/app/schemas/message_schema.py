# backend/app/schemas/message_schema.py
"""
Esquemas de los mensajes recibidos por el formulario de contacto.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict


class MessageResponse(BaseModel):
    id: int
    created_at: Optional[datetime] = None
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    message: str
    is_ok_receive_communication: bool = False
    region_code: Optional[str] = None
    mark_as_read: bool = False

    model_config = ConfigDict(from_attributes=True)


class DashboardCounts(BaseModel):
    """Totales mostrados en el panel principal."""
    categories: int = 0
    products: int = 0
    regions: int = 0

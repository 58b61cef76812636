# backend/app/db/models/message_model.py
"""
Se encarga de definir el modelo de mensajes del formulario de contacto.
"""

from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime
from sqlalchemy.sql import func
from app.db.database import Base

class ContactMessage(Base):
    __tablename__ = "contactus_response"

    id = Column(Integer, primary_key=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    message = Column(Text, nullable=False)
    is_ok_receive_communication = Column(Boolean, nullable=False, default=False)
    region_code = Column(String(20), nullable=True, index=True)
    mark_as_read = Column(Boolean, nullable=False, default=False)

from sqlalchemy import Column, String, Integer, DateTime, Index, func
from app.db.base import Base

class Appointment(Base):
    __tablename__ = "appointments"
    id = Column(Integer, primary_key=True, autoincrement=True)
    bot_id = Column(String, nullable=False)
    customer = Column(String, nullable=False)
    starts_at = Column(DateTime(timezone=True), nullable=False)   # siempre en UTC
    notes = Column(String)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (Index("ix_appointments_bot_starts", "bot_id", "starts_at"),)

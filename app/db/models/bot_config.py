from sqlalchemy import Column, String, Integer, DateTime, func
from app.db.base import Base

class BotConfig(Base):
    __tablename__ = "bot_configs"
    bot_id = Column(String, primary_key=True)                 # tenant
    mode = Column(String, nullable=False, default="sales")    # 'sales' | 'reservations'
    slot_minutes = Column(Integer, nullable=False, default=30)

    # perfil del negocio (placeholders de las reglas)
    name = Column(String)
    address = Column(String)
    hours = Column(String)
    phone = Column(String)
    payment_methods = Column(String)
    cash_discount = Column(String)
    service_list = Column(String)
    cancellation_policy = Column(String)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

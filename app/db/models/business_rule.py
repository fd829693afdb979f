from sqlalchemy import Column, String, Integer, DateTime, JSON, Index, func
from app.db.base import Base

class BusinessRule(Base):
    __tablename__ = "business_rules"
    id = Column(Integer, primary_key=True, autoincrement=True)
    bot_id = Column(String, nullable=False)
    mode = Column(String, nullable=False)        # 'sales' | 'reservations' | 'common'
    condition = Column(String)                   # tag legible, p.ej. 'saludo_basico'
    triggers = Column(JSON, default=list)        # lista de frases
    action = Column(String, nullable=False)      # template con {placeholders}
    priority = Column(Integer, nullable=False, default=50)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (Index("ix_business_rules_bot_mode", "bot_id", "mode"),)

from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

class AppointmentCreate(BaseModel):
    bot_id: str = Field(default="default", min_length=1)
    customer: str = Field(min_length=1, max_length=200)
    starts_at: str = Field(min_length=5, description="Fecha literal o frase ('viernes a las 10')")
    notes: Optional[str] = None

class AppointmentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    bot_id: str
    customer: str
    starts_at: datetime
    notes: Optional[str] = None

class AvailabilityOut(BaseModel):
    ok: bool = True
    available: bool
    starts_at: datetime

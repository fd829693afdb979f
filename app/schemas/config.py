from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Literal, Optional

class ConfigPatch(BaseModel):
    bot_id: str = Field(default="default", min_length=1)
    mode: Optional[Literal["sales", "reservations"]] = None
    slot_minutes: Optional[int] = Field(default=None, ge=5, le=240)
    name: Optional[str] = None
    address: Optional[str] = None
    hours: Optional[str] = None
    phone: Optional[str] = None
    payment_methods: Optional[str] = None
    cash_discount: Optional[str] = None
    service_list: Optional[str] = None
    cancellation_policy: Optional[str] = None

    # se pueden omitir, pero no borrar: las columnas son NOT NULL
    @field_validator("mode", "slot_minutes")
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError("no puede ser null")
        return v

class ConfigOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    bot_id: str
    mode: str
    slot_minutes: int
    name: Optional[str] = None
    address: Optional[str] = None
    hours: Optional[str] = None
    phone: Optional[str] = None
    payment_methods: Optional[str] = None
    cash_discount: Optional[str] = None
    service_list: Optional[str] = None
    cancellation_policy: Optional[str] = None

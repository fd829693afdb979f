from decimal import Decimal
from pydantic import BaseModel, ConfigDict, Field

class ProductCreate(BaseModel):
    bot_id: str = Field(default="default", min_length=1)
    name: str = Field(min_length=1, max_length=200)
    price: Decimal = Field(ge=0)
    stock: int = Field(ge=0)

class ProductOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    bot_id: str
    name: str
    price: Decimal
    stock: int

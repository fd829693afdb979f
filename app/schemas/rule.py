from pydantic import BaseModel, ConfigDict, Field
from typing import List, Literal, Optional

class RuleIn(BaseModel):
    bot_id: str = Field(default="default", min_length=1)
    mode: Literal["sales", "reservations", "common"]
    condition: Optional[str] = None
    triggers: List[str] = Field(default_factory=list)
    action: str = Field(min_length=1)
    priority: int = 50

class RuleOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    bot_id: str
    mode: str
    condition: Optional[str] = None
    triggers: List[str] = Field(default_factory=list)
    action: str
    priority: int

class RestoreDefaultsIn(BaseModel):
    bot_id: str = Field(default="default", min_length=1)

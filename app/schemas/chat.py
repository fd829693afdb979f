from pydantic import BaseModel, Field
from typing import Optional

class ChatIn(BaseModel):
    bot_id: str = Field(default="default", min_length=1, max_length=120)
    message: str = Field(default="", max_length=4000)
    session_id: Optional[str] = Field(default=None, max_length=200)

class ChatOut(BaseModel):
    ok: bool = True
    reply: str
    rule_id: Optional[int] = None

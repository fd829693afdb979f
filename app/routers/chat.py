import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_session
from app.schemas.chat import ChatIn, ChatOut
from app.services.chat_engine import handle_message
from app.services.nlu import NluDelegate, get_nlu_delegate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["chat"])

@router.post("/chat", response_model=ChatOut)
async def chat_route(
    body: ChatIn,
    session: AsyncSession = Depends(get_session),
    nlu: NluDelegate = Depends(get_nlu_delegate),
):
    try:
        res = await handle_message(
            session, bot_id=body.bot_id, message=body.message,
            session_id=body.session_id, nlu=nlu,
        )
    except Exception as e:
        logger.exception("[CHAT] error procesando mensaje bot=%s", body.bot_id)
        raise HTTPException(status_code=500, detail=str(e)[:400])
    return {"ok": True, "reply": res.reply, "rule_id": res.rule_id}

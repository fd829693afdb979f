from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_session
from app.schemas.config import ConfigOut, ConfigPatch
from app.services.bot_configs import get_or_create_config, update_config
from app.services.rules import seed_default_rules

router = APIRouter(prefix="/api/config", tags=["config"])

@router.get("")
async def get_config_route(bot_id: str = "default", session: AsyncSession = Depends(get_session)):
    try:
        cfg, created = await get_or_create_config(session, bot_id)
        if created:
            await seed_default_rules(session, bot_id)
        return {"ok": True, "config": ConfigOut.model_validate(cfg)}
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e)[:400])

@router.post("")
async def patch_config_route(payload: ConfigPatch, session: AsyncSession = Depends(get_session)):
    patch = payload.model_dump(exclude_unset=True, exclude={"bot_id"})
    try:
        cfg = await update_config(session, payload.bot_id, patch)
        return {"ok": True, "config": ConfigOut.model_validate(cfg)}
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e)[:400])

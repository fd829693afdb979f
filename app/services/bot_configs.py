from typing import Any, Dict, Tuple
from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession
from app.db.models.bot_config import BotConfig
from app.services.templates import PROFILE_FIELDS

DEFAULT_MODE = "sales"
DEFAULT_SLOT_MINUTES = 30

def _insert_for(session: AsyncSession):
    dialect = session.bind.dialect.name if session.bind is not None else "postgresql"
    return sqlite.insert if dialect == "sqlite" else postgresql.insert

async def get_or_create_config(session: AsyncSession, bot_id: str) -> Tuple[BotConfig, bool]:
    """
    Fila de configuración del tenant; la crea con defaults si no existe.
    El insert es ON CONFLICT DO NOTHING, así dos requests concurrentes no chocan.
    """
    stmt = (
        _insert_for(session)(BotConfig)
        .values(bot_id=bot_id, mode=DEFAULT_MODE, slot_minutes=DEFAULT_SLOT_MINUTES)
        .on_conflict_do_nothing(index_elements=["bot_id"])
    )
    res = await session.execute(stmt)
    created = bool(res.rowcount)
    if created:
        await session.commit()
    cfg = (await session.execute(select(BotConfig).where(BotConfig.bot_id == bot_id))).scalar_one()
    return cfg, created

def get_profile(cfg: BotConfig) -> Dict[str, Any]:
    return {k: getattr(cfg, k) for k in PROFILE_FIELDS}

async def update_config(session: AsyncSession, bot_id: str, patch: Dict[str, Any]) -> BotConfig:
    cfg, _ = await get_or_create_config(session, bot_id)
    for k, v in patch.items():
        setattr(cfg, k, v)
    await session.commit()
    await session.refresh(cfg)
    return cfg

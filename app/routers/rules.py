from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_session
from app.schemas.rule import RestoreDefaultsIn, RuleIn, RuleOut
from app.services.rules import (
    create_rule, delete_rule, list_rules, restore_default_rules, update_rule,
)
from app.services.triggers import parse_triggers

router = APIRouter(prefix="/api/rules", tags=["rules"])

def _out(rule) -> RuleOut:
    return RuleOut(
        id=rule.id, bot_id=rule.bot_id, mode=rule.mode, condition=rule.condition,
        triggers=parse_triggers(rule.triggers), action=rule.action, priority=rule.priority,
    )

@router.get("", response_model=List[RuleOut])
async def list_rules_route(
    bot_id: str = "default",
    mode: Optional[str] = None,
    session: AsyncSession = Depends(get_session),
):
    rules = await list_rules(session, bot_id, {mode} if mode else None)
    return [_out(r) for r in rules]

@router.post("", response_model=RuleOut)
async def create_rule_route(payload: RuleIn, session: AsyncSession = Depends(get_session)):
    rule = await create_rule(session, **payload.model_dump())
    return _out(rule)

@router.put("/{rule_id}", response_model=RuleOut)
async def update_rule_route(rule_id: int, payload: RuleIn, session: AsyncSession = Depends(get_session)):
    rule = await update_rule(session, rule_id, **payload.model_dump())
    if not rule:
        raise HTTPException(status_code=404, detail="Regla no encontrada")
    return _out(rule)

@router.delete("/{rule_id}")
async def delete_rule_route(rule_id: int, session: AsyncSession = Depends(get_session)):
    if not await delete_rule(session, rule_id):
        raise HTTPException(status_code=404, detail="Regla no encontrada")
    return {"ok": True}

@router.post("/restore-defaults")
async def restore_defaults_route(payload: RestoreDefaultsIn | None = None, session: AsyncSession = Depends(get_session)):
    bot_id = payload.bot_id if payload else "default"
    try:
        n = await restore_default_rules(session, bot_id)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e)[:400])
    return {"ok": True, "count": n}

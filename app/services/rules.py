import enum
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence

from sqlalchemy import select, delete, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.default_rules import all_default_rules
from app.db.models.business_rule import BusinessRule
from app.services.similarity import similarity_fallback
from app.services.text import normalize, tokenize
from app.services.triggers import includes_trigger, parse_triggers

logger = logging.getLogger(__name__)

# =========================
# Selector
# =========================
class MatchKind(str, enum.Enum):
    TRIGGER = "trigger"
    SIMILARITY = "similarity"

@dataclass(frozen=True)
class RuleMatch:
    rule: Any
    kind: MatchKind

GREETING_WORDS = {
    "hola", "hey", "buenas", "buenos", "buen", "dia", "dias", "tardes", "noches",
    "quetal", "que", "tal", "como", "andas", "saludos",
}

def is_pure_greeting(message: str) -> bool:
    tokens = tokenize(message)
    others = [t for t in tokens if t not in GREETING_WORDS]
    return not others and len(tokens) <= 5

# condition -> predicado que el mensaje tiene que cumplir para evaluar la regla
CONDITION_GUARDS: Dict[str, Callable[[str], bool]] = {
    "saludo_basico": is_pure_greeting,
}

def _passes_guard(rule, message: str) -> bool:
    guard = CONDITION_GUARDS.get(rule.condition or "")
    return guard is None or guard(message)

def select_rule(message: str, rules: Sequence) -> Optional[RuleMatch]:
    """
    Devuelve a lo sumo una regla:
      1) orden por prioridad desc (estable: a igual prioridad, el orden recibido)
      2) guardas de condición (p.ej. saludo solo si el mensaje es un saludo puro)
      3) primera regla con algún trigger presente en el mensaje normalizado
      4) si ninguna, fallback por similitud sobre las mismas candidatas
    """
    candidates = [r for r in sorted(rules, key=lambda r: -(r.priority or 0)) if _passes_guard(r, message)]
    if not candidates:
        return None

    msg = normalize(message)
    for rule in candidates:
        if any(includes_trigger(msg, t) for t in parse_triggers(rule.triggers)):
            return RuleMatch(rule, MatchKind.TRIGGER)

    rule = similarity_fallback(message, candidates)
    if rule is not None:
        return RuleMatch(rule, MatchKind.SIMILARITY)
    return None

# =========================
# Store
# =========================
async def list_rules(session: AsyncSession, bot_id: str, modes: Optional[Iterable[str]] = None) -> List[BusinessRule]:
    q = select(BusinessRule).where(BusinessRule.bot_id == bot_id)
    if modes:
        q = q.where(BusinessRule.mode.in_(list(modes)))
    q = q.order_by(BusinessRule.priority.desc(), BusinessRule.id.asc())
    return list((await session.execute(q)).scalars().all())

async def get_rule(session: AsyncSession, rule_id: int) -> Optional[BusinessRule]:
    return await session.get(BusinessRule, rule_id)

async def create_rule(
    session: AsyncSession, *, bot_id: str, mode: str, condition: Optional[str],
    triggers: List[str], action: str, priority: int = 50,
) -> BusinessRule:
    rule = BusinessRule(
        bot_id=bot_id, mode=mode, condition=condition,
        triggers=list(triggers or []), action=action, priority=priority,
    )
    session.add(rule)
    await session.commit()
    await session.refresh(rule)
    return rule

async def update_rule(session: AsyncSession, rule_id: int, **fields) -> Optional[BusinessRule]:
    rule = await session.get(BusinessRule, rule_id)
    if not rule:
        return None
    for k, v in fields.items():
        setattr(rule, k, list(v) if k == "triggers" else v)
    await session.commit()
    await session.refresh(rule)
    return rule

async def delete_rule(session: AsyncSession, rule_id: int) -> bool:
    res = await session.execute(delete(BusinessRule).where(BusinessRule.id == rule_id))
    await session.commit()
    return res.rowcount > 0

def _add_defaults(session: AsyncSession, bot_id: str) -> int:
    defaults = all_default_rules()
    for r in defaults:
        session.add(BusinessRule(
            bot_id=bot_id, mode=r["mode"], condition=r.get("condition"),
            triggers=list(r.get("triggers") or []), action=r["action"],
            priority=r.get("priority", 50),
        ))
    return len(defaults)

async def seed_default_rules(session: AsyncSession, bot_id: str) -> int:
    """Precarga las reglas por defecto solo si el tenant no tiene ninguna."""
    count = (await session.execute(
        select(func.count()).select_from(BusinessRule).where(BusinessRule.bot_id == bot_id)
    )).scalar_one()
    if count:
        return 0
    n = _add_defaults(session, bot_id)
    await session.commit()
    logger.info("[RULES] %d reglas por defecto precargadas para bot=%s", n, bot_id)
    return n

async def restore_default_rules(session: AsyncSession, bot_id: str) -> int:
    await session.execute(delete(BusinessRule).where(BusinessRule.bot_id == bot_id))
    n = _add_defaults(session, bot_id)
    await session.commit()
    logger.info("[RULES] reglas restauradas a los defaults para bot=%s (%d)", bot_id, n)
    return n

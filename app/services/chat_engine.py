import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.services.bot_configs import get_or_create_config, get_profile
from app.services.dates import bot_tz, format_local, now_local, resolve_datetime
from app.services.nlu import NluDelegate, NluResult
from app.services.products import find_best_match, find_by_name, list_catalog
from app.services.rules import list_rules, select_rule
from app.services.scheduling import book_appointment, has_conflict
from app.services.templates import (
    PRODUCT_PLACEHOLDERS, build_context, fill_template, has_unresolved, placeholders,
)

logger = logging.getLogger(__name__)

@dataclass
class ChatReply:
    reply: str
    rule_id: Optional[int] = None
    match_kind: Optional[str] = None
    intent: Optional[str] = None

def _catalog_prompt(names: List[str], prefix: str = "Algunos productos: ") -> str:
    if not names:
        return "No tengo productos cargados."
    return prefix + ", ".join(names) + ". Decime cuál te interesa."

# =========================
# Regla encontrada
# =========================
async def _reply_from_rule(
    session: AsyncSession, *, bot_id: str, rule, message: str,
    profile: Dict[str, Any], catalog: List[str], nlu: NluDelegate, now: datetime,
) -> str:
    used = set(placeholders(rule.action))
    product = None
    when = None
    if used & PRODUCT_PLACEHOLDERS:
        product = await find_best_match(session, bot_id, message)
    if "date_time" in used:
        when = await resolve_datetime(message, nlu=nlu, now=now)
        if when is not None and when <= now:
            # horario pasado: se pide de nuevo
            when = None

    ctx = build_context(
        profile, product=product, when=when, catalog=catalog,
        when_text=format_local(when) if when else None,
    )
    reply = fill_template(rule.action, ctx)
    if not has_unresolved(reply):
        return reply

    # faltó contexto: en vez de mostrar "{price}" pedimos el dato
    if used & (PRODUCT_PLACEHOLDERS | {"product_catalog"}):
        return _catalog_prompt(catalog)
    if "date_time" in used:
        hours = profile.get("hours")
        return "Decime día y hora" + (f" (horarios: {hours})" if hours else "") + "."
    return "Necesito un dato más para responderte. ¿Podés aclarar?"

# =========================
# Sin regla: intención vía NLU
# =========================
async def _sales_reply(
    session: AsyncSession, *, bot_id: str, intent: str, slots: Dict[str, str],
    message: str, profile: Dict[str, Any], catalog: List[str],
) -> Optional[str]:
    if intent == "ask_catalog":
        return _catalog_prompt(catalog, "Vendemos: ") if catalog else "Aún no hay productos cargados."
    if intent in ("ask_price", "ask_stock"):
        product = None
        if slots.get("product_name"):
            product = await find_by_name(session, bot_id, slots["product_name"])
        if product is None:
            product = await find_best_match(session, bot_id, message)
        if product is not None:
            return f"Tenemos {product.name}. Precio ${product.price}. Stock {product.stock}."
        return _catalog_prompt(catalog, "No lo encontré. Algunos productos: ")
    if intent == "ask_hours":
        return f"Nuestro horario es: {profile['hours']}." if profile.get("hours") else "No tengo horario configurado."
    if intent == "ask_address":
        return f"Estamos en {profile['address']}." if profile.get("address") else "No tengo dirección configurada."
    if intent == "ask_payments":
        if profile.get("payment_methods"):
            return f"Medios de pago: {profile['payment_methods']}."
        return "No tengo medios de pago configurados."
    return None

async def _reservations_reply(
    session: AsyncSession, *, bot_id: str, intent: str, slots: Dict[str, str],
    message: str, profile: Dict[str, Any], slot_minutes: int, nlu: NluDelegate, now: datetime,
) -> Optional[str]:
    if intent == "ask_services":
        return f"Servicios: {profile['service_list']}." if profile.get("service_list") else "No tengo servicios configurados."
    if intent in ("check_availability", "create_booking"):
        when = None
        if slots.get("date_time"):
            when = await resolve_datetime(slots["date_time"], nlu=nlu, now=now)
        if when is None:
            when = await resolve_datetime(message, nlu=nlu, now=now)
        if when is None:
            return f"Decime día y hora. Horarios: {profile.get('hours') or 'no configurado'}."
        if when <= now:
            return "Ese horario ya pasó. Decime un día y hora a futuro."

        if intent == "check_availability":
            if await has_conflict(session, bot_id, when, slot_minutes):
                return "Ese horario no está disponible. ¿Querés que te proponga alternativas?"
            return f"Hay disponibilidad el {format_local(when)}. ¿Querés confirmar el turno?"

        customer = slots.get("customer") or "Cliente"
        result = await book_appointment(
            session, bot_id=bot_id, customer=customer, starts_at=when,
            slot_minutes=slot_minutes, notes=slots.get("service"),
        )
        if not result.booked:
            return "Ese horario no está disponible. ¿Querés que te proponga alternativas?"
        return f"Listo. Turno para {customer} el {format_local(when)}."
    if intent == "cancel_booking":
        return (
            "Registramos tu pedido de cancelación. "
            f"Política: {profile.get('cancellation_policy') or 'no configurada'}."
        )
    if intent == "ask_hours":
        return f"Atendemos: {profile['hours']}." if profile.get("hours") else "No tengo horario configurado."
    if intent == "ask_address":
        return f"Estamos en {profile['address']}." if profile.get("address") else "No tengo dirección configurada."
    return None

def _unknown_reply(mode: str, profile: Dict[str, Any], catalog: List[str]) -> str:
    if mode == "sales":
        if catalog:
            return "Puedo ayudarte con precios y stock. Algunos productos: " + ", ".join(catalog) + "."
        return "Puedo ayudarte con precios y stock. Todavía no hay productos cargados."
    services = profile.get("service_list")
    return (f"Podés reservar: {services}. " if services else "") + "Decime día y hora y verifico."

# =========================
# Entrada principal
# =========================
async def handle_message(
    session: AsyncSession,
    *,
    bot_id: str,
    message: str,
    nlu: NluDelegate,
    session_id: Optional[str] = None,
    now: Optional[datetime] = None,
) -> ChatReply:
    """
    Resuelve un mensaje del usuario:
      - reglas del tenant (modo actual + 'common'): trigger y luego similitud
      - si ninguna aplica: intención vía NLU, fechas, choque de turnos y redacción final
    Errores de base de datos se propagan; el NLU nunca corta el request.
    """
    now = (now or now_local()).astimezone(bot_tz())
    cfg, _ = await get_or_create_config(session, bot_id)
    mode = cfg.mode or "sales"
    rules = await list_rules(session, bot_id, {mode, "common"})
    profile = get_profile(cfg)
    catalog = await list_catalog(session, bot_id, settings.catalog_limit)

    match = select_rule(message, rules)
    if match is not None:
        logger.debug("[CHAT] bot=%s session=%s regla=%s (%s)", bot_id, session_id, match.rule.id, match.kind.value)
        reply = await _reply_from_rule(
            session, bot_id=bot_id, rule=match.rule, message=message,
            profile=profile, catalog=catalog, nlu=nlu, now=now,
        )
        return ChatReply(reply=reply, rule_id=match.rule.id, match_kind=match.kind.value)

    nlu_result: NluResult = await nlu.classify(message, mode)
    intent, slots = nlu_result.intent, nlu_result.slots
    logger.debug("[CHAT] bot=%s session=%s intent=%s slots=%s", bot_id, session_id, intent, slots)

    reply = None
    if mode == "sales":
        reply = await _sales_reply(
            session, bot_id=bot_id, intent=intent, slots=slots,
            message=message, profile=profile, catalog=catalog,
        )
    elif mode == "reservations":
        reply = await _reservations_reply(
            session, bot_id=bot_id, intent=intent, slots=slots, message=message,
            profile=profile, slot_minutes=int(cfg.slot_minutes or 30), nlu=nlu, now=now,
        )

    if intent == "greet":
        reply = "Hola, ¿en qué puedo ayudarte?"
    elif intent == "bye":
        reply = "Gracias por tu visita."
    elif intent == "unknown":
        reply = _unknown_reply(mode, profile, catalog)
    if reply is None:
        reply = "¿Podés reformular?"

    context = {
        "mode": mode,
        "reply": reply,
        "hours": profile.get("hours"),
        "address": profile.get("address"),
        "payments": profile.get("payment_methods"),
        "catalog": ", ".join(catalog[:10]) or None,
    }
    final = await nlu.render(context, message, reply)
    return ChatReply(reply=final, intent=intent)

import logging
import re
from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo

from app.core.config import settings
from app.services.nlu import NluDelegate
from app.services.weekday_grammar import resolve_relative_weekday

logger = logging.getLogger(__name__)

# fecha SQL/ISO: "2026-10-23", "2026-10-23 10:00", "2026-10-23T10:00:00-03:00"
_LITERAL = re.compile(
    r"^\d{4}-\d{2}-\d{2}"
    r"(?:[ T]\d{2}:\d{2}(?::\d{2}(?:\.\d{1,6})?)?)?"
    r"(?:Z|[+-]\d{2}:?\d{2})?$"
)

def bot_tz() -> ZoneInfo:
    return ZoneInfo(settings.bot_timezone)

def now_local(tz: Optional[ZoneInfo] = None) -> datetime:
    return datetime.now(tz or bot_tz())

def parse_literal(text: Optional[str], tz: Optional[ZoneInfo] = None) -> Optional[datetime]:
    """Fecha literal bien formada -> datetime con zona del bot; cualquier otra cosa -> None."""
    if not text:
        return None
    tz = tz or bot_tz()
    s = str(text).strip()
    if not _LITERAL.match(s):
        return None
    try:
        dt = datetime.fromisoformat(s.replace("T", " "))
    except ValueError:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=tz)
    return dt.astimezone(tz)

async def resolve_datetime(
    text: Optional[str],
    *,
    nlu: Optional[NluDelegate] = None,
    tz: Optional[ZoneInfo] = None,
    now: Optional[datetime] = None,
) -> Optional[datetime]:
    """
    Texto libre -> instante en la zona del bot. Orden:
      1) literal ("2026-10-23 10:00")
      2) día de semana relativo ("viernes a las 10")
      3) NLU externo (solo se acepta si devuelve un literal válido)
    None = no se pudo resolver (no es un error: el caller pide la fecha de nuevo).
    """
    if not text or not str(text).strip():
        return None
    tz = tz or bot_tz()

    direct = parse_literal(text, tz)
    if direct:
        return direct

    ref = (now or now_local(tz)).astimezone(tz)
    relative = resolve_relative_weekday(text, ref)
    if relative:
        return relative

    if nlu is not None:
        out = await nlu.resolve_datetime(str(text), str(tz.key))
        parsed = parse_literal(out, tz)
        if parsed:
            return parsed
        if out:
            logger.info("[DATES] respuesta del NLU descartada: %r", out[:80])
    return None

def format_local(dt: datetime, tz: Optional[ZoneInfo] = None) -> str:
    return dt.astimezone(tz or bot_tz()).strftime("%d/%m/%Y %H:%M")

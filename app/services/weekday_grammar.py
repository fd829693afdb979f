"""
Gramática de fechas relativas por día de la semana ("viernes a las 10",
"lunes próximo 15:30", "el próximo martes a las 9").

Primero se busca el día (con "próximo" antes o después) y después la hora en
el resto del texto, evaluando todo sobre el texto normalizado (sin acentos).
La hora tiene que ser explícita ("10:30", "a las 10", "18hs") o un número
suelto pegado al día ("lunes 15"); cualquier otro número se ignora
("viernes, somos 2, a las 10" es a las 10).

Reglas del cálculo:
  - offset = (día pedido - día actual + 7) % 7; si da 0 es la semana siguiente
    ("lunes" dicho un lunes es el lunes que viene, no hoy)
  - "próximo" suma 7 días más
  - si el resultado no es estrictamente posterior a `now`, se corre 7 días
"""
import re
from datetime import datetime, timedelta
from typing import Optional

from app.services.text import normalize

WEEKDAYS = {
    "lunes": 1, "martes": 2, "miercoles": 3, "jueves": 4,
    "viernes": 5, "sabado": 6, "domingo": 7,
}

_DAY = r"(?P<day>" + "|".join(WEEKDAYS) + r")"

PATTERNS = (
    # "proximo viernes"
    re.compile(r"\b(?P<next>proximo)\s+" + _DAY + r"\b"),
    # "viernes", "viernes proximo"
    re.compile(r"\b" + _DAY + r"(?:\s+(?P<next>proximo))?\b"),
)

# hora explícita: "10:30", "a las 10", "las 9", "a la 1", "18hs"
_CLOCK = re.compile(
    r"(?<!\d)(?P<hour>\d{1,2}):(?P<minute>\d{2})(?!\d)"
    r"|\b(?:a\s+)?las?\s+(?P<hour_las>\d{1,2})(?::(?P<minute_las>\d{2}))?(?!\d)"
    r"|(?<!\d)(?P<hour_hs>\d{1,2})\s*hs?\b"
)
# número suelto inmediatamente después del día: "lunes 15"
_BARE_HOUR = re.compile(r"^\s+(?P<hour>\d{1,2})(?!\d)")

def _parse_time(rest: str) -> Optional[tuple]:
    m = _CLOCK.search(rest)
    if m:
        hour = m.group("hour") or m.group("hour_las") or m.group("hour_hs")
        minute = m.group("minute") or m.group("minute_las") or 0
        return int(hour), int(minute)
    m = _BARE_HOUR.match(rest)
    if m:
        return int(m.group("hour")), 0
    return None

def parse_weekday_phrase(text: str) -> Optional[tuple]:
    """(iso_weekday, next, hour, minute) o None si no hay día con hora válida."""
    s = normalize(text)
    for pattern in PATTERNS:
        m = pattern.search(s)
        if not m:
            continue
        time = _parse_time(s[m.end():])
        if time is None:
            continue
        hour, minute = time
        if hour > 23 or minute > 59:
            return None
        return WEEKDAYS[m.group("day")], bool(m.group("next")), hour, minute
    return None

def resolve_relative_weekday(text: str, now: datetime) -> Optional[datetime]:
    parsed = parse_weekday_phrase(text)
    if parsed is None:
        return None
    target, is_next, hour, minute = parsed

    offset = (target - now.isoweekday() + 7) % 7
    if offset == 0:
        offset = 7
    if is_next:
        offset += 7
    d = (now + timedelta(days=offset)).replace(hour=hour, minute=minute, second=0, microsecond=0)
    if d <= now:
        d += timedelta(days=7)
    return d

import json
import re
from typing import Any, List

from app.services.text import normalize

# triggers de hasta 3 caracteres solo matchean como palabra ("ia" no matchea en "gracias")
SHORT_TRIGGER_MAX_LEN = 3

def parse_triggers(value: Any) -> List[str]:
    """Acepta lista nativa o JSON; cualquier otra cosa es una lista vacía."""
    if not value:
        return []
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except ValueError:
            return []
    if not isinstance(value, list):
        return []
    return [str(t) for t in value if t is not None]

def includes_trigger(message_norm: str, trigger: str) -> bool:
    t = normalize(trigger)
    if not t:
        return False
    if len(t) <= SHORT_TRIGGER_MAX_LEN:
        return re.search(r"(^|\W)" + re.escape(t) + r"(?=\W|$)", message_norm) is not None
    return t in message_norm

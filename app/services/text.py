import re
import unicodedata
from typing import List

_NON_ALNUM = re.compile(r"[^a-z0-9]+")

def normalize(s: str) -> str:
    """Forma canónica: minúsculas y sin diacríticos ("CAFÉ" -> "cafe")."""
    decomposed = unicodedata.normalize("NFD", str(s or "").lower())
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))

def tokenize(s: str) -> List[str]:
    # tokens alfanuméricos de más de 2 caracteres
    return [t for t in _NON_ALNUM.split(normalize(s)) if len(t) > 2]

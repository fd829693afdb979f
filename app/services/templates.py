import re
from datetime import datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional

PLACEHOLDER = re.compile(r"\{([A-Za-z_]+)\}")

PRODUCT_PLACEHOLDERS = {"product_name", "price", "stock"}

PROFILE_FIELDS = (
    "name", "address", "hours", "phone", "payment_methods",
    "cash_discount", "service_list", "cancellation_policy",
)

def placeholders(template: str) -> List[str]:
    """Identificadores usados en el template, en minúsculas."""
    return [m.group(1).lower() for m in PLACEHOLDER.finditer(template or "")]

def has_unresolved(text: str) -> bool:
    return PLACEHOLDER.search(text or "") is not None

def fill_template(template: str, context: Mapping[str, str]) -> str:
    """
    Reemplaza {identificador} por context[identificador] (sin distinguir mayúsculas).
    Si falta el valor, el placeholder queda tal cual: el caller lo usa para
    detectar que le falta contexto y pedir el dato.
    """
    ctx = {str(k).lower(): v for k, v in context.items()}

    def _sub(m: re.Match) -> str:
        v = ctx.get(m.group(1).lower())
        if v is None or v == "":
            return m.group(0)
        return str(v)

    return PLACEHOLDER.sub(_sub, template or "")

def build_context(
    profile: Mapping[str, Any],
    *,
    product: Any = None,
    when: Optional[datetime] = None,
    catalog: Iterable[str] = (),
    when_text: Optional[str] = None,
) -> Dict[str, str]:
    ctx: Dict[str, str] = {}
    for k in PROFILE_FIELDS:
        v = profile.get(k)
        if v not in (None, ""):
            ctx[k] = str(v)
    names = [n for n in catalog if n]
    if names:
        ctx["product_catalog"] = ", ".join(names)
    if product is not None:
        ctx["product_name"] = str(product.name)
        ctx["price"] = str(product.price)
        ctx["stock"] = str(product.stock)
    if when is not None:
        ctx["date_time"] = when_text or when.isoformat(timespec="seconds")
    return ctx

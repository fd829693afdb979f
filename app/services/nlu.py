import abc
import asyncio
import json
import logging
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Dict, Optional

import httpx
from openai import AsyncOpenAI

from app.core.config import settings

logger = logging.getLogger(__name__)

# =========================
# Contrato
# =========================
INTENTS = {
    "sales": (
        "ask_price", "ask_stock", "ask_catalog", "greet", "bye",
        "ask_hours", "ask_address", "ask_payments",
    ),
    "reservations": (
        "create_booking", "check_availability", "cancel_booking", "ask_services",
        "greet", "bye", "ask_hours", "ask_address",
    ),
}
SLOT_NAMES = ("product_name", "date_time", "customer", "service")

@dataclass
class NluResult:
    intent: str = "unknown"
    slots: Dict[str, str] = field(default_factory=dict)

def coerce_nlu_payload(data: Any, mode: str) -> NluResult:
    """Valida la respuesta del clasificador: intent fuera del enum -> unknown, slots filtrados."""
    if not isinstance(data, dict):
        return NluResult()
    intent = data.get("intent")
    if intent not in INTENTS.get(mode, ()):
        intent = "unknown"
    raw_slots = data.get("slots") if isinstance(data.get("slots"), dict) else {}
    slots = {}
    for k in SLOT_NAMES:
        v = raw_slots.get(k)
        if isinstance(v, (str, int, float)) and not isinstance(v, bool) and str(v).strip():
            slots[k] = str(v).strip()
    return NluResult(intent=intent, slots=slots)

class NluDelegate(abc.ABC):
    """
    Clasificación de intención, redacción de respuestas y fechas en lenguaje natural.
    Las implementaciones nunca lanzan: ante cualquier falla devuelven el valor de fallback.
    """

    @abc.abstractmethod
    async def classify(self, message: str, mode: str) -> NluResult: ...

    @abc.abstractmethod
    async def render(self, context: Dict[str, Any], message: str, fallback: str) -> str: ...

    @abc.abstractmethod
    async def resolve_datetime(self, phrase: str, timezone: str) -> Optional[str]: ...

class NullNluDelegate(NluDelegate):
    """Sin NLU configurado: todo degrada a la respuesta determinística."""

    async def classify(self, message: str, mode: str) -> NluResult:
        return NluResult()

    async def render(self, context: Dict[str, Any], message: str, fallback: str) -> str:
        return fallback

    async def resolve_datetime(self, phrase: str, timezone: str) -> Optional[str]:
        return None

# =========================
# OpenAI
# =========================
CLASSIFY_SYSTEM = (
    "Eres un clasificador. Devuelve JSON con {intent, slots}.\n"
    'Intents permitidos (sales): ["ask_price","ask_stock","ask_catalog","greet","bye","ask_hours","ask_address","ask_payments"].\n'
    'Intents permitidos (reservations): ["create_booking","check_availability","cancel_booking","ask_services","greet","bye","ask_hours","ask_address"].\n'
    "Slots permitidos: product_name, date_time, customer, service. No inventes datos."
)

RENDER_SYSTEM = (
    "Redacta una respuesta breve y natural en español usando SOLO este contexto JSON. "
    "No agregues datos nuevos. Si falta un dato, pídelo. Contexto: {context}"
)

DATETIME_SYSTEM = (
    "Convierte a ISO YYYY-MM-DDTHH:mm:ss en zona {timezone}. Si no entiendes, responde null."
)

class OpenAINluDelegate(NluDelegate):
    def __init__(
        self,
        api_key: str,
        *,
        model: str = settings.nlu_model,
        timeout: float = settings.nlu_timeout_seconds,
        base_url: Optional[str] = settings.openai_base_url,
        temperature: float = settings.render_temperature,
        client: Optional[AsyncOpenAI] = None,
    ):
        self.model = model
        self.timeout = timeout
        self.temperature = temperature
        self._client = client or AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            max_retries=0,
            http_client=httpx.AsyncClient(timeout=httpx.Timeout(timeout)),
        )

    async def _complete(self, messages, *, temperature: float, json_mode: bool = False) -> str:
        kwargs: Dict[str, Any] = {"model": self.model, "temperature": temperature, "messages": messages}
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}
        resp = await asyncio.wait_for(self._client.chat.completions.create(**kwargs), timeout=self.timeout)
        return (resp.choices[0].message.content or "").strip()

    async def classify(self, message: str, mode: str) -> NluResult:
        user = f'Texto: "{message}". Modo: "{mode}". Responde SOLO JSON.'
        try:
            out = await self._complete(
                [{"role": "system", "content": CLASSIFY_SYSTEM}, {"role": "user", "content": user}],
                temperature=0,
                json_mode=True,
            )
            return coerce_nlu_payload(json.loads(out), mode)
        except Exception as e:
            logger.warning("[NLU] classify falló, sigo con intent=unknown: %r", e)
            return NluResult()

    async def render(self, context: Dict[str, Any], message: str, fallback: str) -> str:
        sys_msg = RENDER_SYSTEM.format(context=json.dumps(context, ensure_ascii=False, default=str))
        try:
            out = await self._complete(
                [{"role": "system", "content": sys_msg}, {"role": "user", "content": f'Usuario: "{message}"'}],
                temperature=self.temperature,
            )
            return out or fallback
        except Exception as e:
            logger.warning("[NLU] render falló, uso respuesta literal: %r", e)
            return fallback

    async def resolve_datetime(self, phrase: str, timezone: str) -> Optional[str]:
        user = f'Frase: "{phrase}". Responde SOLO el ISO o null.'
        try:
            out = await self._complete(
                [{"role": "system", "content": DATETIME_SYSTEM.format(timezone=timezone)}, {"role": "user", "content": user}],
                temperature=0,
            )
        except Exception as e:
            logger.warning("[NLU] resolve_datetime falló: %r", e)
            return None
        out = out.strip().strip('"')
        if not out or out.lower() == "null":
            return None
        return out

@lru_cache(maxsize=1)
def get_nlu_delegate() -> NluDelegate:
    # un solo cliente HTTP por proceso
    if settings.openai_api_key:
        return OpenAINluDelegate(settings.openai_api_key)
    return NullNluDelegate()

import os

# Settings se instancia al importar app.core.config: variables antes de cualquier import de app
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./.pytest-bot.db")
os.environ["OPENAI_API_KEY"] = ""
os.environ.setdefault("BOT_TIMEZONE", "America/Argentina/Cordoba")

from datetime import datetime  # noqa: E402
from zoneinfo import ZoneInfo  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import NullPool  # noqa: E402

from app.db.base import Base  # noqa: E402
from app.db.models.business_rule import BusinessRule  # noqa: E402
from app.services.nlu import NluDelegate, NluResult  # noqa: E402

TZ = ZoneInfo("America/Argentina/Cordoba")

# lunes 19/10/2026 10:00 (hora de Córdoba)
MONDAY_10AM = datetime(2026, 10, 19, 10, 0, tzinfo=TZ)


class StubNlu(NluDelegate):
    """NLU de prueba: respuestas fijas y registro de llamadas."""

    def __init__(self, result: NluResult | None = None, iso: str | None = None, rendered: str | None = None):
        self.result = result or NluResult()
        self.iso = iso
        self.rendered = rendered
        self.calls: list[tuple] = []

    async def classify(self, message, mode):
        self.calls.append(("classify", message, mode))
        return self.result

    async def render(self, context, message, fallback):
        self.calls.append(("render", context, message))
        return self.rendered or fallback

    async def resolve_datetime(self, phrase, timezone):
        self.calls.append(("resolve_datetime", phrase, timezone))
        return self.iso


def make_rule(id, triggers, action="ok", priority=50, mode="sales", condition=None):
    return BusinessRule(
        id=id, bot_id="t", mode=mode, condition=condition,
        triggers=triggers, action=action, priority=priority,
    )


@pytest.fixture
def monday_10am():
    return MONDAY_10AM


@pytest_asyncio.fixture
async def db_session(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'bot.db'}", poolclass=NullPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    Session = async_sessionmaker(bind=engine, expire_on_commit=False, class_=AsyncSession)
    async with Session() as session:
        yield session
    await engine.dispose()

import sys, asyncio, logging
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

load_dotenv()

from app.core.config import settings
from app.core.logging import setup_logging
from app.db.base import Base
from app.db.session import engine, AsyncSessionLocal

from app.routers import health
from app.routers import chat as chat_router
from app.routers import config as config_router
from app.routers import rules as rules_router
from app.routers import products as products_router
from app.routers import appointments as appointments_router
from app.services.bot_configs import get_or_create_config
from app.services.rules import seed_default_rules

setup_logging()
logger = logging.getLogger(__name__)

if sys.platform.startswith("win"):
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

app = FastAPI(title="Sales & Reservations Bot API")

# CORS (ajustá orígenes en prod)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(health.router)
app.include_router(chat_router.router)
app.include_router(config_router.router)
app.include_router(rules_router.router)
app.include_router(products_router.router)
app.include_router(appointments_router.router)

@app.get("/")
async def root():
    return {"ok": True, "service": "sales-reservations-bot", "routers": ["health", "chat", "config", "rules", "products", "appointments"]}

# Crear tablas si no existen (MVP). En prod, usar Alembic.
@app.on_event("startup")
async def on_startup():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    # tenant por defecto con sus reglas precargadas
    async with AsyncSessionLocal() as session:
        await get_or_create_config(session, settings.default_bot_id)
        await seed_default_rules(session, settings.default_bot_id)
    logger.info("[BOOT] tablas listas, bot por defecto=%s", settings.default_bot_id)

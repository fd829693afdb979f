from decimal import Decimal
from typing import List, Optional
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from app.db.models.product import Product
from app.services.text import normalize

async def list_products(session: AsyncSession, bot_id: str) -> List[Product]:
    q = select(Product).where(Product.bot_id == bot_id).order_by(Product.id.desc())
    return list((await session.execute(q)).scalars().all())

async def list_catalog(session: AsyncSession, bot_id: str, limit: int = 20) -> List[str]:
    q = select(Product.name).where(Product.bot_id == bot_id).order_by(Product.id.desc()).limit(limit)
    return [n for n in (await session.execute(q)).scalars().all()]

def best_product_match(products: List[Product], message: str) -> Optional[Product]:
    # el nombre (o una palabra de más de 2 letras del nombre) aparece en el mensaje; gana el nombre más largo
    msg = normalize(message)
    best = None
    for p in products:
        name = normalize(p.name or "")
        if not name:
            continue
        if name in msg or any(len(tok) > 2 and tok in msg for tok in name.split(" ")):
            if best is None or len(p.name or "") > len(best.name or ""):
                best = p
    return best

async def find_best_match(session: AsyncSession, bot_id: str, message: str) -> Optional[Product]:
    return best_product_match(await list_products(session, bot_id), message)

async def find_by_name(session: AsyncSession, bot_id: str, name: str) -> Optional[Product]:
    q = (
        select(Product)
        .where(Product.bot_id == bot_id, func.lower(Product.name) == name.strip().lower())
        .limit(1)
    )
    return (await session.execute(q)).scalar_one_or_none()

async def create_product(session: AsyncSession, *, bot_id: str, name: str, price: Decimal, stock: int) -> Product:
    p = Product(bot_id=bot_id, name=name, price=price, stock=stock)
    session.add(p)
    await session.commit()
    await session.refresh(p)
    return p

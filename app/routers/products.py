from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_session
from app.schemas.product import ProductCreate, ProductOut
from app.services.products import create_product, list_products

router = APIRouter(prefix="/api/products", tags=["products"])

@router.get("", response_model=List[ProductOut])
async def list_products_route(bot_id: str = "default", session: AsyncSession = Depends(get_session)):
    try:
        return await list_products(session, bot_id)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e)[:400])

@router.post("", response_model=ProductOut)
async def create_product_route(payload: ProductCreate, session: AsyncSession = Depends(get_session)):
    try:
        return await create_product(session, **payload.model_dump())
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e)[:400])

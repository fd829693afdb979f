import time
from fastapi import APIRouter

router = APIRouter(tags=["health"])

@router.get("/healthz")
async def healthz():
    return {"ok": True, "ts": int(time.time() * 1000)}

from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_session
from app.schemas.appointment import AppointmentCreate, AppointmentOut, AvailabilityOut
from app.services.bot_configs import get_or_create_config
from app.services.dates import resolve_datetime
from app.services.nlu import NluDelegate, get_nlu_delegate
from app.services.scheduling import book_appointment, has_conflict, list_appointments

router = APIRouter(prefix="/api/appointments", tags=["appointments"])

@router.get("", response_model=List[AppointmentOut])
async def list_appointments_route(bot_id: str = "default", session: AsyncSession = Depends(get_session)):
    try:
        return await list_appointments(session, bot_id)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e)[:400])

@router.get("/available", response_model=AvailabilityOut)
async def availability_route(
    starts_at: str,
    bot_id: str = "default",
    session: AsyncSession = Depends(get_session),
    nlu: NluDelegate = Depends(get_nlu_delegate),
):
    try:
        when = await resolve_datetime(starts_at, nlu=nlu)
        if not when:
            raise HTTPException(status_code=400, detail="Fecha inválida")
        cfg, _ = await get_or_create_config(session, bot_id)
        busy = await has_conflict(session, bot_id, when, int(cfg.slot_minutes or 30))
        return {"ok": True, "available": not busy, "starts_at": when}
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e)[:400])

@router.post("", response_model=AppointmentOut)
async def create_appointment_route(
    payload: AppointmentCreate,
    session: AsyncSession = Depends(get_session),
    nlu: NluDelegate = Depends(get_nlu_delegate),
):
    try:
        when = await resolve_datetime(payload.starts_at, nlu=nlu)
        if not when:
            raise HTTPException(status_code=400, detail="Fecha inválida")
        cfg, _ = await get_or_create_config(session, payload.bot_id)
        slot = int(cfg.slot_minutes or 30)
        result = await book_appointment(
            session, bot_id=payload.bot_id, customer=payload.customer,
            starts_at=when, slot_minutes=slot, notes=payload.notes,
        )
        if not result.booked:
            raise HTTPException(status_code=409, detail="Horario no disponible")
        return AppointmentOut(
            id=result.appointment_id, bot_id=payload.bot_id, customer=payload.customer,
            starts_at=when, notes=payload.notes,
        )
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e)[:400])

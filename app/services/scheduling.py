import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Tuple
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from app.db.models.appointment import Appointment
from app.db.models.bot_config import BotConfig

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class BookingResult:
    booked: bool
    appointment_id: Optional[int] = None
    starts_at: Optional[datetime] = None

def conflict_window(candidate: datetime, slot_minutes: int) -> Tuple[datetime, datetime]:
    """Ventana inclusiva [candidato - slot, candidato + slot] en UTC."""
    c = candidate.astimezone(timezone.utc)
    slot = timedelta(minutes=int(slot_minutes))
    return c - slot, c + slot

async def has_conflict(session: AsyncSession, bot_id: str, starts_at: datetime, slot_minutes: int) -> bool:
    lo, hi = conflict_window(starts_at, slot_minutes)
    q = (
        select(Appointment.id)
        .where(Appointment.bot_id == bot_id, Appointment.starts_at.between(lo, hi))
        .limit(1)
    )
    return (await session.execute(q)).first() is not None

async def book_appointment(
    session: AsyncSession,
    *,
    bot_id: str,
    customer: str,
    starts_at: datetime,
    slot_minutes: int,
    notes: Optional[str] = None,
) -> BookingResult:
    """
    Chequeo de choque + insert en una misma transacción. La fila de bot_configs
    del tenant se bloquea (FOR UPDATE) para serializar reservas concurrentes.
    """
    await session.execute(select(BotConfig.bot_id).where(BotConfig.bot_id == bot_id).with_for_update())
    if await has_conflict(session, bot_id, starts_at, slot_minutes):
        await session.rollback()
        logger.info("[BOOKING] horario ocupado bot=%s starts_at=%s", bot_id, starts_at.isoformat())
        return BookingResult(booked=False, starts_at=starts_at)

    appt = Appointment(
        bot_id=bot_id,
        customer=customer,
        starts_at=starts_at.astimezone(timezone.utc),
        notes=notes,
    )
    session.add(appt)
    await session.flush()
    appt_id = appt.id
    await session.commit()
    logger.info("[BOOKING] turno %s creado bot=%s starts_at=%s", appt_id, bot_id, starts_at.isoformat())
    return BookingResult(booked=True, appointment_id=appt_id, starts_at=starts_at)

async def list_appointments(session: AsyncSession, bot_id: str) -> List[Appointment]:
    q = select(Appointment).where(Appointment.bot_id == bot_id).order_by(Appointment.starts_at.desc())
    return list((await session.execute(q)).scalars().all())

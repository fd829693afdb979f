from datetime import datetime, timedelta, timezone

import pytest

from app.db.models.appointment import Appointment
from app.services.scheduling import book_appointment, conflict_window, has_conflict, list_appointments
from conftest import TZ

TWO_PM = datetime(2026, 10, 23, 14, 0, tzinfo=TZ)


def test_conflict_window_is_utc_and_symmetric():
    lo, hi = conflict_window(TWO_PM, 30)
    assert lo == datetime(2026, 10, 23, 16, 30, tzinfo=timezone.utc)
    assert hi == datetime(2026, 10, 23, 17, 30, tzinfo=timezone.utc)
    assert lo.tzinfo is timezone.utc


@pytest.mark.asyncio
@pytest.mark.parametrize("minutes, busy", [
    (0, True),
    (20, True),     # dentro del turno existente
    (30, True),     # borde: la ventana es inclusiva
    (-30, True),
    (31, False),
    (-31, False),
    (60, False),
])
async def test_has_conflict_inclusive_window(db_session, minutes, busy):
    db_session.add(Appointment(bot_id="t", customer="Ana", starts_at=TWO_PM.astimezone(timezone.utc)))
    await db_session.commit()
    candidate = TWO_PM + timedelta(minutes=minutes)
    assert await has_conflict(db_session, "t", candidate, 30) is busy


@pytest.mark.asyncio
async def test_other_tenant_does_not_collide(db_session):
    db_session.add(Appointment(bot_id="t", customer="Ana", starts_at=TWO_PM.astimezone(timezone.utc)))
    await db_session.commit()
    assert await has_conflict(db_session, "otro", TWO_PM, 30) is False


@pytest.mark.asyncio
async def test_book_then_reject_same_slot(db_session):
    first = await book_appointment(db_session, bot_id="t", customer="Ana", starts_at=TWO_PM, slot_minutes=30)
    assert first.booked is True
    assert first.appointment_id is not None

    second = await book_appointment(
        db_session, bot_id="t", customer="Beto", starts_at=TWO_PM + timedelta(minutes=15), slot_minutes=30,
    )
    assert second.booked is False
    assert second.appointment_id is None

    rows = await list_appointments(db_session, "t")
    assert [r.customer for r in rows] == ["Ana"]


@pytest.mark.asyncio
async def test_list_appointments_newest_first(db_session):
    await book_appointment(db_session, bot_id="t", customer="Ana", starts_at=TWO_PM, slot_minutes=30)
    await book_appointment(db_session, bot_id="t", customer="Beto", starts_at=TWO_PM + timedelta(days=1), slot_minutes=30)
    rows = await list_appointments(db_session, "t")
    assert [r.customer for r in rows] == ["Beto", "Ana"]

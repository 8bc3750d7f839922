# blueprints/slots/services.py
from __future__ import annotations
import logging
from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from flask import current_app
from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError

from extensions import db
from models import TimeSlot
from blueprints.core.errors import CapacityExceeded, NotFound, StoreError, ValidationError
from blueprints.core.store import commit
from .validators import ensure_time_range

log = logging.getLogger(__name__)

@dataclass
class SlotOut:
    id: str
    date: str
    time_range: str
    max_capacity: int
    current_bookings: int
    is_active: bool
    available: bool

def slot_to_out(slot: TimeSlot) -> SlotOut:
    return SlotOut(
        id=slot.id,
        date=slot.date.isoformat(),
        time_range=slot.time_range,
        max_capacity=slot.max_capacity,
        current_bookings=slot.current_bookings,
        is_active=slot.is_active,
        available=slot.available,
    )

def _execute(stmt, what: str):
    try:
        return db.session.execute(stmt)
    except SQLAlchemyError as ex:
        db.session.rollback()
        raise StoreError(f"Could not save {what}") from ex

def list_available_slots(on: date) -> List[TimeSlot]:
    """Active slots of a day sorted by time range. Empty on lookup failure."""
    try:
        return (TimeSlot.query
                .filter(TimeSlot.date == on, TimeSlot.is_active.is_(True))
                .order_by(TimeSlot.time_range.asc())
                .all())
    except SQLAlchemyError as ex:
        db.session.rollback()
        log.warning("slot listing failed", extra={"event": "slot_list_failed", "reason": str(ex)})
        return []

def reserve(slot_id: str) -> TimeSlot:
    # single conditional UPDATE: the row is only bumped while there is room
    stmt = (
        update(TimeSlot)
        .where(TimeSlot.id == slot_id,
               TimeSlot.is_active.is_(True),
               TimeSlot.current_bookings < TimeSlot.max_capacity)
        .values(current_bookings=TimeSlot.current_bookings + 1)
        .execution_options(synchronize_session=False)
    )
    res = _execute(stmt, "reservation")
    commit("reservation")

    slot: TimeSlot | None = db.session.get(TimeSlot, slot_id, populate_existing=True)
    if slot is None:
        raise NotFound("Slot not found", slot_id=slot_id)
    if res.rowcount == 0:
        log.info("slot full", extra={"event": "capacity_exceeded", "slot_id": slot_id})
        raise CapacityExceeded(slot_id=slot_id, current_bookings=slot.current_bookings,
                               max_capacity=slot.max_capacity)
    return slot

def release(slot_id: str) -> None:
    """Give one booking back; never drops below zero."""
    _execute(
        update(TimeSlot)
        .where(TimeSlot.id == slot_id, TimeSlot.current_bookings > 0)
        .values(current_bookings=TimeSlot.current_bookings - 1)
        .execution_options(synchronize_session=False),
        "reservation release",
    )
    commit("reservation release")

def resolve_slot(on: date, time_range: str) -> Optional[TimeSlot]:
    slot = TimeSlot.query.filter_by(date=on, time_range=time_range).first()
    if slot or not current_app.config.get("SLOT_AUTO_PROVISION", False):
        return slot
    slot = TimeSlot(
        date=on,
        time_range=time_range,
        max_capacity=int(current_app.config.get("SLOT_DEFAULT_CAPACITY", 10)),
        current_bookings=0,
        is_active=True,
    )
    db.session.add(slot)
    commit("slot")
    log.info("slot provisioned", extra={"event": "slot_provisioned", "slot_id": slot.id})
    return slot

def create_slot(*, on: date, time_range: str, max_capacity: int, is_active: bool = True) -> TimeSlot:
    try:
        ensure_time_range(time_range)
    except ValueError as ve:
        raise ValidationError(str(ve)) from ve
    if max_capacity < 0:
        raise ValidationError("max_capacity must be >= 0")
    if TimeSlot.query.filter_by(date=on, time_range=time_range).first():
        raise ValidationError("Slot already exists", date=on.isoformat(), time_range=time_range)
    slot = TimeSlot(date=on, time_range=time_range, max_capacity=max_capacity,
                    current_bookings=0, is_active=is_active)
    db.session.add(slot)
    commit("slot")
    return slot

def update_slot(slot_id: str, *, max_capacity: Optional[int] = None, is_active: Optional[bool] = None) -> TimeSlot:
    slot: TimeSlot | None = db.session.get(TimeSlot, slot_id)
    if not slot:
        raise NotFound("Slot not found", slot_id=slot_id)
    if max_capacity is not None:
        if max_capacity < slot.current_bookings:
            raise ValidationError("max_capacity below current bookings",
                                  current_bookings=slot.current_bookings)
        slot.max_capacity = max_capacity
    if is_active is not None:
        slot.is_active = is_active
    commit("slot")
    return slot

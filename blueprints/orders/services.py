# blueprints/orders/services.py
"""Order lifecycle: booking, status transitions and lookups.

Status moves along pending -> pickup -> washing -> drying -> completed ->
delivered, but ``transition`` accepts any of the six values from any state:
staff may jump or step back.
"""
from __future__ import annotations
import logging
from collections import OrderedDict
from datetime import date, datetime, time as dt_time
from typing import Any, Dict, List, Mapping, Optional

from flask import current_app
from sqlalchemy import func, or_

from extensions import db
from models import (
    CLOTHING_TYPES, LAUNDRY_TYPES, ORDER_STATUSES,
    ClothingItem, LaundryOrder, OrderStatus, TimeSlot, User,
)
from blueprints.barcodes import services as barcodes
from blueprints.core.errors import ItemLimitError, NotFound, StoreError, ValidationError
from blueprints.core.store import commit
from blueprints.notifications import services as notifications
from blueprints.slots import services as slots
from blueprints.slots.validators import ensure_time_range

log = logging.getLogger(__name__)

PICKUP_TITLE = "Order Picked Up"
PICKUP_MESSAGE = "Your laundry order has been picked up and is being processed."
BARCODE_ATTEMPTS = 5

# ---------- helpers ----------
def _coerce_date(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value))
    except ValueError:
        raise ValidationError("preferred_date must be YYYY-MM-DD") from None

def _clean(value: Optional[str]) -> str:
    return (value or "").strip()

def _check_items(items: Mapping[str, Any] | None) -> Dict[str, int]:
    clean: Dict[str, int] = {}
    for ctype, qty in (items or {}).items():
        if ctype not in CLOTHING_TYPES:
            raise ValidationError(f"Unknown clothing type: {ctype}", allowed=list(CLOTHING_TYPES))
        if isinstance(qty, bool) or not isinstance(qty, int) or qty < 0:
            raise ValidationError(f"Quantity for {ctype} must be a non-negative integer")
        clean[ctype] = clean.get(ctype, 0) + qty
    total = sum(clean.values())
    limit = int(current_app.config.get("MAX_ITEMS_PER_ORDER", 10))
    if total < 1 or total > limit:
        raise ItemLimitError(f"Clothing quantity must be between 1 and {limit}", total=total)
    return clean

def _allocate_barcode() -> str:
    prefix = current_app.config.get("BARCODE_PREFIX", barcodes.DEFAULT_PREFIX)
    token = barcodes.generate_token(prefix=prefix)
    for _ in range(BARCODE_ATTEMPTS):
        if not LaundryOrder.query.filter_by(barcode=token).first():
            return token
        token = barcodes.random_token(prefix)
    raise StoreError("Could not allocate a unique barcode")

# ---------- create ----------
def create_order(
    *,
    user: User,
    student_name: Optional[str],
    room_number: Optional[str],
    preferred_date,
    preferred_time: Optional[str],
    items: Mapping[str, Any] | None,
    laundry_type: str = "normal",
    phone_number: Optional[str] = None,
    slot_id: Optional[str] = None,
    special_instructions: Optional[str] = None,
) -> LaundryOrder:
    """Validate, reserve a slot and persist a new pending order with its items."""
    student_name = _clean(student_name)
    room_number = _clean(room_number)
    preferred_time = _clean(preferred_time)
    missing = [name for name, val in (
        ("student_name", student_name),
        ("room_number", room_number),
        ("preferred_date", preferred_date),
        ("preferred_time", preferred_time),
    ) if not val]
    if missing:
        raise ValidationError("Please fill in all required fields", fields=missing)

    on = _coerce_date(preferred_date)
    try:
        ensure_time_range(preferred_time)
    except ValueError as ve:
        raise ValidationError(str(ve)) from ve
    if laundry_type not in LAUNDRY_TYPES:
        raise ValidationError("laundry_type must be normal or stain")
    clean_items = _check_items(items)
    barcode = _allocate_barcode()

    # 1) capacity
    slot = None
    if slot_id:
        chosen: TimeSlot | None = db.session.get(TimeSlot, slot_id)
        if chosen is None:
            raise NotFound("Slot not found", slot_id=slot_id)
        if (chosen.date, chosen.time_range) != (on, preferred_time):
            raise ValidationError("Slot does not match the preferred date and time",
                                  slot_id=slot_id, slot_date=chosen.date.isoformat(),
                                  slot_time_range=chosen.time_range)
        slot = slots.reserve(chosen.id)
    else:
        found = slots.resolve_slot(on, preferred_time)
        if found is not None:
            slot = slots.reserve(found.id)

    # 2) order + items; the reservation above is already committed
    order = LaundryOrder(
        user_id=user.id,
        student_name=student_name,
        room_number=room_number,
        phone_number=_clean(phone_number) or user.phone_number,
        laundry_type=laundry_type,
        preferred_date=on,
        preferred_time=preferred_time,
        slot_id=slot.id if slot else None,
        special_instructions=_clean(special_instructions) or None,
        barcode=barcode,
        status=OrderStatus.PENDING.value,
    )
    for ctype, qty in clean_items.items():
        if qty:
            order.items.append(ClothingItem(clothing_type=ctype, quantity=qty))
    db.session.add(order)
    try:
        commit("order")
    except StoreError:
        if slot is not None:
            try:
                slots.release(slot.id)
            except StoreError:
                log.error("orphaned reservation", extra={"event": "orphaned_reservation", "slot_id": slot.id})
        raise

    log.info("order created", extra={"event": "order_created", "order_id": order.id,
                                     "slot_id": order.slot_id, "user_id": user.id})
    return order

# ---------- state machine ----------
def get_order(order_id: str) -> LaundryOrder:
    order: LaundryOrder | None = db.session.get(LaundryOrder, order_id)
    if not order:
        raise NotFound("Order not found", order_id=order_id)
    return order

def transition(order_id: str, new_status: str, *, note: Optional[str] = None,
               feedback: Optional[str] = None) -> LaundryOrder:
    if new_status not in ORDER_STATUSES:
        raise ValidationError(f"Unknown status: {new_status}", allowed=list(ORDER_STATUSES))
    order = get_order(order_id)

    previous = order.status
    order.status = new_status
    if feedback is not None:
        order.feedback = feedback
    if note is not None:
        order.slot_note = note
    if new_status == OrderStatus.PICKUP.value:
        notifications.notify(order.user_id, PICKUP_TITLE, PICKUP_MESSAGE, order_id=order.id)
    commit("order status")

    log.info("order transition", extra={"event": "order_transition", "order_id": order.id,
                                        "reason": f"{previous}->{new_status}"})
    return order

def find_by_barcode_or_id(token: str) -> LaundryOrder:
    code = _clean(token)
    if not code:
        raise ValidationError("Please enter a barcode to scan")
    order = LaundryOrder.query.filter_by(barcode=code).first()
    if order:
        return order
    order = (LaundryOrder.query
             .filter(LaundryOrder.id.contains(code, autoescape=True))
             .order_by(LaundryOrder.created_at.asc())
             .first())
    if not order:
        raise NotFound("No order found with this barcode", code=code)
    return order

# ---------- listings ----------
def list_orders(*, q: str = "", status: str = "", page: int = 1, per_page: int = 20) -> Dict[str, Any]:
    query = LaundryOrder.query
    if q:
        term = q.strip()
        query = query.filter(or_(
            LaundryOrder.student_name.ilike(f"%{term}%"),
            LaundryOrder.room_number.ilike(f"%{term}%"),
            LaundryOrder.id.contains(term, autoescape=True),
            LaundryOrder.barcode.contains(term, autoescape=True),
        ))
    if status and status != "all":
        if status not in ORDER_STATUSES:
            raise ValidationError(f"Unknown status: {status}")
        query = query.filter(LaundryOrder.status == status)
    total = query.count()
    rows = (query.order_by(LaundryOrder.created_at.desc())
            .offset((page - 1) * per_page).limit(per_page).all())
    return {"items": [to_dict(o) for o in rows], "meta": {"page": page, "per_page": per_page, "total": total}}

def orders_for_user(user_id: str) -> List[LaundryOrder]:
    return (LaundryOrder.query.filter_by(user_id=user_id)
            .order_by(LaundryOrder.created_at.desc()).all())

def schedule_for_user(user_id: str) -> List[Dict[str, Any]]:
    """A student's orders grouped by the day they were booked, newest day first."""
    grouped: "OrderedDict[str, list]" = OrderedDict()
    for o in orders_for_user(user_id):
        grouped.setdefault(o.created_at.date().isoformat(), []).append(to_dict(o, with_items=False))
    return [{"date": d, "orders": items} for d, items in grouped.items()]

def status_counts(today: Optional[date] = None) -> Dict[str, Any]:
    today = today or datetime.utcnow().date()
    rows = (db.session.query(LaundryOrder.status, func.count(LaundryOrder.id))
            .group_by(LaundryOrder.status).all())
    by_status = {s: 0 for s in ORDER_STATUSES}
    for st, cnt in rows:
        by_status[st] = cnt
    start = datetime.combine(today, dt_time.min)
    end = datetime.combine(today, dt_time.max)
    todays = (LaundryOrder.query
              .filter(LaundryOrder.created_at >= start, LaundryOrder.created_at <= end)
              .count())
    return {"by_status": by_status, "total": sum(by_status.values()), "today": todays}

# ---------- serialization ----------
def to_dict(o: LaundryOrder, *, with_items: bool = True) -> Dict[str, Any]:
    out = {
        "id": o.id,
        "user_id": o.user_id,
        "student_name": o.student_name,
        "room_number": o.room_number,
        "phone_number": o.phone_number,
        "laundry_type": o.laundry_type,
        "preferred_date": o.preferred_date.isoformat(),
        "preferred_time": o.preferred_time,
        "slot_id": o.slot_id,
        "special_instructions": o.special_instructions,
        "barcode": o.barcode,
        "status": o.status,
        "batch_id": o.batch_id,
        "feedback": o.feedback,
        "slot_note": o.slot_note,
        "created_at": o.created_at.isoformat() if o.created_at else None,
        "updated_at": o.updated_at.isoformat() if o.updated_at else None,
    }
    if with_items:
        out["items"] = {i.clothing_type: i.quantity for i in o.items}
        out["total_items"] = o.total_items
    return out

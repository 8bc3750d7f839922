# blueprints/slots/routes.py
from __future__ import annotations
from dataclasses import asdict
from datetime import date

from flask import Blueprint, jsonify, request
from pydantic import ValidationError as PydanticValidationError

from blueprints.auth.routes import admin_required
from blueprints.core.errors import ValidationError, pydantic_errors_safe
from . import services as svc
from .schemas import TimeSlotIn, TimeSlotPatch

api_bp = Blueprint("slots_api", __name__)

@api_bp.get("/slots")
def api_slots_list():
    d = request.args.get("date")
    try:
        on = date.fromisoformat(d) if d else date.today()
    except ValueError:
        raise ValidationError("Bad date") from None
    slots = svc.list_available_slots(on)
    return jsonify({"date": on.isoformat(), "items": [asdict(svc.slot_to_out(s)) for s in slots]})

@api_bp.post("/admin/slots")
@admin_required
def api_slots_create():
    payload = request.get_json(silent=True) or {}
    try:
        data = TimeSlotIn.model_validate(payload)
    except PydanticValidationError as ve:
        return jsonify({"error": "validation_error", "detail": pydantic_errors_safe(ve)}), 422
    slot = svc.create_slot(on=data.date, time_range=data.time_range,
                           max_capacity=data.max_capacity, is_active=data.is_active)
    return jsonify({"ok": True, "slot": asdict(svc.slot_to_out(slot))}), 201

@api_bp.patch("/admin/slots/<slot_id>")
@admin_required
def api_slots_update(slot_id: str):
    payload = request.get_json(silent=True) or {}
    try:
        data = TimeSlotPatch.model_validate(payload)
    except PydanticValidationError as ve:
        return jsonify({"error": "validation_error", "detail": pydantic_errors_safe(ve)}), 422
    slot = svc.update_slot(slot_id, max_capacity=data.max_capacity, is_active=data.is_active)
    return jsonify({"ok": True, "slot": asdict(svc.slot_to_out(slot))})

# blueprints/orders/routes.py
from __future__ import annotations
from flask import Blueprint, jsonify, request, abort
from flask_login import login_required, current_user
from pydantic import ValidationError as PydanticValidationError

from blueprints.auth.routes import staff_required
from blueprints.core.errors import ValidationError, pydantic_errors_safe
from . import services as svc
from .schemas import OrderIn, StatusIn

api_bp = Blueprint("orders_api", __name__)

def _page_args() -> tuple[int, int]:
    try:
        page = max(1, int(request.args.get("page", 1)))
        per_page = min(100, max(1, int(request.args.get("per_page", 20))))
    except ValueError:
        raise ValidationError("Bad paging") from None
    return page, per_page

@api_bp.post("/orders")
@login_required
def api_orders_create():
    payload = request.get_json(silent=True) or {}
    try:
        data = OrderIn.model_validate(payload)
    except PydanticValidationError as ve:
        return jsonify({"error": "validation_error", "detail": pydantic_errors_safe(ve)}), 422

    order = svc.create_order(
        user=current_user,
        student_name=data.student_name,
        room_number=data.room_number,
        phone_number=data.phone_number,
        laundry_type=data.laundry_type,
        preferred_date=data.preferred_date,
        preferred_time=data.preferred_time,
        slot_id=data.slot_id,
        special_instructions=data.special_instructions,
        items=data.items,
    )
    return jsonify({"ok": True, "order_id": order.id, "barcode": order.barcode,
                    "order": svc.to_dict(order)}), 201

@api_bp.get("/orders/mine")
@login_required
def api_orders_mine():
    return jsonify({"items": [svc.to_dict(o) for o in svc.orders_for_user(current_user.id)]})

@api_bp.get("/orders/schedule")
@login_required
def api_orders_schedule():
    return jsonify({"days": svc.schedule_for_user(current_user.id)})

@api_bp.get("/orders")
@staff_required
def api_orders_list():
    page, per_page = _page_args()
    data = svc.list_orders(
        q=request.args.get("q", ""),
        status=(request.args.get("status") or "").lower(),
        page=page,
        per_page=per_page,
    )
    return jsonify(data)

@api_bp.get("/orders/scan")
@staff_required
def api_orders_scan():
    order = svc.find_by_barcode_or_id(request.args.get("code", ""))
    return jsonify({"ok": True, "order": svc.to_dict(order)})

@api_bp.get("/orders/<order_id>")
@login_required
def api_orders_get(order_id: str):
    order = svc.get_order(order_id)
    # students only see their own orders
    if not current_user.is_staff and order.user_id != current_user.id:
        abort(403)
    return jsonify(svc.to_dict(order))

@api_bp.post("/orders/<order_id>/status")
@staff_required
def api_orders_status(order_id: str):
    payload = request.get_json(silent=True) or {}
    try:
        data = StatusIn.model_validate(payload)
    except PydanticValidationError as ve:
        return jsonify({"error": "validation_error", "detail": pydantic_errors_safe(ve)}), 422
    order = svc.transition(order_id, data.status, note=data.note, feedback=data.feedback)
    return jsonify({"ok": True, "order": svc.to_dict(order)})

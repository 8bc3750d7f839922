# blueprints/notifications/routes.py
from __future__ import annotations
from flask import Blueprint, jsonify, request
from flask_login import login_required, current_user

from . import services as svc

api_bp = Blueprint("notifications_api", __name__)

@api_bp.get("/notifications")
@login_required
def api_notifications_list():
    unread_only = request.args.get("unread") in ("1", "true", "yes")
    items = svc.list_for_user(current_user.id, unread_only=unread_only)
    return jsonify({
        "items": [svc.to_dict(n) for n in items],
        "unread": svc.unread_count(current_user.id),
    })

@api_bp.post("/notifications/<notification_id>/read")
@login_required
def api_notifications_read(notification_id: str):
    n = svc.mark_read(notification_id, current_user.id)
    return jsonify({"ok": True, "notification": svc.to_dict(n)})

# blueprints/auth/routes.py
from __future__ import annotations
import logging
import re
from functools import wraps
from typing import Callable, Optional

from flask import Blueprint, request, jsonify, abort
from flask_login import login_user, logout_user, login_required, current_user

from extensions import db, login_manager
from models import ROLES, Role, User
from blueprints.core.store import commit

log = logging.getLogger(__name__)

api_bp = Blueprint("auth_api", __name__)

PHONE_RE = re.compile(r"^\+?\d{10,15}$")
OTP_RE = re.compile(r"^\d{6}$")

@login_manager.user_loader
def load_user(uid: str) -> Optional[User]:
    return db.session.get(User, uid)

@login_manager.unauthorized_handler
def _unauth():
    return jsonify({"error": "unauthorized"}), 401

def _normalize_phone(raw: str | None) -> str:
    return re.sub(r"[\s\-()]", "", raw or "")

# ---------- role decorators ----------
def admin_required(fn: Callable):
    @wraps(fn)
    @login_required
    def wrapper(*args, **kwargs):
        if getattr(current_user, "role", None) != Role.ADMIN.value:
            abort(403)
        return fn(*args, **kwargs)
    return wrapper

def staff_required(fn: Callable):
    @wraps(fn)
    @login_required
    def wrapper(*args, **kwargs):
        # admins can do everything staff can
        if getattr(current_user, "role", None) not in (Role.ADMIN.value, Role.STAFF.value):
            abort(403)
        return fn(*args, **kwargs)
    return wrapper

@api_bp.app_errorhandler(403)
def _forbidden(e):
    return jsonify({"error": "forbidden"}), 403

# ---------- API ----------
@api_bp.post("/auth/otp")
def api_send_otp():
    payload = request.get_json(silent=True) or request.form or {}
    phone = _normalize_phone(payload.get("phone_number"))
    if not PHONE_RE.match(phone):
        return jsonify({"error": "invalid_phone", "detail": "Please enter a valid 10-digit phone number"}), 400
    # codes are not delivered anywhere; any 6 digits are accepted at login
    log.info("otp requested", extra={"event": "otp_requested"})
    return jsonify({"ok": True, "sent_to": phone})

@api_bp.post("/auth/login")
def api_login():
    payload = request.get_json(silent=True) or request.form or {}
    phone = _normalize_phone(payload.get("phone_number"))
    otp = str(payload.get("otp") or "")
    role = (payload.get("role") or Role.STUDENT.value).lower()

    if not PHONE_RE.match(phone):
        return jsonify({"error": "invalid_phone"}), 400
    if not OTP_RE.match(otp):
        return jsonify({"error": "invalid_otp", "detail": "Please enter the 6-digit OTP"}), 400
    if role not in ROLES:
        return jsonify({"error": "invalid_role"}), 400

    user: Optional[User] = User.query.filter_by(phone_number=phone).first()
    if not user:
        # first login creates the account; the role is fixed from then on
        user = User(phone_number=phone, role=role)
        db.session.add(user)
        commit("user")
        log.info("user created", extra={"event": "user_created", "user_id": user.id})
    elif role != Role.STUDENT.value and user.role != role:
        return jsonify({"error": "role_mismatch"}), 403

    login_user(user, remember=True)
    return jsonify({"ok": True, "user": {"id": user.id, "phone_number": user.phone_number, "role": user.role}})

@api_bp.post("/auth/logout")
@login_required
def api_logout():
    logout_user()
    return jsonify({"ok": True})

@api_bp.get("/auth/me")
@login_required
def api_me():
    return jsonify({"id": current_user.id, "phone_number": current_user.phone_number, "role": current_user.role})

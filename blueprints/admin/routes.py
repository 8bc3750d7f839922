from __future__ import annotations
from flask import Blueprint, jsonify
from extensions import db
from models import Batch, TimeSlot, User
from blueprints.auth.routes import staff_required
from blueprints.orders import services as orders

api_bp = Blueprint("admin_api", __name__)

# ---------- API (dashboard summary) ----------
@api_bp.get("/admin/dashboard/summary")
@staff_required
def dashboard_summary():
    counts = orders.status_counts()
    open_batches = db.session.query(Batch).filter(Batch.status != "completed").count()
    students = db.session.query(User).filter(User.role == "student").count()
    active_slots = db.session.query(TimeSlot).filter(TimeSlot.is_active.is_(True)).count()
    return jsonify({
        "ok": True,
        "orders": counts,
        "counters": {"students": students, "open_batches": open_batches, "active_slots": active_slots},
    })

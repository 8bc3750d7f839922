# blueprints/reports/routes.py
from __future__ import annotations
from datetime import date
from flask import Blueprint, request, Response
from blueprints.auth.routes import admin_required
from blueprints.core.errors import ValidationError
from models import ORDER_STATUSES

from .services import orders_csv

api_bp = Blueprint("reports_api", __name__)

def _parse_dates() -> tuple[date, date]:
    try:
        d_from = date.fromisoformat(str(request.args.get("date_from")))
        d_to   = date.fromisoformat(str(request.args.get("date_to")))
    except ValueError:
        raise ValidationError("Bad date range: use YYYY-MM-DD") from None
    if d_to < d_from:
        d_from, d_to = d_to, d_from
    return d_from, d_to

def _csv_resp(content: str, filename: str) -> Response:
    return Response(
        content,
        mimetype="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )

@api_bp.get("/admin/reports/orders.csv")
@admin_required
def orders_report():
    d_from, d_to = _parse_dates()
    status = (request.args.get("status") or "").lower() or None
    if status and status not in ORDER_STATUSES:
        raise ValidationError(f"Unknown status: {status}")
    csv_data = orders_csv(d_from, d_to, status)
    return _csv_resp(csv_data, f"orders_{d_from.isoformat()}_{d_to.isoformat()}.csv")

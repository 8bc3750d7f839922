# blueprints/reports/services.py
from __future__ import annotations
from datetime import date
from io import StringIO
import csv
from typing import List, Optional

from models import LaundryOrder

HEADER = [
    "preferred_date", "preferred_time", "barcode", "status", "student_name", "room_number",
    "phone_number", "laundry_type", "total_items", "batch_id", "created_at",
]

def orders_csv(d_from: date, d_to: date, status: Optional[str] = None) -> str:
    """
    CSV: preferred_date;preferred_time;barcode;status;student_name;room_number;phone_number;laundry_type;total_items;batch_id;created_at
    """
    q = LaundryOrder.query.filter(LaundryOrder.preferred_date >= d_from, LaundryOrder.preferred_date <= d_to)
    if status:
        q = q.filter(LaundryOrder.status == status)
    # stable order: date, time range, creation
    q = q.order_by(LaundryOrder.preferred_date.asc(), LaundryOrder.preferred_time.asc(),
                   LaundryOrder.created_at.asc())

    rows: List[list] = []
    for o in q.all():
        rows.append([
            o.preferred_date.isoformat(),
            o.preferred_time,
            o.barcode,
            o.status,
            o.student_name,
            o.room_number,
            o.phone_number,
            o.laundry_type,
            o.total_items,
            o.batch_id or "",
            o.created_at.isoformat(timespec="seconds") if o.created_at else "",
        ])

    buf = StringIO()
    w = csv.writer(buf, delimiter=";")
    w.writerow(HEADER)
    w.writerows(rows)
    return buf.getvalue()

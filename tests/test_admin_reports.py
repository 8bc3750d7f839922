from __future__ import annotations
from datetime import date

import pytest

from app import create_app
from extensions import db
from models import TimeSlot, User
from blueprints.orders import services as orders
from blueprints.reports.services import HEADER, orders_csv

@pytest.fixture()
def client_app():
    app = create_app("test")
    with app.app_context():
        db.create_all()
        admin = User(phone_number="9000000001", role="admin")
        staff = User(phone_number="9000000002", role="staff")
        student = User(phone_number="9876543210", role="student")
        db.session.add_all([admin, staff, student])
        db.session.add(TimeSlot(date=date(2024, 1, 10), time_range="09:00-11:00", max_capacity=5))
        db.session.commit()

        for day, name in ((date(2024, 1, 10), "Asha Rao"), (date(2024, 1, 12), "Vikram Singh")):
            orders.create_order(user=student, student_name=name, room_number="B-214",
                                preferred_date=day, preferred_time="09:00-11:00",
                                items={"shirts": 2, "towels": 1})
    yield app
    with app.app_context():
        db.drop_all()

def _login(client, phone, role):
    r = client.post("/api/v1/auth/login", json={"phone_number": phone, "otp": "123456", "role": role})
    assert r.status_code == 200, r.get_json()

def test_orders_csv(client_app):
    with client_app.app_context():
        content = orders_csv(date(2024, 1, 1), date(2024, 1, 31))
    lines = content.strip().splitlines()
    assert lines[0].split(";") == HEADER
    assert len(lines) == 3
    first = lines[1].split(";")
    assert first[0] == "2024-01-10"
    assert first[4] == "Asha Rao"
    assert first[8] == "3"

    with client_app.app_context():
        narrow = orders_csv(date(2024, 1, 11), date(2024, 1, 12), status="pending")
        none = orders_csv(date(2024, 1, 1), date(2024, 1, 31), status="delivered")
    assert len(narrow.strip().splitlines()) == 2
    assert len(none.strip().splitlines()) == 1

def test_report_endpoint_admin_only(client_app):
    staff = client_app.test_client()
    _login(staff, "9000000002", "staff")
    assert staff.get("/api/v1/admin/reports/orders.csv?date_from=2024-01-01&date_to=2024-01-31").status_code == 403

    admin = client_app.test_client()
    _login(admin, "9000000001", "admin")
    r = admin.get("/api/v1/admin/reports/orders.csv?date_from=2024-01-31&date_to=2024-01-01")
    assert r.status_code == 200
    assert r.mimetype == "text/csv"
    assert 'filename="orders_2024-01-01_2024-01-31.csv"' in r.headers["Content-Disposition"]
    assert len(r.get_data(as_text=True).strip().splitlines()) == 3

    r = admin.get("/api/v1/admin/reports/orders.csv?date_from=x&date_to=y")
    assert r.status_code == 400
    assert r.get_json()["error"] == "validation_error"
    r = admin.get("/api/v1/admin/reports/orders.csv?date_from=2024-01-01&date_to=2024-01-31&status=lost")
    assert r.status_code == 400
    assert r.get_json()["error"] == "validation_error"

def test_dashboard_summary(client_app):
    staff = client_app.test_client()
    _login(staff, "9000000002", "staff")
    r = staff.get("/api/v1/admin/dashboard/summary")
    assert r.status_code == 200
    data = r.get_json()
    assert data["orders"]["total"] == 2
    assert data["orders"]["by_status"]["pending"] == 2
    assert data["counters"]["students"] == 1
    assert data["counters"]["open_batches"] == 0
    # one seeded slot plus one provisioned for 2024-01-12
    assert data["counters"]["active_slots"] == 2

def test_dashboard_requires_staff(client_app):
    student = client_app.test_client()
    _login(student, "9876543210", "student")
    assert student.get("/api/v1/admin/dashboard/summary").status_code == 403

from __future__ import annotations
from datetime import date

import pytest

from app import create_app
from extensions import db
from models import Batch, LaundryOrder, User
from blueprints.batches import services as svc
from blueprints.core.errors import NotFound, StoreError, ValidationError
from blueprints.orders import services as orders

@pytest.fixture()
def app_ctx():
    app = create_app("test")
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()

@pytest.fixture()
def student(app_ctx):
    u = User(phone_number="9876543210", role="student")
    db.session.add(u)
    db.session.commit()
    return u

def _order(user, name="Asha Rao"):
    return orders.create_order(user=user, student_name=name, room_number="B-214",
                               preferred_date=date(2024, 1, 10), preferred_time="09:00-11:00",
                               items={"shirts": 2})

def test_create_batch_requires_name(app_ctx):
    with pytest.raises(ValidationError):
        svc.create_batch("   ")
    b = svc.create_batch(" Morning load ")
    assert (b.name, b.status) == ("Morning load", "created")
    assert b.order_ids == []

def test_add_order_keeps_insertion_order_and_duplicates(student):
    b = svc.create_batch("Load 1")
    o1, o2 = _order(student), _order(student)
    svc.add_order(b.id, o2.id)
    svc.add_order(b.id, o1.id)
    svc.add_order(b.id, o2.id)
    got = svc.get_batch(b.id)
    assert got.order_ids == [o2.id, o1.id, o2.id]
    assert db.session.get(LaundryOrder, o1.id).batch_id == b.id

def test_add_order_unknown(student):
    b = svc.create_batch("Load 1")
    with pytest.raises(NotFound):
        svc.add_order(b.id, "missing")
    with pytest.raises(NotFound):
        svc.add_order("missing", _order(student).id)

def test_advance_fans_out_to_orders(student):
    b = svc.create_batch("Load 1")
    ids = [_order(student).id for _ in range(3)]
    for oid in ids:
        svc.add_order(b.id, oid)

    result = svc.advance_batch(b.id, "washing")
    assert result.failed == []
    assert result.transitioned == ids
    assert db.session.get(Batch, b.id).status == "washing"
    assert {db.session.get(LaundryOrder, i).status for i in ids} == {"washing"}

def test_advance_without_fanout(student):
    b = svc.create_batch("Load 1")
    o = _order(student)
    svc.add_order(b.id, o.id)
    result = svc.advance_batch(b.id, "created")
    assert result.transitioned == []
    assert db.session.get(LaundryOrder, o.id).status == "pending"

def test_advance_unknown_status(app_ctx):
    b = svc.create_batch("Load 1")
    with pytest.raises(ValidationError):
        svc.advance_batch(b.id, "pickup")
    assert svc.get_batch(b.id).status == "created"
    with pytest.raises(NotFound):
        svc.advance_batch("missing", "washing")

def test_advance_reports_partial_failure(student, monkeypatch):
    b = svc.create_batch("Load 1")
    ids = [_order(student).id for _ in range(3)]
    for oid in ids:
        svc.add_order(b.id, oid)

    real_transition = orders.transition

    def flaky(order_id, new_status, **kw):
        if order_id == ids[1]:
            raise StoreError("Could not save order status")
        return real_transition(order_id, new_status, **kw)

    monkeypatch.setattr(orders, "transition", flaky)
    result = svc.advance_batch(b.id, "completed")

    assert result.transitioned == [ids[0], ids[2]]
    assert [(f.order_id, f.code) for f in result.failed] == [(ids[1], "store_error")]
    statuses = [db.session.get(LaundryOrder, i).status for i in ids]
    assert statuses == ["completed", "pending", "completed"]

# ---------- API ----------
@pytest.fixture()
def api_app():
    app = create_app("test")
    with app.app_context():
        db.create_all()
        db.session.add(User(phone_number="9000000002", role="staff"))
        db.session.commit()
    yield app
    with app.app_context():
        db.drop_all()

def _login(client, phone, role="student"):
    r = client.post("/api/v1/auth/login", json={"phone_number": phone, "otp": "123456", "role": role})
    assert r.status_code == 200, r.get_json()

def test_api_batch_flow(api_app):
    student = api_app.test_client()
    _login(student, "9876543210")
    order_id = student.post("/api/v1/orders", json={
        "student_name": "Asha Rao", "room_number": "B-214",
        "preferred_date": "2024-01-10", "preferred_time": "09:00-11:00",
        "items": {"jeans": 1},
    }).get_json()["order_id"]

    staff = api_app.test_client()
    _login(staff, "9000000002", role="staff")

    r = staff.post("/api/v1/batches", json={"name": ""})
    assert r.status_code == 400

    r = staff.post("/api/v1/batches", json={"name": "Evening"})
    assert r.status_code == 201
    batch_id = r.get_json()["batch"]["id"]

    r = staff.post(f"/api/v1/batches/{batch_id}/orders", json={"order_id": order_id})
    assert r.get_json()["batch"]["orders"] == [order_id]

    r = staff.post(f"/api/v1/batches/{batch_id}/status", json={"status": "Drying"})
    assert r.status_code == 200
    body = r.get_json()
    assert body["ok"] is True
    assert body["result"]["transitioned"] == [order_id]

    assert staff.get(f"/api/v1/orders/{order_id}").get_json()["status"] == "drying"
    assert [b["id"] for b in staff.get("/api/v1/batches").get_json()["items"]] == [batch_id]
    assert staff.get("/api/v1/batches/missing").status_code == 404

    assert student.get("/api/v1/batches").status_code == 403

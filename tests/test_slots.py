from __future__ import annotations
from datetime import date

import pytest

from app import create_app
from extensions import db
from models import TimeSlot, User
from blueprints.core.errors import CapacityExceeded, NotFound, ValidationError
from blueprints.slots import services as svc
from blueprints.slots.validators import ensure_time_range, parse_time_range

DAY = date(2024, 1, 10)

@pytest.fixture()
def app_ctx():
    app = create_app("test")
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()

def _slot(time_range="09:00-11:00", cap=10, booked=0, active=True, on=DAY):
    s = TimeSlot(date=on, time_range=time_range, max_capacity=cap, current_bookings=booked, is_active=active)
    db.session.add(s)
    db.session.commit()
    return s

# ---------- time ranges ----------
def test_parse_time_range():
    start, end = parse_time_range("09:00-11:00")
    assert (start.hour, end.hour) == (9, 11)
    for bad in ("11:00-09:00", "10:00-10:00", "25:00-26:00", "9-11"):
        with pytest.raises(ValueError):
            parse_time_range(bad)
        with pytest.raises(ValueError):
            ensure_time_range(bad)

# ---------- listing ----------
def test_list_available_sorted_and_filtered(app_ctx):
    _slot("15:00-17:00")
    _slot("09:00-11:00")
    _slot("11:00-13:00", active=False)
    _slot("13:00-15:00", on=date(2024, 1, 11))

    got = svc.list_available_slots(DAY)
    assert [s.time_range for s in got] == ["09:00-11:00", "15:00-17:00"]

def test_list_includes_full_slots_marked_unavailable(app_ctx):
    _slot("09:00-11:00", cap=2, booked=2)
    [out] = [svc.slot_to_out(s) for s in svc.list_available_slots(DAY)]
    assert out.available is False
    assert out.current_bookings == 2

def test_list_degrades_to_empty_on_store_failure(app_ctx):
    _slot()
    db.drop_all()  # table gone: the query fails
    assert svc.list_available_slots(DAY) == []

# ---------- reserve / release ----------
def test_reserve_increments(app_ctx):
    s = _slot(cap=3)
    got = svc.reserve(s.id)
    assert got.current_bookings == 1

def test_last_place_then_full(app_ctx):
    s = _slot(cap=10, booked=9)
    assert svc.reserve(s.id).current_bookings == 10
    with pytest.raises(CapacityExceeded) as ei:
        svc.reserve(s.id)
    assert ei.value.context["current_bookings"] == 10
    assert db.session.get(TimeSlot, s.id).current_bookings == 10

def test_counter_never_exceeds_capacity(app_ctx):
    s = _slot(cap=3)
    ok = failed = 0
    for _ in range(7):
        try:
            svc.reserve(s.id)
            ok += 1
        except CapacityExceeded:
            failed += 1
    assert (ok, failed) == (3, 4)
    assert db.session.get(TimeSlot, s.id).current_bookings == 3

def test_reserve_inactive_slot_is_refused(app_ctx):
    s = _slot(active=False)
    with pytest.raises(CapacityExceeded):
        svc.reserve(s.id)
    assert db.session.get(TimeSlot, s.id).current_bookings == 0

def test_reserve_unknown_slot(app_ctx):
    with pytest.raises(NotFound):
        svc.reserve("nope")

def test_release_floors_at_zero(app_ctx):
    s = _slot(booked=1)
    svc.release(s.id)
    svc.release(s.id)
    assert db.session.get(TimeSlot, s.id, populate_existing=True).current_bookings == 0

# ---------- provisioning ----------
def test_resolve_slot_provisions_missing(app_ctx):
    slot = svc.resolve_slot(DAY, "17:00-19:00")
    assert slot is not None
    assert slot.max_capacity == app_ctx.config["SLOT_DEFAULT_CAPACITY"]
    # second call finds the same row
    assert svc.resolve_slot(DAY, "17:00-19:00").id == slot.id

def test_resolve_slot_without_provisioning(app_ctx):
    app_ctx.config["SLOT_AUTO_PROVISION"] = False
    assert svc.resolve_slot(DAY, "17:00-19:00") is None
    assert TimeSlot.query.count() == 0

# ---------- admin ----------
def test_create_slot_rejects_duplicates_and_bad_ranges(app_ctx):
    svc.create_slot(on=DAY, time_range="09:00-11:00", max_capacity=5)
    with pytest.raises(ValidationError):
        svc.create_slot(on=DAY, time_range="09:00-11:00", max_capacity=5)
    with pytest.raises(ValidationError):
        svc.create_slot(on=DAY, time_range="late", max_capacity=5)
    with pytest.raises(ValidationError):
        svc.create_slot(on=DAY, time_range="11:00-13:00", max_capacity=-1)

def test_update_slot_cannot_drop_below_bookings(app_ctx):
    s = _slot(cap=5, booked=3)
    with pytest.raises(ValidationError):
        svc.update_slot(s.id, max_capacity=2)
    got = svc.update_slot(s.id, max_capacity=3, is_active=False)
    assert (got.max_capacity, got.is_active) == (3, False)
    with pytest.raises(NotFound):
        svc.update_slot("nope", max_capacity=1)

# ---------- API ----------
@pytest.fixture()
def api_app():
    app = create_app("test")
    with app.app_context():
        db.create_all()
        db.session.add(User(phone_number="9000000001", role="admin"))
        db.session.commit()
    yield app
    with app.app_context():
        db.drop_all()

def _login_admin(client):
    r = client.post("/api/v1/auth/login",
                    json={"phone_number": "9000000001", "otp": "123456", "role": "admin"})
    assert r.status_code == 200, r.get_json()

def test_api_admin_slot_flow(api_app):
    c = api_app.test_client()
    _login_admin(c)

    r = c.post("/api/v1/admin/slots", json={"date": "2024-01-10", "time_range": "13:00-15:00", "max_capacity": 4})
    assert r.status_code == 201, r.get_json()
    slot = r.get_json()["slot"]
    assert slot["available"] is True

    r = c.patch(f"/api/v1/admin/slots/{slot['id']}", json={"max_capacity": 6})
    assert r.status_code == 200
    assert r.get_json()["slot"]["max_capacity"] == 6

    # public listing
    r = api_app.test_client().get("/api/v1/slots?date=2024-01-10")
    assert r.status_code == 200
    items = r.get_json()["items"]
    assert [i["time_range"] for i in items] == ["13:00-15:00"]

def test_api_slot_create_validation(api_app):
    c = api_app.test_client()
    _login_admin(c)
    r = c.post("/api/v1/admin/slots", json={"date": "not-a-date", "time_range": "13:00-15:00"})
    assert r.status_code == 422
    assert r.get_json()["error"] == "validation_error"

def test_api_slots_bad_date(api_app):
    r = api_app.test_client().get("/api/v1/slots?date=10/01/2024")
    assert r.status_code == 400
    assert r.get_json()["error"] == "validation_error"

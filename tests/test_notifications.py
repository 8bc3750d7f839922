from __future__ import annotations
import pytest

from app import create_app
from extensions import db
from models import User
from blueprints.core.errors import NotFound
from blueprints.notifications import services as svc

@pytest.fixture()
def app_ctx():
    app = create_app("test")
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()

@pytest.fixture()
def users(app_ctx):
    a = User(phone_number="9876543210")
    b = User(phone_number="9123456789")
    db.session.add_all([a, b])
    db.session.commit()
    return a, b

def test_notify_is_staged_until_commit(users):
    a, _ = users
    svc.notify(a.id, "Hello", "First")
    db.session.rollback()
    assert svc.list_for_user(a.id) == []

def test_unread_and_mark_read(users):
    a, b = users
    n1 = svc.notify(a.id, "One", "first")
    svc.notify(a.id, "Two", "second")
    db.session.commit()

    assert svc.unread_count(a.id) == 2
    svc.mark_read(n1.id, a.id)
    assert svc.unread_count(a.id) == 1
    assert [n.title for n in svc.list_for_user(a.id, unread_only=True)] == ["Two"]
    assert len(svc.list_for_user(a.id)) == 2

    # someone else's notification looks missing
    with pytest.raises(NotFound):
        svc.mark_read(n1.id, b.id)
    with pytest.raises(NotFound):
        svc.mark_read("missing", a.id)

def test_api_mark_read(app_ctx):
    client = app_ctx.test_client()
    r = client.post("/api/v1/auth/login", json={"phone_number": "9876543210", "otp": "123456"})
    user_id = r.get_json()["user"]["id"]
    n = svc.notify(user_id, "Order Picked Up", "picked")
    db.session.commit()

    r = client.get("/api/v1/notifications?unread=1")
    assert [i["id"] for i in r.get_json()["items"]] == [n.id]

    r = client.post(f"/api/v1/notifications/{n.id}/read")
    assert r.status_code == 200
    assert r.get_json()["notification"]["is_read"] is True
    assert client.get("/api/v1/notifications").get_json()["unread"] == 0
    assert client.post("/api/v1/notifications/missing/read").status_code == 404

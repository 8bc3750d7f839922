# blueprints/notifications/services.py
from __future__ import annotations
from typing import List, Optional

from extensions import db
from models import Notification
from blueprints.core.errors import NotFound
from blueprints.core.store import commit

def notify(user_id: str, title: str, message: str, order_id: Optional[str] = None) -> Notification:
    """Stage a notification in the current unit of work; the caller commits."""
    n = Notification(user_id=user_id, order_id=order_id, title=title, message=message, is_read=False)
    db.session.add(n)
    return n

def list_for_user(user_id: str, *, unread_only: bool = False) -> List[Notification]:
    q = Notification.query.filter_by(user_id=user_id)
    if unread_only:
        q = q.filter(Notification.is_read.is_(False))
    return q.order_by(Notification.created_at.desc()).all()

def unread_count(user_id: str) -> int:
    return Notification.query.filter_by(user_id=user_id, is_read=False).count()

def mark_read(notification_id: str, user_id: str) -> Notification:
    n: Notification | None = db.session.get(Notification, notification_id)
    if not n or n.user_id != user_id:
        raise NotFound("Notification not found")
    n.is_read = True
    commit("notification")
    return n

def to_dict(n: Notification) -> dict:
    return {
        "id": n.id,
        "order_id": n.order_id,
        "title": n.title,
        "message": n.message,
        "is_read": n.is_read,
        "created_at": n.created_at.isoformat() if n.created_at else None,
    }

from __future__ import annotations
import uuid
from datetime import datetime
from enum import Enum

from flask_login import UserMixin
from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from extensions import db

class Role(str, Enum):
    STUDENT = "student"
    ADMIN = "admin"
    STAFF = "staff"

ROLES = tuple(r.value for r in Role)

class User(UserMixin, db.Model):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    phone_number: Mapped[str] = mapped_column(String(20), unique=True, index=True, nullable=False)
    # plain string column so the role set is not tied to a database enum type
    role: Mapped[str] = mapped_column(String(16), index=True, nullable=False, default=Role.STUDENT.value)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    @property
    def is_staff(self) -> bool:
        return self.role in (Role.ADMIN.value, Role.STAFF.value)

    def __repr__(self):
        return f"<User {self.phone_number} {self.role}>"

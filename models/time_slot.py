from __future__ import annotations
import uuid
from datetime import date, datetime

from sqlalchemy import Boolean, CheckConstraint, Date, DateTime, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from extensions import db

class TimeSlot(db.Model):
    __tablename__ = "time_slots"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    time_range: Mapped[str] = mapped_column(String(11), nullable=False)  # "09:00-11:00"
    max_capacity: Mapped[int] = mapped_column(Integer, nullable=False, default=10)
    current_bookings: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (
        UniqueConstraint("date", "time_range", name="uq_time_slot_date_range"),
        CheckConstraint("current_bookings >= 0", name="ck_time_slot_bookings_non_negative"),
        Index("ix_time_slot_date_active", "date", "is_active"),
    )

    @property
    def available(self) -> bool:
        return bool(self.is_active) and self.current_bookings < self.max_capacity

    def __repr__(self):
        return f"<TimeSlot {self.date} {self.time_range} {self.current_bookings}/{self.max_capacity}>"

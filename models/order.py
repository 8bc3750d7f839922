from __future__ import annotations
import uuid
from datetime import date, datetime
from enum import Enum

from sqlalchemy import Date, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from extensions import db

class OrderStatus(str, Enum):
    PENDING = "pending"
    PICKUP = "pickup"
    WASHING = "washing"
    DRYING = "drying"
    COMPLETED = "completed"
    DELIVERED = "delivered"

# pipeline order: pending -> pickup -> washing -> drying -> completed -> delivered
ORDER_STATUSES = tuple(s.value for s in OrderStatus)

class LaundryType(str, Enum):
    NORMAL = "normal"
    STAIN = "stain"

LAUNDRY_TYPES = tuple(t.value for t in LaundryType)

CLOTHING_TYPES = (
    "shirts",
    "t_shirts",
    "pants",
    "jeans",
    "shorts",
    "kurtas",
    "bedsheets",
    "towels",
    "others",
)

class LaundryOrder(db.Model):
    __tablename__ = "laundry_orders"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    student_name: Mapped[str] = mapped_column(String(200), nullable=False)
    room_number: Mapped[str] = mapped_column(String(50), nullable=False)
    phone_number: Mapped[str] = mapped_column(String(20), nullable=False)
    laundry_type: Mapped[str] = mapped_column(String(16), nullable=False, default=LaundryType.NORMAL.value)
    preferred_date: Mapped[date] = mapped_column(Date, nullable=False)
    preferred_time: Mapped[str] = mapped_column(String(11), nullable=False)
    slot_id: Mapped[str | None] = mapped_column(ForeignKey("time_slots.id", ondelete="SET NULL"), nullable=True)
    special_instructions: Mapped[str | None] = mapped_column(Text)
    barcode: Mapped[str] = mapped_column(String(32), unique=True, index=True, nullable=False)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default=OrderStatus.PENDING.value, index=True)
    batch_id: Mapped[str | None] = mapped_column(ForeignKey("batches.id", ondelete="SET NULL"), nullable=True)
    feedback: Mapped[str | None] = mapped_column(Text)
    slot_note: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    user = relationship("User")
    slot = relationship("TimeSlot")
    items = relationship("ClothingItem", back_populates="order", cascade="all, delete-orphan",
                         order_by="ClothingItem.created_at")

    __table_args__ = (
        Index("ix_laundry_orders_created_at", "created_at"),
    )

    @property
    def total_items(self) -> int:
        return sum(i.quantity for i in self.items)

    def __repr__(self):
        return f"<LaundryOrder {self.barcode} {self.status}>"


class ClothingItem(db.Model):
    __tablename__ = "clothing_items"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    order_id: Mapped[str] = mapped_column(ForeignKey("laundry_orders.id", ondelete="CASCADE"), nullable=False, index=True)
    clothing_type: Mapped[str] = mapped_column(String(32), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)

    order = relationship("LaundryOrder", back_populates="items")

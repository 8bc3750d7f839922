from __future__ import annotations
import uuid
from datetime import datetime
from enum import Enum

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from extensions import db

class BatchStatus(str, Enum):
    CREATED = "created"
    WASHING = "washing"
    DRYING = "drying"
    COMPLETED = "completed"

BATCH_STATUSES = tuple(s.value for s in BatchStatus)

class Batch(db.Model):
    __tablename__ = "batches"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default=BatchStatus.CREATED.value)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    entries = relationship("BatchOrder", back_populates="batch", cascade="all, delete-orphan",
                           order_by="BatchOrder.position")

    @property
    def order_ids(self) -> list[str]:
        return [e.order_id for e in self.entries]

    def __repr__(self):
        return f"<Batch {self.name} {self.status}>"


class BatchOrder(db.Model):
    """One entry of a batch's order list. Duplicates are allowed."""
    __tablename__ = "batch_orders"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    batch_id: Mapped[str] = mapped_column(ForeignKey("batches.id", ondelete="CASCADE"), nullable=False, index=True)
    order_id: Mapped[str] = mapped_column(ForeignKey("laundry_orders.id", ondelete="CASCADE"), nullable=False, index=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)

    batch = relationship("Batch", back_populates="entries")

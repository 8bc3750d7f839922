from extensions import db

from .user import Role, ROLES, User
from .time_slot import TimeSlot
from .batch import Batch, BatchOrder, BatchStatus, BATCH_STATUSES
from .order import (
    CLOTHING_TYPES, LAUNDRY_TYPES, ORDER_STATUSES,
    ClothingItem, LaundryOrder, LaundryType, OrderStatus,
)
from .notification import Notification

__all__ = [
    "db",
    "Role", "ROLES", "User",
    "TimeSlot",
    "Batch", "BatchOrder", "BatchStatus", "BATCH_STATUSES",
    "CLOTHING_TYPES", "LAUNDRY_TYPES", "ORDER_STATUSES",
    "ClothingItem", "LaundryOrder", "LaundryType", "OrderStatus",
    "Notification",
]

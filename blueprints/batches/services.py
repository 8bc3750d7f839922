# blueprints/batches/services.py
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List

from extensions import db
from models import BATCH_STATUSES, Batch, BatchOrder, BatchStatus, LaundryOrder
from blueprints.core.errors import LaundryError, NotFound, ValidationError
from blueprints.core.store import commit
from blueprints.orders import services as orders

log = logging.getLogger(__name__)

# batch statuses that are pushed down to every order of the batch
FANOUT_STATUSES = (BatchStatus.WASHING.value, BatchStatus.DRYING.value, BatchStatus.COMPLETED.value)

@dataclass
class Failure:
    order_id: str
    code: str
    detail: str

@dataclass
class AdvanceResult:
    batch_id: str
    status: str
    transitioned: List[str] = field(default_factory=list)
    failed: List[Failure] = field(default_factory=list)

def get_batch(batch_id: str) -> Batch:
    batch: Batch | None = db.session.get(Batch, batch_id)
    if not batch:
        raise NotFound("Batch not found", batch_id=batch_id)
    return batch

def list_batches() -> List[Batch]:
    return Batch.query.order_by(Batch.created_at.desc()).all()

def create_batch(name: str) -> Batch:
    clean = (name or "").strip()
    if not clean:
        raise ValidationError("Please enter a name for the new batch")
    batch = Batch(name=clean, status=BatchStatus.CREATED.value)
    db.session.add(batch)
    commit("batch")
    log.info("batch created", extra={"event": "batch_created", "batch_id": batch.id})
    return batch

def add_order(batch_id: str, order_id: str) -> Batch:
    """Append the order to the batch list. Adding twice lists it twice."""
    batch = get_batch(batch_id)
    order: LaundryOrder | None = db.session.get(LaundryOrder, order_id)
    if not order:
        raise NotFound("Order not found", order_id=order_id)
    batch.entries.append(BatchOrder(order_id=order.id, position=len(batch.entries)))
    order.batch_id = batch.id
    commit("batch membership")
    log.info("order added to batch", extra={"event": "batch_add", "batch_id": batch.id, "order_id": order.id})
    return batch

def advance_batch(batch_id: str, new_status: str) -> AdvanceResult:
    """Set the batch status and, for washing/drying/completed, transition each order.

    Best effort: an order that fails is reported and skipped, orders already
    transitioned stay transitioned.
    """
    if new_status not in BATCH_STATUSES:
        raise ValidationError(f"Unknown batch status: {new_status}", allowed=list(BATCH_STATUSES))
    batch = get_batch(batch_id)
    batch.status = new_status
    commit("batch status")

    result = AdvanceResult(batch_id=batch.id, status=new_status)
    if new_status not in FANOUT_STATUSES:
        return result

    for order_id in list(batch.order_ids):
        try:
            orders.transition(order_id, new_status)
        except LaundryError as ex:
            log.warning("batch fan-out failed", extra={"event": "batch_fanout_failed", "batch_id": batch.id,
                                                       "order_id": order_id, "reason": ex.code})
            result.failed.append(Failure(order_id=order_id, code=ex.code, detail=ex.detail))
            continue
        result.transitioned.append(order_id)

    log.info("batch advanced", extra={"event": "batch_advanced", "batch_id": batch.id, "status": new_status})
    return result

def to_dict(batch: Batch) -> Dict[str, Any]:
    return {
        "id": batch.id,
        "name": batch.name,
        "status": batch.status,
        "orders": batch.order_ids,
        "created_at": batch.created_at.isoformat() if batch.created_at else None,
    }

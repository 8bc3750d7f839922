from __future__ import annotations
import logging

from sqlalchemy.exc import SQLAlchemyError

from extensions import db
from .errors import StoreError

log = logging.getLogger(__name__)

def commit(what: str = "write") -> None:
    """Commit the current session; on failure roll back and raise StoreError."""
    try:
        db.session.commit()
    except SQLAlchemyError as ex:
        db.session.rollback()
        log.error("store commit failed", extra={"event": "store_error", "op": what, "reason": str(ex)})
        raise StoreError(f"Could not save {what}") from ex

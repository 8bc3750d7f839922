# blueprints/batches/routes.py
from __future__ import annotations
from dataclasses import asdict

from flask import Blueprint, jsonify, request
from pydantic import BaseModel, Field, ValidationError as PydanticValidationError

from blueprints.auth.routes import staff_required
from blueprints.core.errors import pydantic_errors_safe
from . import services as svc

api_bp = Blueprint("batches_api", __name__)

class BatchIn(BaseModel):
    name: str = Field("", max_length=200)

class BatchOrderIn(BaseModel):
    order_id: str = Field(min_length=1)

class BatchStatusIn(BaseModel):
    status: str

def _json_422(ve: PydanticValidationError):
    return jsonify({"error": "validation_error", "detail": pydantic_errors_safe(ve)}), 422

@api_bp.get("/batches")
@staff_required
def api_batches_list():
    return jsonify({"items": [svc.to_dict(b) for b in svc.list_batches()]})

@api_bp.get("/batches/<batch_id>")
@staff_required
def api_batches_get(batch_id: str):
    return jsonify(svc.to_dict(svc.get_batch(batch_id)))

@api_bp.post("/batches")
@staff_required
def api_batches_create():
    try:
        data = BatchIn.model_validate(request.get_json(silent=True) or {})
    except PydanticValidationError as ve:
        return _json_422(ve)
    batch = svc.create_batch(data.name)
    return jsonify({"ok": True, "batch": svc.to_dict(batch)}), 201

@api_bp.post("/batches/<batch_id>/orders")
@staff_required
def api_batches_add_order(batch_id: str):
    try:
        data = BatchOrderIn.model_validate(request.get_json(silent=True) or {})
    except PydanticValidationError as ve:
        return _json_422(ve)
    batch = svc.add_order(batch_id, data.order_id)
    return jsonify({"ok": True, "batch": svc.to_dict(batch)})

@api_bp.post("/batches/<batch_id>/status")
@staff_required
def api_batches_status(batch_id: str):
    try:
        data = BatchStatusIn.model_validate(request.get_json(silent=True) or {})
    except PydanticValidationError as ve:
        return _json_422(ve)
    result = svc.advance_batch(batch_id, data.status.strip().lower())
    return jsonify({"ok": not result.failed, "result": asdict(result)})

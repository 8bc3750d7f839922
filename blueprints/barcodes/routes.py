# blueprints/barcodes/routes.py
from __future__ import annotations
from flask import Blueprint, Response, current_app, jsonify, request

from blueprints.core.errors import ValidationError
from . import services as svc

api_bp = Blueprint("barcodes_api", __name__)

MAX_TEXT = 64

@api_bp.get("/barcodes/<path:token>.png")
def api_barcode_png(token: str):
    text = (token or "").strip()
    if not text or len(text) > MAX_TEXT:
        raise ValidationError("Please enter text to generate a barcode")
    png = svc.render_png(text)
    headers = {}
    if request.args.get("download") in ("1", "true", "yes"):
        headers["Content-Disposition"] = f'attachment; filename="laundrify-barcode-{text}.png"'
    return Response(png, mimetype="image/png", headers=headers)

@api_bp.get("/barcodes/random")
def api_barcode_random():
    prefix = current_app.config.get("BARCODE_PREFIX", svc.DEFAULT_PREFIX)
    return jsonify({"token": svc.random_token(prefix)})

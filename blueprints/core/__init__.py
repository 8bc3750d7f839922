from flask import Blueprint

bp = Blueprint("core", __name__)
api_bp = Blueprint("core_api", __name__)
# import the routes so they get registered on bp/api_bp
from . import routes  # noqa: E402,F401

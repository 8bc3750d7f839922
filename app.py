from __future__ import annotations
import os
from importlib import import_module
from flask import Flask
from config import config_map
from extensions import db, migrate, login_manager, csrf
from sqlalchemy import inspect

def _seed_from_config(app):
    if not app.config.get("SEED_TEST_DATA"):
        return
    with app.app_context():
        # the users table may not exist yet (before `flask db upgrade`)
        if not inspect(db.engine).has_table("users"):
            return

        from models import User  # local import to avoid cycles
        created = 0
        for u in app.config.get("DEFAULT_USERS", []):
            if User.query.filter_by(phone_number=u["phone_number"]).first():
                continue
            db.session.add(User(phone_number=u["phone_number"], role=u["role"]))
            created += 1
        if created:
            db.session.commit()

def register_blueprints(app: Flask) -> None:
    # core routes must be imported before taking bp
    import_module("blueprints.core.routes")
    from blueprints.core import bp as core_bp, api_bp as core_api_bp
    from blueprints.auth.routes import api_bp as auth_api_bp
    from blueprints.slots.routes import api_bp as slots_api_bp
    from blueprints.orders.routes import api_bp as orders_api_bp
    from blueprints.batches.routes import api_bp as batches_api_bp
    from blueprints.notifications.routes import api_bp as notifications_api_bp
    from blueprints.barcodes.routes import api_bp as barcodes_api_bp
    from blueprints.admin.routes import api_bp as admin_api_bp
    from blueprints.reports.routes import api_bp as reports_api_bp

    # core has no prefix: '/health' lives at the root
    app.register_blueprint(core_bp)
    app.register_blueprint(core_api_bp, url_prefix="/api/v1")
    app.register_blueprint(auth_api_bp, url_prefix="/api/v1")
    app.register_blueprint(slots_api_bp, url_prefix="/api/v1")
    app.register_blueprint(orders_api_bp, url_prefix="/api/v1")
    app.register_blueprint(batches_api_bp, url_prefix="/api/v1")
    app.register_blueprint(notifications_api_bp, url_prefix="/api/v1")
    app.register_blueprint(barcodes_api_bp, url_prefix="/api/v1")
    app.register_blueprint(admin_api_bp, url_prefix="/api/v1")
    app.register_blueprint(reports_api_bp, url_prefix="/api/v1")

def create_app(config_name: str | None = None) -> Flask:
    app = Flask(__name__, instance_relative_config=True)
    app.config.setdefault("SECRET_KEY", "change-me-in-prod")
    cfg_name = config_name or os.getenv("FLASK_CONFIG", "default")
    app.config.from_object(config_map[cfg_name])
    # pytest always sets PYTEST_CURRENT_TEST: keep every test on its own in-memory database
    if os.environ.get("PYTEST_CURRENT_TEST"):
        app.config["SQLALCHEMY_DATABASE_URI"] = "sqlite:///:memory:"
        app.config.setdefault("SQLALCHEMY_ENGINE_OPTIONS", {"connect_args": {"check_same_thread": False}})

    try:
        os.makedirs(app.instance_path, exist_ok=True)
    except OSError:
        pass
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    csrf.init_app(app)
    register_blueprints(app)
    _seed_from_config(app)
    return app

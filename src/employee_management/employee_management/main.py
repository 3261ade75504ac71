from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .common.datetime_utils import now_local
from .common.web import error_response
from .container import Container, build_container
from .database.bootstrap import apply_schema, ensure_default_admin, ensure_demo_employees, list_tables
from .employees.controller import register as register_employees
from .leaves.controller import register as register_leaves
from .reports.controller import register as register_reports

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def build_app(container: Container, *, settings=None) -> Flask:
    """Flask app with every route registered against `container`."""

    app = Flask(__name__)
    app.secret_key = getattr(settings, "SECRET_KEY", "dev-secret-key")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["MAX_CONTENT_LENGTH"] = int(getattr(settings, "MAX_UPLOAD_BYTES", 10 * 1024 * 1024))

    register_employees(app, container)
    register_leaves(app, container)
    register_reports(app, container)

    @app.route("/api/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"status": "OK", "timestamp": now_local().isoformat()})

    @app.errorhandler(413)
    def too_large(_e):
        return error_response("Uploaded file is too large.", 413)

    @app.errorhandler(404)
    def not_found(_e):
        return error_response("Not found.", 404)

    return app


def create_app() -> Flask:
    load_dotenv(override=False)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    db_config = getattr(settings, "DB_CONFIG")

    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=SCHEMA_PATH)
        logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))

    ensure_default_admin(db_config, admin=getattr(settings, "DEFAULT_ADMIN"))

    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        ensure_demo_employees(db_config)
        logger.info("Demo employees ready")

    container = build_container(db_config=db_config, settings=settings)
    return build_app(container, settings=settings)

from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .auth.controller import register as register_auth
from .container import Container, build_container_from_settings
from .database.bootstrap import apply_schema, list_tables
from .orders.controller import register as register_orders
from .system.controller import register as register_system
from .transactions.controller import register as register_transactions

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def create_app(container: Optional[Container] = None) -> Flask:
    """App factory.

    The process entry point owns the store handle: it is built here (or passed in,
    e.g. by tests) and injected into every controller.
    """

    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.json.ensure_ascii = False

    db_config = getattr(settings, "DB_CONFIG")
    logger.info(
        "settings=%s db=%s@%s:%s/%s upstream=%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
        getattr(settings, "UPSTREAM_BASE_URL", None),
    )

    if container is None:
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
            apply_schema(db_config, schema_path=schema_path)
            logger.info("schema ready (tables=%s)", len(list_tables(db_config)))
        container = build_container_from_settings(settings)

    app.extensions["worktime_portal.container"] = container

    register_auth(app, container)
    register_transactions(app, container)
    register_orders(app, container)
    register_attendance(app, container)
    register_system(app, container)

    return app

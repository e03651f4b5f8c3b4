from __future__ import annotations

import importlib
import logging
from datetime import timedelta
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .core.constants import DEFAULT_ANNUAL_LEAVE_ALLOTMENT, DEFAULT_SESSION_DAYS, DEFAULT_TREND_MONTHS, DEFAULT_TREND_WORKERS
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_users, list_tables
from .leaves.controller import register as register_leaves
from .payroll.controller import register as register_payroll
from .reports.controller import register as register_reports
from .settings import get_settings_module
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

DATABASE_DIR = Path(__file__).resolve().parents[2] / "database"


def create_app(container: Optional[Container] = None) -> Flask:
    """Build the app; pass ``container`` to run over other repositories."""
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    debug = bool(getattr(settings, "DEBUG", False))

    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = debug
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["SHOW_DEMO_ACCOUNTS"] = debug or bool(getattr(settings, "AUTO_SEED_DB", False))
    app.permanent_session_lifetime = timedelta(days=int(getattr(settings, "SESSION_DAYS", DEFAULT_SESSION_DAYS)))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if getattr(settings, "AUTO_INIT_DB", False):
            apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
            logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
        if getattr(settings, "AUTO_SEED_DB", False):
            # seed.sql looks up the demo employee by email
            ensure_demo_users(db_config)
            apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
            logger.info("Demo seed ready")

        container = build_container(
            db_config=db_config,
            leave_allotment=int(getattr(settings, "LEAVE_ANNUAL_ALLOTMENT", DEFAULT_ANNUAL_LEAVE_ALLOTMENT)),
            trend_months=int(getattr(settings, "TREND_MONTHS", DEFAULT_TREND_MONTHS)),
            trend_workers=int(getattr(settings, "TREND_WORKERS", DEFAULT_TREND_WORKERS)),
        )

    register_users(app, container)
    register_attendance(app, container)
    register_leaves(app, container)
    register_payroll(app, container)
    register_reports(app, container)

    return app

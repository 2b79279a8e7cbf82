from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.logging_utils import configure_logging
from .container import BACKEND_MYSQL, build_container
from .database.bootstrap import apply_schema, ensure_default_roster, list_tables
from .tracker.controller import register as register_tracker
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

REPO_ROOT = Path(__file__).resolve().parents[3]


def create_app(overrides: Optional[dict] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    cfg = {name: getattr(settings, name) for name in dir(settings) if name.isupper()}
    cfg.update(overrides or {})

    configure_logging(cfg.get("LOG_LEVEL", "INFO"))

    app.secret_key = cfg["SECRET_KEY"]
    app.config["DEBUG"] = bool(cfg.get("DEBUG", False))
    app.config["TESTING"] = bool(cfg.get("TESTING", False))

    backend = cfg.get("TRACKER_BACKEND", "file")
    db_config = cfg.get("DB_CONFIG")
    logger.info("settings=%s backend=%s", settings_module, backend)

    if backend == BACKEND_MYSQL:
        if cfg.get("AUTO_INIT_DB"):
            apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if cfg.get("AUTO_SEED_DB"):
            ensure_default_roster(db_config)

    container = build_container(
        backend=backend,
        db_config=db_config,
        data_file=cfg.get("TRACKER_DATA_FILE") or None,
        hours_mode=cfg.get("HOURS_MODE", "manual"),
        admin_username=cfg.get("ADMIN_USERNAME", ""),
        admin_password_hash=cfg.get("ADMIN_PASSWORD_HASH", ""),
        tracker_year=cfg.get("TRACKER_YEAR", 2026),
    )
    app.extensions["hours_tracker"] = container

    register_users(app, container)
    register_tracker(app, container)

    return app

from __future__ import annotations

import importlib
import logging
from datetime import timedelta
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .config import get_settings_module
from .container import Container, build_container
from .core.constants import DEFAULT_MAX_UPLOAD_BYTES, DEFAULT_SESSION_DAYS
from .database.bootstrap import apply_schema, ensure_demo_users, list_tables
from .income.controller import register as register_income
from .logging_utils import configure_logging
from .reports.controller import register as register_reports
from .tickets.controller import register as register_tickets
from .uploads.controller import register as register_uploads
from .uploads.storage import LocalFileStorage
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["UPLOAD_URL_PREFIX"] = getattr(settings, "UPLOAD_URL_PREFIX", "/uploads")
    app.permanent_session_lifetime = timedelta(days=int(getattr(settings, "SESSION_DAYS", DEFAULT_SESSION_DAYS)))

    configure_logging(logging.DEBUG if app.config["DEBUG"] else logging.INFO)
    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if container is None:
        if getattr(settings, "AUTO_INIT_DB", False):
            apply_schema(db_config)
            logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
        if getattr(settings, "AUTO_SEED_DB", False):
            ensure_demo_users(db_config)

        upload_dir = Path(getattr(settings, "UPLOAD_DIR", "uploads")).resolve()
        storage = LocalFileStorage(
            upload_dir,
            url_prefix=app.config["UPLOAD_URL_PREFIX"],
            max_bytes=int(getattr(settings, "MAX_UPLOAD_BYTES", DEFAULT_MAX_UPLOAD_BYTES)),
        )
        container = build_container(
            db_config=db_config,
            storage=storage,
            company_name=getattr(settings, "COMPANY_NAME", "AMIN TOUCH"),
            company_tagline=getattr(settings, "COMPANY_TAGLINE", "TRADING CONTRACTING & HOSPITALITY SERVICES"),
        )

    register_users(app, container)
    register_income(app, container)
    register_tickets(app, container)
    register_reports(app, container)
    register_uploads(app, container)

    return app

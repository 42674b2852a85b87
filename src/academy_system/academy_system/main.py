from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .achievements.controller import register as register_achievements
from .attendance.controller import register as register_attendance
from .common.http import register_error_handlers
from .container import build_container
from .core.constants import (
    DEFAULT_BULK_MAX_WORKERS,
    DEFAULT_QUERY_CACHE_MAXSIZE,
    DEFAULT_QUERY_CACHE_TTL_SECONDS,
)
from .core.enums import StorageBackend
from .daily_logs.controller import register as register_daily_logs
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables, seed_demo_students
from .database.connection import DBConfig
from .students.controller import register as register_students

SQL_DIR = Path(__file__).resolve().parents[3] / "database"


def create_app(settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=str(getattr(settings, "LOG_LEVEL", "INFO")).upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    backend = StorageBackend(getattr(settings, "STORAGE_BACKEND", StorageBackend.MYSQL.value))
    db_config = getattr(settings, "DB_CONFIG", None)
    app.logger.info("settings=%s backend=%s", settings_module, backend.value)

    if backend == StorageBackend.MYSQL:
        app.logger.info("db=%s", DBConfig.from_dict(db_config).describe())
        if getattr(settings, "AUTO_INIT_DB", False):
            apply_schema(db_config, schema_path=SQL_DIR / "schema.sql")
            app.logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if getattr(settings, "AUTO_SEED_DB", False):
            apply_seed_sql(db_config, seed_path=SQL_DIR / "seed.sql")
            app.logger.info("demo seed ready")

    container = build_container(
        db_config=db_config,
        backend=backend,
        bulk_max_workers=int(getattr(settings, "BULK_MAX_WORKERS", DEFAULT_BULK_MAX_WORKERS)),
        cache_maxsize=int(getattr(settings, "QUERY_CACHE_MAXSIZE", DEFAULT_QUERY_CACHE_MAXSIZE)),
        cache_ttl=float(getattr(settings, "QUERY_CACHE_TTL_SECONDS", DEFAULT_QUERY_CACHE_TTL_SECONDS)),
    )
    if backend == StorageBackend.MEMORY and getattr(settings, "AUTO_SEED_DB", False):
        app.logger.info("demo seed ready (%d students)", seed_demo_students(container.student_service))

    app.extensions["academy_container"] = container

    register_error_handlers(app)
    register_students(app, container)
    register_daily_logs(app, container)
    register_achievements(app, container)
    register_attendance(app, container)

    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"status": "ok", "backend": backend.value})

    return app

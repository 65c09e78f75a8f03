from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv
from flask import Flask, jsonify

from .attendance.repository import AttendanceRepository
from .balances.repository import SnapshotRepository
from .common.http import register_error_handlers
from .config import get_settings_module
from .core.constants import BACKGROUND_REFRESH_SECONDS, LIVE_TIMER_TICK_SECONDS
from .container import build_container
from .database.bootstrap import apply_schema
from .leaves.repository import LeaveRepository

from .attendance.controller import register as register_attendance
from .balances.controller import register as register_balances
from .bonds.controller import register as register_bonds
from .leaves.controller import register as register_leaves

log = logging.getLogger(__name__)


def create_app(
    *,
    snapshots_repo: SnapshotRepository | None = None,
    attendance_repo: AttendanceRepository | None = None,
    leaves_repo: LeaveRepository | None = None,
) -> Flask:
    """App factory. Attendance and leave workflow routes exist only when their repositories are given."""
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["TIMEZONE"] = getattr(settings, "TIMEZONE", "UTC")

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    log.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if bool(getattr(settings, "AUTO_INIT_DB", False)) and snapshots_repo is None:
        apply_schema(db_config)

    container = build_container(
        db_config=db_config,
        snapshots_repo=snapshots_repo,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
    )
    register_error_handlers(app)

    @app.route("/api/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify(
            {
                "status": "ok",
                "live_timer_tick_seconds": LIVE_TIMER_TICK_SECONDS,
                "background_refresh_seconds": BACKGROUND_REFRESH_SECONDS,
            }
        )

    register_attendance(app, container)
    register_leaves(app, container)
    register_balances(app, container)
    register_bonds(app, container)

    return app

from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import build_container
from .settings import Settings, build_settings
from .store.bootstrap import ensure_default_site, ensure_demo_employees, ensure_sheets
from .store.record_store import RecordStore

from .attendance.controller import register as register_attendance
from .employees.controller import register as register_employees
from .networks.controller import register as register_networks
from .reconciliation.controller import register as register_reconciliation
from .reports.controller import register as register_reports

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(settings: Optional[Settings] = None, *, store: Optional[RecordStore] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    if settings is None:
        settings = build_settings(importlib.import_module(settings_module))
    configure_logging(settings.log_level)

    app.secret_key = settings.secret_key
    app.config["DEBUG"] = settings.debug
    app.config["TESTING"] = settings.testing

    container = build_container(settings, store=store)
    logger.info("timeclock starting: settings=%s backend=%s tz=%s", settings_module, settings.store_backend, settings.tz.key)

    if settings.auto_init_sheets:
        ensure_sheets(container.store)
    if settings.default_site and (settings.auto_seed_sheets or settings.store_backend == "memory"):
        site = settings.default_site
        ensure_default_site(
            container.store,
            name=site.name,
            latitude=site.latitude,
            longitude=site.longitude,
            radius=site.radius,
            address=site.address,
        )
    if settings.auto_seed_sheets:
        added = ensure_demo_employees(container.store)
        if added:
            logger.info("Seeded demo employees: %s", ", ".join(added))

    app.extensions["timeclock"] = container

    register_attendance(app, container)
    register_employees(app, container)
    register_reconciliation(app, container)
    register_networks(app, container)
    register_reports(app, container)

    return app

from __future__ import annotations

import logging
from typing import List, Optional

from werkzeug.security import generate_password_hash

from ..common.validators import slugify
from ..core.constants import DEFAULT_SITE_RADIUS_METERS
from ..core.enums import ClockStatus
from . import schema
from .record_store import RecordStore

logger = logging.getLogger(__name__)


def ensure_sheets(store: RecordStore) -> List[str]:
    """Create every collection with its header row (idempotent).

    Returns the names of the sheets that were created.
    """
    created = []
    for name, headers in schema.ALL_SHEETS.items():
        if store.ensure_sheet(name, headers):
            created.append(name)
    if created:
        logger.info("Initialized sheets: %s", ", ".join(created))
    return created


def ensure_default_site(
    store: RecordStore,
    *,
    name: str,
    latitude: float,
    longitude: float,
    radius: float = DEFAULT_SITE_RADIUS_METERS,
    address: str = "",
    site_id: Optional[str] = None,
) -> str:
    """Register a job site and point the default-site setting at it."""
    site_id = site_id or slugify(name)
    sites = store.read_sheet(schema.JOB_SITES)
    if not any(s.get("id") == site_id for s in sites):
        store.append_rows(schema.JOB_SITES, [[site_id, name, latitude, longitude, radius, address]])

    row_number = store.find_row_number(schema.ADMIN_SETTINGS, "setting", schema.DEFAULT_JOB_SITE_SETTING)
    if row_number is None:
        store.append_rows(schema.ADMIN_SETTINGS, [[schema.DEFAULT_JOB_SITE_SETTING, site_id]])
    else:
        store.update_range(schema.ADMIN_SETTINGS, f"A{row_number}:B{row_number}", [[schema.DEFAULT_JOB_SITE_SETTING, site_id]])
    return site_id


def ensure_demo_employees(store: RecordStore, *, password: str = "password123") -> List[str]:
    """Seed a couple of demo employees for local development."""
    existing = {r.get("id") for r in store.read_sheet(schema.EMPLOYEES)}
    added = []
    for full_name in ("John Smith", "Jane Doe"):
        emp_id = slugify(full_name)
        if emp_id in existing:
            continue
        store.append_rows(
            schema.EMPLOYEES,
            [[emp_id, full_name, "true", ClockStatus.CLOCKED_OUT.value, "", "", generate_password_hash(password)]],
        )
        added.append(emp_id)
    return added

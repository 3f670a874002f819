from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..core.constants import DEFAULT_SITE_RADIUS_METERS
from ..core.exceptions import SheetNotFoundError
from ..store import schema
from ..store.record_store import Record, RecordStore, is_blank
from .model import JobSite
from .repository import JobSiteRepository

logger = logging.getLogger(__name__)


def _float(value: str, default: float) -> float:
    try:
        return float((value or "").strip())
    except ValueError:
        return default


def decode_site(r: Record) -> JobSite:
    return JobSite(
        site_id=r.get("id", "").strip(),
        name=r.get("name", ""),
        latitude=_float(r.get("latitude", ""), 0.0),
        longitude=_float(r.get("longitude", ""), 0.0),
        radius=_float(r.get("radius", ""), DEFAULT_SITE_RADIUS_METERS),
        address=r.get("address", ""),
    )


class SheetJobSiteRepository(JobSiteRepository):
    def __init__(self, store: RecordStore):
        self._store = store

    def list_sites(self) -> Sequence[JobSite]:
        try:
            records = self._store.read_sheet(schema.JOB_SITES)
        except SheetNotFoundError:
            return []
        return [decode_site(r) for r in records if not is_blank(r)]

    def get_default_site(self) -> Optional[JobSite]:
        try:
            settings = self._store.read_sheet(schema.ADMIN_SETTINGS)
        except SheetNotFoundError:
            logger.warning("%s sheet missing; no default job site", schema.ADMIN_SETTINGS)
            return None

        default_id = next(
            (r.get("value", "").strip() for r in settings if r.get("setting") == schema.DEFAULT_JOB_SITE_SETTING),
            "",
        )
        if not default_id:
            return None
        return next((s for s in self.list_sites() if s.site_id == default_id), None)

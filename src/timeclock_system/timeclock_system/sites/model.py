from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import DEFAULT_SITE_RADIUS_METERS


@dataclass(frozen=True)
class JobSite:
    """Địa điểm làm việc: tâm + bán kính (mét) của geofence."""

    site_id: str
    name: str
    latitude: float
    longitude: float
    radius: float = DEFAULT_SITE_RADIUS_METERS
    address: str = ""

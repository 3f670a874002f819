"""Geofence check on a spherical Earth (haversine great-circle distance)."""

from __future__ import annotations

import math

from ..core.constants import EARTH_RADIUS_METERS


def haversine_distance(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance in meters between two (lat, lng) points in degrees."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lng2 - lng1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_METERS * c


def within_radius(lat: float, lng: float, site_lat: float, site_lng: float, radius_meters: float) -> bool:
    """True iff the point is at most `radius_meters` from the site (boundary inclusive).

    NaN inputs must be rejected by the caller.
    """
    return haversine_distance(lat, lng, site_lat, site_lng) <= radius_meters

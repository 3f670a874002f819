from __future__ import annotations

import pytest

from src.timeclock_system.timeclock_system.verification.geo import haversine_distance, within_radius


def test_point_is_within_any_non_negative_radius_of_itself():
    for r in (0, 0.5, 100, 10_000):
        assert within_radius(40.7128, -74.0060, 40.7128, -74.0060, r)


def test_boundary_is_inclusive():
    d = haversine_distance(40.7128, -74.0060, 40.7137, -74.0060)

    assert within_radius(40.7128, -74.0060, 40.7137, -74.0060, d)
    assert not within_radius(40.7128, -74.0060, 40.7137, -74.0060, d - 1e-6)


def test_known_distance_one_degree_latitude():
    # One degree of latitude on a 6,371 km sphere.
    assert haversine_distance(0.0, 0.0, 1.0, 0.0) == pytest.approx(111_195, rel=1e-3)


def test_distance_is_symmetric():
    a = haversine_distance(51.5007, -0.1246, 40.6892, -74.0445)
    b = haversine_distance(40.6892, -74.0445, 51.5007, -0.1246)
    assert a == pytest.approx(b)


def test_negative_radius_never_matches():
    assert not within_radius(10.0, 10.0, 10.0, 10.0, -1)

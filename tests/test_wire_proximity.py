from __future__ import annotations

import math

from hellwire.geom import Rect, Vec2
from hellwire.lcg import Lcg
from hellwire.profiles import DeviceProfile
from hellwire.wire import closest_point_on_segment, generate, nearest, progress_at, rebuild_polyline
from hellwire.wire.sample import to_presentation

IDENTITY = Rect(0.0, 0.0, 1.0, 1.0)


def test_closest_point_clamps_parameter() -> None:
    a = Vec2(0.0, 0.0)
    b = Vec2(10.0, 0.0)

    closest, t, d2 = closest_point_on_segment(Vec2(15.0, 3.0), a, b)
    assert closest == b
    assert t == 1.0
    assert math.isclose(d2, 25.0 + 9.0, abs_tol=1e-9)

    closest, t, _d2 = closest_point_on_segment(Vec2(-4.0, 0.0), a, b)
    assert closest == a
    assert t == 0.0

    closest, t, d2 = closest_point_on_segment(Vec2(4.0, 2.0), a, b)
    assert closest == Vec2(4.0, 0.0)
    assert math.isclose(t, 0.4, abs_tol=1e-12)
    assert math.isclose(d2, 4.0, abs_tol=1e-12)


def test_zero_length_segment_is_guarded() -> None:
    a = Vec2(3.0, 3.0)

    closest, t, d2 = closest_point_on_segment(Vec2(6.0, 7.0), a, a)

    assert closest == a
    assert t == 0.0
    assert math.isclose(d2, 25.0, abs_tol=1e-9)


def test_nearest_prefers_earliest_segment_on_ties() -> None:
    polyline = to_presentation([Vec2(0.0, 0.0), Vec2(10.0, 0.0), Vec2(20.0, 0.0)], IDENTITY)

    hit = nearest(polyline, Vec2(10.0, 5.0))

    assert hit.segment_index == 0
    assert hit.segment_t == 1.0
    assert math.isclose(hit.distance, 5.0, abs_tol=1e-9)
    assert math.isclose(progress_at(polyline, hit), 10.0, abs_tol=1e-9)


def test_nearest_parameter_is_always_in_unit_range() -> None:
    path = generate(4242, DeviceProfile.DESKTOP)
    polyline = rebuild_polyline(path.points, path.profile, Rect(0.0, 0.0, 800.0, 600.0))
    rng = Lcg(9)

    for _ in range(100):
        query = Vec2(rng.uniform(-100.0, 900.0), rng.uniform(-100.0, 700.0))
        hit = nearest(polyline, query)
        assert 0.0 <= hit.segment_t <= 1.0
        assert 0 <= hit.segment_index < polyline.segment_count
        progress = progress_at(polyline, hit)
        assert 0.0 <= progress <= polyline.total_length


def test_nearest_on_a_point_of_the_wire_is_zero_distance() -> None:
    polyline = to_presentation([Vec2(0.0, 0.0), Vec2(10.0, 0.0), Vec2(10.0, 10.0)], IDENTITY)

    hit = nearest(polyline, Vec2(10.0, 4.0))

    assert hit.distance_sq == 0.0
    assert hit.segment_index == 1
    assert math.isclose(progress_at(polyline, hit), 14.0, abs_tol=1e-9)

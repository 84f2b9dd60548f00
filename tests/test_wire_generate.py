from __future__ import annotations

import math

import pytest

from hellwire.geom import Vec2
from hellwire.profiles import DeviceProfile
from hellwire.wire import PathError, WirePath, generate
from hellwire.wire.generate import DESKTOP_END, DESKTOP_START, MOBILE_POINT_COUNT


def test_generate_is_deterministic_per_seed_and_profile() -> None:
    for profile in DeviceProfile:
        a = generate(1234, profile)
        b = generate(1234, profile)
        assert a.points == b.points
        assert a.profile is profile


def test_generate_seed_changes_wire() -> None:
    assert generate(1, DeviceProfile.DESKTOP).points != generate(2, DeviceProfile.DESKTOP).points
    assert generate(1, DeviceProfile.MOBILE).points != generate(2, DeviceProfile.MOBILE).points


def test_desktop_wire_has_loops_and_fixed_endpoints() -> None:
    path = generate(1337, DeviceProfile.DESKTOP)

    # 140 walk points plus three 10-point loops.
    assert len(path) == 170
    assert path.start == DESKTOP_START
    assert path.end == DESKTOP_END
    for point in path.points:
        assert 0.02 <= point.x <= 0.98
        assert 0.02 <= point.y <= 0.98


@pytest.mark.parametrize("seed", [0, 1, 7331, 0xDEADBEEF])
def test_mobile_wire_x_is_monotone(seed: int) -> None:
    path = generate(seed, DeviceProfile.MOBILE)

    assert len(path) == MOBILE_POINT_COUNT
    assert math.isclose(path.start.x, 0.05, abs_tol=1e-12)
    assert math.isclose(path.end.x, 0.95, abs_tol=1e-12)
    for prev, cur in zip(path.points, path.points[1:]):
        assert cur.x >= prev.x
    assert 0.30 <= path.start.y <= 0.75
    assert 0.30 <= path.end.y <= 0.75
    for point in path.points:
        assert 0.06 <= point.y <= 0.94


def test_generate_accepts_profile_names() -> None:
    assert generate(5, "mobile").points == generate(5, DeviceProfile.MOBILE).points


def test_wire_path_rejects_degenerate_and_backtracking_mobile_paths() -> None:
    with pytest.raises(PathError, match="at least 2"):
        WirePath(profile=DeviceProfile.DESKTOP, points=[Vec2(0.5, 0.5)])
    with pytest.raises(PathError, match="non-decreasing"):
        WirePath.from_pairs(DeviceProfile.MOBILE, [(0.1, 0.5), (0.3, 0.5), (0.2, 0.5)])

    # Desktop wires may backtrack.
    WirePath.from_pairs(DeviceProfile.DESKTOP, [(0.1, 0.5), (0.3, 0.5), (0.2, 0.5)])


def test_wire_path_assign_keeps_count_and_values() -> None:
    path = WirePath.from_pairs(DeviceProfile.MOBILE, [(0.1, 0.5), (0.9, 0.5)])

    path.assign([Vec2(0.05, 0.2), Vec2(0.95, 0.8)])

    assert path.points == [Vec2(0.05, 0.2), Vec2(0.95, 0.8)]
    with pytest.raises(PathError, match="count"):
        path.assign([Vec2(0.5, 0.5)])

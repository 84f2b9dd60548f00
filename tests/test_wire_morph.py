from __future__ import annotations

import math

import pytest

from hellwire.geom import Rect
from hellwire.lcg import Lcg
from hellwire.profiles import DeviceProfile, profile_tuning
from hellwire.wire import MorphTransition, PathError, generate, perturb_points, rebuild_polyline

PLAYFIELD = Rect(0.0, 0.0, 1000.0, 600.0)


def test_mobile_perturbation_moves_y_only_and_keeps_edges() -> None:
    path = generate(7331, DeviceProfile.MOBILE)

    moved = perturb_points(path.points, path.profile, Lcg(11))

    assert len(moved) == len(path.points)
    assert [p.x for p in moved] == [p.x for p in path.points]
    assert moved[:2] == path.points[:2]
    assert moved[-2:] == path.points[-2:]
    changed = sum(1 for a, b in zip(path.points, moved) if a != b)
    assert 0 < changed <= profile_tuning(DeviceProfile.MOBILE).morph_points_min + 2
    tuning = profile_tuning(DeviceProfile.MOBILE)
    for point in moved:
        assert tuning.bounds_min <= point.y <= tuning.bounds_max


def test_desktop_perturbation_stays_in_bounds() -> None:
    path = generate(1337, DeviceProfile.DESKTOP)
    tuning = profile_tuning(DeviceProfile.DESKTOP)

    moved = perturb_points(path.points, path.profile, Lcg(5))

    assert moved != path.points
    assert moved[:2] == path.points[:2]
    assert moved[-2:] == path.points[-2:]
    for before, after in zip(path.points, moved):
        if before == after:
            continue
        assert tuning.bounds_min <= after.x <= tuning.bounds_max
        assert tuning.bounds_min <= after.y <= tuning.bounds_max


def test_perturbation_is_noop_without_interior_points() -> None:
    path = generate(1, DeviceProfile.MOBILE)
    short = path.points[:4]
    rng = Lcg(3)

    assert perturb_points(short, DeviceProfile.MOBILE, rng) == short
    assert rng.state == 3


def test_morph_sampling_matches_endpoints() -> None:
    path = generate(2024, DeviceProfile.DESKTOP)
    target = tuple(perturb_points(path.points, path.profile, Lcg(8)))
    morph = MorphTransition(source=path.snapshot(), target=target, started_at=0.0, duration=0.95)

    at_start = rebuild_polyline(morph.points_at(0.0), path.profile, PLAYFIELD)
    from_source = rebuild_polyline(path.points, path.profile, PLAYFIELD)
    assert at_start.points == from_source.points

    at_end = rebuild_polyline(morph.points_at(0.95), path.profile, PLAYFIELD)
    from_target = rebuild_polyline(target, path.profile, PLAYFIELD)
    for a, b in zip(at_end.points, from_target.points):
        assert math.isclose(a.x, b.x, abs_tol=1e-9)
        assert math.isclose(a.y, b.y, abs_tol=1e-9)

    assert not morph.finished(0.5)
    assert morph.finished(0.95)
    assert morph.progress(-1.0) == 0.0


def test_mobile_morph_stays_monotone_throughout() -> None:
    path = generate(77, DeviceProfile.MOBILE)
    target = tuple(perturb_points(path.points, path.profile, Lcg(1)))
    morph = MorphTransition(source=path.snapshot(), target=target, started_at=0.0, duration=1.0)

    for k in range(11):
        points = morph.points_at(k / 10.0)
        for prev, cur in zip(points, points[1:]):
            assert cur.x >= prev.x


def test_morph_transition_validates_shape() -> None:
    path = generate(1, DeviceProfile.MOBILE)
    with pytest.raises(PathError, match="size"):
        MorphTransition(source=path.snapshot(), target=path.snapshot()[:-1], started_at=0.0, duration=1.0)
    with pytest.raises(PathError, match="duration"):
        MorphTransition(source=path.snapshot(), target=path.snapshot(), started_at=0.0, duration=0.0)

from __future__ import annotations

import math

import pytest

from hellwire.config import ConfigError, GameConfig
from hellwire.profiles import DeviceProfile, device_profile_from_value, profile_tuning, resolve_profile


def test_default_tolerance_is_inner_minus_wire_minus_margin() -> None:
    config = GameConfig()

    assert math.isclose(config.allowed_tolerance, 13.0 - 3.0 - 1.2, abs_tol=1e-9)
    assert math.isclose(config.tolerance(pinched=True), (13.0 - 3.0 - 1.2) * 0.72, abs_tol=1e-9)
    assert config.tolerance(pinched=False) == config.allowed_tolerance


def test_ui_scale_scales_every_radius() -> None:
    config = GameConfig(ui_scale=2.0)

    assert config.scaled_outer_radius == 40.0
    assert config.scaled_inner_radius == 26.0
    assert config.scaled_win_radius == 44.0
    assert math.isclose(config.allowed_tolerance, 2.0 * (13.0 - 3.0 - 1.2), abs_tol=1e-9)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"countdown_seconds": 0.0},
        {"respawn_delay": -1.0},
        {"recatch_window": float("nan")},
        {"morph_duration": 0.0},
        {"max_strikes": 0},
        {"inner_radius": 20.0},
        {"inner_radius": 4.0},
        {"pinch_factor": 1.0},
        {"win_progress_fraction": 0.0},
        {"sabotage_duration_jitter": -0.1},
    ],
)
def test_config_rejects_invalid_values(kwargs: dict[str, float]) -> None:
    with pytest.raises(ConfigError):
        GameConfig(**kwargs)


def test_config_overrides_roundtrip() -> None:
    config = GameConfig(max_strikes=5, countdown_seconds=3.0)

    overrides = config.overrides()

    assert overrides == {"max_strikes": 5, "countdown_seconds": 3.0}
    assert GameConfig.from_overrides(overrides) == config
    assert GameConfig.from_overrides(None) == GameConfig()


def test_config_from_overrides_rejects_unknown_fields() -> None:
    with pytest.raises(ConfigError, match="gravity"):
        GameConfig.from_overrides({"gravity": 9.8})


def test_device_profile_from_value_is_tolerant() -> None:
    assert device_profile_from_value("Mobile") is DeviceProfile.MOBILE
    assert device_profile_from_value(" desktop ") is DeviceProfile.DESKTOP
    assert device_profile_from_value("1") is DeviceProfile.MOBILE
    assert device_profile_from_value(0) is DeviceProfile.DESKTOP
    assert device_profile_from_value(True) is None
    assert device_profile_from_value("tablet") is None
    assert device_profile_from_value(7) is None


def test_resolve_profile_raises_on_unknown() -> None:
    with pytest.raises(ValueError, match="tablet"):
        resolve_profile("tablet")


def test_mobile_tuning_is_steadier_than_desktop() -> None:
    desktop = profile_tuning(DeviceProfile.DESKTOP)
    mobile = profile_tuning(DeviceProfile.MOBILE)

    assert mobile.max_speed < desktop.max_speed
    assert mobile.drag > desktop.drag
    assert mobile.segment_samples > desktop.segment_samples
    assert mobile.morph_dx == 0.0
    assert (desktop.default_seed, mobile.default_seed) == (1337, 7331)

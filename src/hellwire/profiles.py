from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class DeviceProfile(IntEnum):
    """Device class the wire and tuning are built for."""

    DESKTOP = 0
    MOBILE = 1

    @property
    def label(self) -> str:
        return self.name.lower()


def device_profile_from_value(value: object) -> DeviceProfile | None:
    if isinstance(value, DeviceProfile):
        return value
    if isinstance(value, str):
        raw = value.strip().upper()
        if raw in DeviceProfile.__members__:
            return DeviceProfile[raw]
        if not raw.isdigit():
            return None
        value = int(raw)
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    try:
        return DeviceProfile(value)
    except ValueError:
        return None


def resolve_profile(value: object) -> DeviceProfile:
    profile = device_profile_from_value(value)
    if profile is None:
        raise ValueError(f"unknown device profile: {value!r}")
    return profile


@dataclass(frozen=True, slots=True)
class ProfileTuning:
    # Steering.
    max_speed: float
    arrive_radius: float
    steering_gain: float
    target_smoothing: float
    drag: float
    lag: float
    keys_accel: float
    keys_jitter: float

    # Touch-relative joystick, in unscaled pixels.
    touch_max_radius: float
    touch_gain: float
    touch_deadzone: float

    # Hazard timers, seconds.
    sabotage_base: float
    sabotage_jitter: float
    morph_base: float
    morph_jitter: float

    # Morph perturbation.
    morph_points_min: int
    morph_points_spread: int
    morph_dx: float
    morph_dy: float
    bounds_min: float
    bounds_max: float

    # Sampling.
    segment_samples: int
    slither_amplitude: float
    slither_rate: float

    default_seed: int


PROFILE_TUNING: dict[DeviceProfile, ProfileTuning] = {
    DeviceProfile.DESKTOP: ProfileTuning(
        max_speed=650.0,
        arrive_radius=120.0,
        steering_gain=14.0,
        target_smoothing=0.16,
        drag=4.2,
        lag=0.06,
        keys_accel=1200.0,
        keys_jitter=70.0,
        touch_max_radius=230.0,
        touch_gain=1.25,
        touch_deadzone=6.0,
        sabotage_base=8.0,
        sabotage_jitter=6.5,
        morph_base=24.0,
        morph_jitter=22.0,
        morph_points_min=6,
        morph_points_spread=7,
        morph_dx=0.14,
        morph_dy=0.18,
        bounds_min=0.02,
        bounds_max=0.98,
        segment_samples=10,
        slither_amplitude=0.9,
        slither_rate=0.015,
        default_seed=1337,
    ),
    DeviceProfile.MOBILE: ProfileTuning(
        # More stable and slightly slower than desktop.
        max_speed=540.0,
        arrive_radius=175.0,
        steering_gain=12.2,
        target_smoothing=0.20,
        drag=4.9,
        lag=0.05,
        keys_accel=1050.0,
        keys_jitter=55.0,
        touch_max_radius=250.0,
        touch_gain=1.30,
        touch_deadzone=7.0,
        sabotage_base=11.0,
        sabotage_jitter=9.0,
        morph_base=32.0,
        morph_jitter=28.0,
        morph_points_min=3,
        morph_points_spread=3,
        morph_dx=0.0,
        morph_dy=0.18,
        bounds_min=0.06,
        bounds_max=0.94,
        segment_samples=14,
        slither_amplitude=0.65,
        slither_rate=0.012,
        default_seed=7331,
    ),
}


def profile_tuning(profile: DeviceProfile) -> ProfileTuning:
    return PROFILE_TUNING[resolve_profile(profile)]

from __future__ import annotations

from dataclasses import dataclass, fields, replace
import math
from typing import Any


class ConfigError(ValueError):
    pass


@dataclass(frozen=True, slots=True)
class GameConfig:
    """Game-level constants shared by both device profiles.

    Durations are seconds; radii are unscaled pixels and are multiplied by
    `ui_scale` wherever they meet presentation-space geometry.
    """

    countdown_seconds: float = 5.0
    max_strikes: int = 3
    respawn_delay: float = 0.26
    recatch_window: float = 1.6
    morph_duration: float = 0.95
    max_dt: float = 0.033

    ui_scale: float = 1.0
    outer_radius: float = 20.0
    inner_radius: float = 13.0
    wire_radius: float = 3.0
    margin: float = 1.2
    playfield_padding: float = 10.0
    pinch_factor: float = 0.72

    win_radius: float = 22.0
    win_progress_fraction: float = 0.985

    sabotage_min_duration: float = 1.2
    sabotage_duration_jitter: float = 1.5
    sabotage_shake_chance: float = 0.18

    def __post_init__(self) -> None:
        for name in (
            "countdown_seconds",
            "respawn_delay",
            "recatch_window",
            "morph_duration",
            "max_dt",
            "sabotage_min_duration",
        ):
            value = float(getattr(self, name))
            if not math.isfinite(value) or value <= 0.0:
                raise ConfigError(f"{name} must be positive, got {value}")
        if int(self.max_strikes) < 1:
            raise ConfigError(f"max_strikes must be at least 1, got {self.max_strikes}")
        if not float(self.ui_scale) > 0.0:
            raise ConfigError(f"ui_scale must be positive, got {self.ui_scale}")
        if not 0.0 < float(self.inner_radius) < float(self.outer_radius):
            raise ConfigError(
                f"inner_radius must be in (0, outer_radius), got {self.inner_radius} vs {self.outer_radius}"
            )
        if self.allowed_tolerance <= 0.0:
            raise ConfigError("inner_radius leaves no tolerance around the wire")
        if not 0.0 < float(self.pinch_factor) < 1.0:
            raise ConfigError(f"pinch_factor must be in (0, 1), got {self.pinch_factor}")
        if not 0.0 < float(self.win_progress_fraction) <= 1.0:
            raise ConfigError(f"win_progress_fraction must be in (0, 1], got {self.win_progress_fraction}")
        if float(self.sabotage_duration_jitter) < 0.0:
            raise ConfigError(f"sabotage_duration_jitter must be >= 0, got {self.sabotage_duration_jitter}")

    @property
    def allowed_tolerance(self) -> float:
        """Distance from the wire the marker center may drift before a strike."""
        s = float(self.ui_scale)
        return float(self.inner_radius) * s - float(self.wire_radius) * s - float(self.margin) * s

    def tolerance(self, *, pinched: bool) -> float:
        allowed = self.allowed_tolerance
        if pinched:
            allowed *= float(self.pinch_factor)
        return allowed

    @property
    def scaled_outer_radius(self) -> float:
        return float(self.outer_radius) * float(self.ui_scale)

    @property
    def scaled_inner_radius(self) -> float:
        return float(self.inner_radius) * float(self.ui_scale)

    @property
    def scaled_win_radius(self) -> float:
        return float(self.win_radius) * float(self.ui_scale)

    @property
    def scaled_padding(self) -> float:
        return float(self.playfield_padding) * float(self.ui_scale)

    def overrides(self) -> dict[str, Any]:
        """Return the fields that differ from the defaults."""
        default = GameConfig()
        out: dict[str, Any] = {}
        for item in fields(self):
            value = getattr(self, item.name)
            if value != getattr(default, item.name):
                out[item.name] = value
        return out

    @classmethod
    def from_overrides(cls, overrides: dict[str, Any] | None) -> GameConfig:
        if not overrides:
            return cls()
        known = {item.name for item in fields(cls)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ConfigError(f"unknown config fields: {', '.join(unknown)}")
        return replace(cls(), **overrides)

"""Computer control that chases a point a little further along the wire."""

from __future__ import annotations

from dataclasses import dataclass

from .sim.input import InputSnapshot
from .sim.session import WireSession
from .wire.proximity import nearest, progress_at


@dataclass(slots=True)
class Autopilot:
    lookahead: float = 24.0

    def __post_init__(self) -> None:
        if not float(self.lookahead) > 0.0:
            raise ValueError(f"lookahead must be positive, got {self.lookahead}")

    def snapshot(self, session: WireSession) -> InputSnapshot:
        polyline = session.polyline
        hit = nearest(polyline, session.marker.pos)
        ahead = max(progress_at(polyline, hit), session.best_progress) + float(self.lookahead)
        target = polyline.point_at_length(ahead)
        return InputSnapshot.pointer(target.x, target.y)

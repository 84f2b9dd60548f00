from __future__ import annotations

from .clock import FixedStepClock, clamp_dt
from .director import EventDirector, FiredEvent
from .events import StepEvent, StepEventKind
from .input import ControlMode, Direction, InputSnapshot, TouchJoystick, key_vector
from .phase import Phase, PhaseKind, transition
from .sabotage import SabotageKind, SabotageTimers, pick_sabotage
from .session import StepResult, WireSession
from .steering import Marker, SteeringController

__all__ = [
    "ControlMode",
    "Direction",
    "EventDirector",
    "FiredEvent",
    "FixedStepClock",
    "InputSnapshot",
    "Marker",
    "Phase",
    "PhaseKind",
    "SabotageKind",
    "SabotageTimers",
    "StepEvent",
    "StepEventKind",
    "StepResult",
    "SteeringController",
    "TouchJoystick",
    "WireSession",
    "clamp_dt",
    "key_vector",
    "pick_sabotage",
    "transition",
]

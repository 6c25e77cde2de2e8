from .curves import Curve
from .enums import LinkStatus, ReferenceKind, ValveKind
from .nodes import NodeTable
from .valve import ActuatorState, Valve

__all__ = [
    "ActuatorState",
    "Curve",
    "LinkStatus",
    "NodeTable",
    "ReferenceKind",
    "Valve",
    "ValveKind",
]

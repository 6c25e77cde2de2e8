from __future__ import annotations

import dataclasses
import enum

from pressure_management_core.network.nodes import NodeTable


class ClosureCurve(enum.Enum):
    DISCHARGE_COEFFICIENT = "discharge_coefficient"
    VALVE_TRAVEL = "valve_travel"


@dataclasses.dataclass
class EvaluationContext:
    """Network-wide information consulted while evaluating a valve's head loss or status

    :ivar nodes: The network's node table
    :ivar time: Elapsed simulation time (s) of the instant being solved
    :ivar closure_curve: Relationship between opening and loss factor of closure control valves
    """

    nodes: NodeTable
    time: int = 0
    closure_curve: ClosureCurve = ClosureCurve.DISCHARGE_COEFFICIENT

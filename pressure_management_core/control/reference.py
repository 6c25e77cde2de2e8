"""Reference pressure strategies for dynamic pressure reducing valves.

A strategy determines the pressure (m) that a valve tries to maintain, and at which node that
pressure is measured. All but the remote node strategy control the pressure at the valve's
downstream node.
"""

from __future__ import annotations

import dataclasses
import typing as t

from pressure_management_core.network.enums import ReferenceKind
from pressure_management_core.network.nodes import NodeTable
from pressure_management_core.utils.time import SECONDS_PER_DAY, time_of_day

if t.TYPE_CHECKING:
    from pressure_management_core.network.valve import Valve


class ReferenceStrategy:
    kind: t.ClassVar[ReferenceKind]

    def reference_pressure(self, flow: float, nodes: NodeTable, time: int) -> float:
        """
        :param flow: Current flow through the valve (m3/s)
        :param nodes: The network's node table
        :param time: Elapsed simulation time (s)
        :return: The reference pressure (m)
        """
        raise NotImplementedError

    def controlled_node(self, valve: Valve) -> int:
        return valve.to_node

    def controlled_pressure(self, valve: Valve, nodes: NodeTable) -> float:
        return nodes.pressure(self.controlled_node(valve))


@dataclasses.dataclass
class FixedOutlet(ReferenceStrategy):
    kind: t.ClassVar[ReferenceKind] = ReferenceKind.FIXED_OUTLET
    pressure: float

    def reference_pressure(self, flow, nodes, time):
        return self.pressure


@dataclasses.dataclass(frozen=True)
class DaySchedule:
    """Alternating day and night periods repeating every 24 hours.

    :ivar night: ``(start, end)`` windows in seconds after midnight. A window may wrap around
        midnight (``start > end``). The boundaries themselves belong to the day, so that
        ``is_night`` is False at exactly ``start`` and ``end``. Both must lie in ``[0, 86400)``
    """

    night: t.Tuple[t.Tuple[int, int], ...] = ((3600, 18000),)

    def __post_init__(self):
        for window in self.night:
            if not all(0 <= bound < SECONDS_PER_DAY for bound in window):
                raise ValueError(f"Night window {window} is not within a single day")

    def is_night(self, time: int) -> bool:
        tod = time_of_day(time)
        for start, end in self.night:
            if start < end:
                if start < tod < end:
                    return True
            elif start > end and (tod > start or tod < end):
                return True
        return False


@dataclasses.dataclass
class TimeModulated(ReferenceStrategy):
    kind: t.ClassVar[ReferenceKind] = ReferenceKind.TIME_MODULATED
    day_pressure: float
    night_pressure: float
    schedule: DaySchedule = dataclasses.field(default_factory=DaySchedule)

    def reference_pressure(self, flow, nodes, time):
        return self.night_pressure if self.schedule.is_night(time) else self.day_pressure


@dataclasses.dataclass
class FlowModulated(ReferenceStrategy):
    """Reference pressure as a quadratic function of the valve's own flow:
    ``a * q^2 + b * q + c``
    """

    kind: t.ClassVar[ReferenceKind] = ReferenceKind.FLOW_MODULATED
    a: float
    b: float
    c: float

    def reference_pressure(self, flow, nodes, time):
        return (self.a * flow + self.b) * flow + self.c


@dataclasses.dataclass
class RemoteNode(ReferenceStrategy):
    """Maintain a target pressure at a (critical) node elsewhere in the network"""

    kind: t.ClassVar[ReferenceKind] = ReferenceKind.REMOTE_NODE
    node: int
    pressure: float

    def reference_pressure(self, flow, nodes, time):
        return self.pressure

    def controlled_node(self, valve):
        return self.node

from __future__ import annotations

import logging
import typing as t

from pressure_management_core.exceptions import ConfigurationError
from pressure_management_core.hydraulics.constants import ZERO_FLOW
from pressure_management_core.hydraulics.context import ClosureCurve, EvaluationContext
from pressure_management_core.hydraulics.headloss import HeadLoss, find_head_loss
from pressure_management_core.hydraulics.status import update_status

from .curves import Curve
from .enums import LinkStatus
from .nodes import NodeTable
from .valve import Valve

logger = logging.getLogger(__name__)


class ValveNetwork:
    """The valves of a pipe network together with the node table they refer to.

    A hydraulic solver uses ``find_head_loss`` and ``update_status`` as callbacks during its
    iterations, and writes converged heads into ``nodes`` and converged flows into the valves.

    :param nodes: The network's node table
    :param valves: Valves, each with unique name and node indices into ``nodes``
    :param curves: Curves referenced by the valves, by name
    :param closure_curve: Relationship between opening and loss factor for closure control valves
    """

    def __init__(
        self,
        nodes: NodeTable,
        valves: t.Iterable[Valve],
        curves: t.Optional[t.Dict[str, Curve]] = None,
        closure_curve: t.Union[ClosureCurve, str] = ClosureCurve.DISCHARGE_COEFFICIENT,
    ):
        self.nodes = nodes
        self.valves: t.Dict[str, Valve] = {}
        for valve in valves:
            self.add_valve(valve)
        self.curves = dict(curves or {})
        self.context = EvaluationContext(nodes=nodes, closure_curve=ClosureCurve(closure_curve))

    def add_valve(self, valve: Valve):
        if valve.name in self.valves:
            raise ConfigurationError(f"Duplicate valve '{valve.name}'")
        for idx in (valve.from_node, valve.to_node):
            if not 0 <= idx < len(self.nodes):
                raise ConfigurationError(f"Valve '{valve.name}' refers to unknown node {idx}")
        if valve.from_node == valve.to_node:
            raise ConfigurationError(f"Valve '{valve.name}' must connect two different nodes")
        self.valves[valve.name] = valve

    def __len__(self):
        return len(self.valves)

    def __iter__(self) -> t.Iterator[Valve]:
        return iter(self.valves.values())

    def get_valve(self, name: str) -> Valve:
        try:
            return self.valves[name]
        except KeyError:
            raise ValueError(f"Unknown valve '{name}'") from None

    def dynamic_valves(self) -> t.List[Valve]:
        return [valve for valve in self if valve.is_dynamic]

    @property
    def time(self) -> int:
        return self.context.time

    @time.setter
    def time(self, value: int):
        self.context.time = int(value)

    def initialize(self, init_flow: bool = True):
        for valve in self:
            valve.prepare(self.nodes)
            valve.initialize(init_flow=init_flow)

    def find_head_loss(self, valve: Valve, q: float) -> HeadLoss:
        return find_head_loss(valve, q, self.context)

    def update_status(self, valve: Valve, q: float, h1: float, h2: float) -> LinkStatus:
        return update_status(valve, q, h1, h2, self.context)

    def commit(self):
        """Latch the controller state of every dynamic valve at the end of a time step"""
        for valve in self.dynamic_valves():
            valve.actuator.commit()

    def validate_statuses(self, flow_tolerance: float = ZERO_FLOW) -> bool:
        return all([valve.validate_status(flow_tolerance) for valve in self])

from __future__ import annotations

import logging
import typing as t

from pressure_management_core.network.enums import LinkStatus, ReferenceKind
from pressure_management_core.network.nodes import NodeTable
from pressure_management_core.network.valve import ActuatorState, Valve
from pressure_management_core.settings import Settings

from .actuator import actuator_cross_section, clamp_position

if t.TYPE_CHECKING:
    from pressure_management_core.network.network import ValveNetwork

logger = logging.getLogger(__name__)


class PressureController:
    """Advances the actuator position of every dynamic pressure reducing valve once per time step.

    The actuator moves with a speed proportional to the control error, the difference between the
    reference pressure and the controlled pressure: ``dx/dt = gain * error / Acs(x)``, where
    ``Acs`` is the effective cross-section of the actuator's control chamber. Separate gains apply
    to opening (positive error) and closing (negative error). The control error is evaluated on
    the heads and flows of the previously converged step, and every increment is relative to the
    previously committed position.

    :param settings: Provides the gains, the step duration and the initial actuator position
    """

    def __init__(self, settings: Settings):
        self.open_gain = settings.open_gain
        self.close_gain = settings.close_gain
        self.timestep = settings.hydraulic_timestep
        self.initial_position = settings.initial_actuator_position

    def initialize(self, network: ValveNetwork):
        for valve in network.dynamic_valves():
            valve.actuator.reset(self.initial_position)

    def update(self, network: ValveNetwork, time: int):
        if time == 0:
            self.initialize(network)
        for valve in network.dynamic_valves():
            self.update_valve(valve, network.nodes, time)

    def update_valve(self, valve: Valve, nodes: NodeTable, time: int):
        self.try_activation(valve, nodes, time)
        if valve.status is not LinkStatus.ACTIVE:
            return
        state = valve.actuator
        reference = state.strategy.reference_pressure(valve.flow, nodes, time)
        error = reference - state.strategy.controlled_pressure(valve, nodes)
        self.update_error(state, reference, error)

        gain = self.open_gain if error >= 0 else self.close_gain
        delta = gain * error / actuator_cross_section(state.position_previous) * self.timestep
        state.position = clamp_position(state.position_previous + delta)
        state.position_delta = state.position - state.position_previous

    def try_activation(self, valve: Valve, nodes: NodeTable, time: int):
        """A closed fixed outlet valve becomes active when its upstream pressure exceeds the
        reference pressure while its downstream pressure is below it
        """
        strategy = valve.actuator.strategy
        if strategy.kind is not ReferenceKind.FIXED_OUTLET:
            return
        if valve.has_fixed_status or valve.status is not LinkStatus.CLOSED:
            return
        reference = strategy.reference_pressure(valve.flow, nodes, time)
        if nodes.pressure(valve.from_node) > reference > nodes.pressure(valve.to_node):
            logger.info(f"Valve '{valve.name}' activated at t={time}s, reference {reference} m")
            valve.status = LinkStatus.ACTIVE

    @staticmethod
    def update_error(state: ActuatorState, reference: float, error: float):
        state.reference = reference
        state.error = error
        state.error_derivative = error - state.error_previous
        limit = state.ERROR_INTEGRAL_LIMIT
        state.error_integral = min(max(state.error_integral + error, -limit), limit)

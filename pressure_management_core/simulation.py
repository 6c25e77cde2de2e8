from __future__ import annotations

import logging
import typing as t
from abc import ABC, abstractmethod

from pressure_management_core.control.controller import PressureController
from pressure_management_core.exceptions import HydraulicSolverError
from pressure_management_core.hydraulics.context import ClosureCurve
from pressure_management_core.network.network import ValveNetwork
from pressure_management_core.reporting import ActuatorPositionRecorder
from pressure_management_core.settings import Settings
from pressure_management_core.utils.logging import get_logger
from pressure_management_core.utils.time import format_clock_time


class HydraulicSolver(ABC):
    """Solves the hydraulics of a network for a single instant.

    During ``solve`` an implementation calls ``ValveNetwork.find_head_loss`` and
    ``ValveNetwork.update_status`` for every valve in every iteration, until the heads, flows and
    valve statuses are consistent. It then writes the converged heads into ``network.nodes`` and
    the converged flows into the valves.
    """

    def initialize(self, network: ValveNetwork):
        pass

    @abstractmethod
    def solve(self, network: ValveNetwork, time: int):
        """
        :param network: The network to solve
        :param time: Elapsed simulation time (s)
        :raises HydraulicSolverError: if the hydraulics do not converge
        """
        raise NotImplementedError

    @abstractmethod
    def advance(self, network: ValveNetwork, time: int) -> int:
        """Determine the length of the next time step

        :return: The step length (s), 0 when the simulation is finished
        """
        raise NotImplementedError


class SimulationLoop:
    """Drives a network through simulated time. Every step the pressure controller moves the
    actuators of the dynamic valves, then the hydraulic solver solves the network, after which
    the controller state is committed and time advances by the step the solver chooses.

    :param network: The network to simulate
    :param solver: Hydraulic solver for a single instant
    :param settings: Simulation and controller settings. When given, its closure curve replaces
        the one the network was created with
    :param recorder: Optionally records actuator positions after every converged step
    :param logger: Uses a logger configured from ``settings`` when not given
    """

    def __init__(
        self,
        network: ValveNetwork,
        solver: HydraulicSolver,
        settings: t.Optional[Settings] = None,
        recorder: t.Optional[ActuatorPositionRecorder] = None,
        logger: t.Optional[logging.Logger] = None,
    ):
        self.network = network
        self.solver = solver
        self.settings = settings or Settings()
        if settings is not None:
            network.context.closure_curve = ClosureCurve(settings.closure_curve)
        self.controller = PressureController(self.settings)
        self.recorder = recorder
        self._owns_recorder = False
        if recorder is None and self.settings.actuator_output is not None:
            self.recorder = ActuatorPositionRecorder(self.settings.actuator_output)
            self._owns_recorder = True
        self.logger = logger or get_logger(self.settings)
        self.time = 0

    def initialize(self):
        self.time = 0
        self.network.time = 0
        self.network.initialize()
        self.solver.initialize(self.network)
        self.controller.initialize(self.network)

    def run(self) -> int:
        """Run the simulation until the solver reports a zero length step

        :return: The final simulation time (s)
        :raises HydraulicSolverError: when the solver fails, remaining steps are not simulated
        """
        self.logger.info(f"Starting simulation of {len(self.network)} valves")
        self.initialize()
        try:
            while True:
                self.step()
                step = self.solver.advance(self.network, self.time)
                if step <= 0:
                    break
                self.time += step
        finally:
            if self._owns_recorder:
                self.recorder.close()
        self.logger.info(f"Simulation finished at {format_clock_time(self.time)}")
        return self.time

    def step(self):
        self.network.time = self.time
        self.controller.update(self.network, self.time)
        try:
            self.solver.solve(self.network, self.time)
        except HydraulicSolverError as e:
            self.logger.error(f"Hydraulic solver failed at {format_clock_time(self.time)}: {e}")
            raise
        self.network.validate_statuses()
        if self.recorder is not None:
            self.recorder.record(self.time, self.network)
        self.network.commit()

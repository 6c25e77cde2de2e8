from .control.controller import PressureController
from .exceptions import ConfigurationError, HydraulicSolverError, PressureManagementException
from .network.network import ValveNetwork
from .reporting import ActuatorPositionRecorder
from .settings import Settings
from .simulation import HydraulicSolver, SimulationLoop

__all__ = [
    "ActuatorPositionRecorder",
    "ConfigurationError",
    "HydraulicSolver",
    "HydraulicSolverError",
    "PressureController",
    "PressureManagementException",
    "Settings",
    "SimulationLoop",
    "ValveNetwork",
]

"""Valve entity and the controller state carried by dynamic pressure reducing valves"""

from __future__ import annotations

import dataclasses
import logging
import math
import typing as t

from pressure_management_core.exceptions import ConfigurationError
from pressure_management_core.hydraulics.constants import (
    INITIAL_VELOCITY,
    LOSS_FACTOR_CONVERSION,
    MIN_LOSS_COEFF,
    ZERO_FLOW,
)

from .curves import Curve
from .enums import LinkStatus, ValveKind
from .nodes import NodeTable

if t.TYPE_CHECKING:
    from pressure_management_core.control.reference import ReferenceStrategy

logger = logging.getLogger(__name__)


@dataclasses.dataclass
class ActuatorState:
    """Controller state of a dynamic pressure reducing valve.

    :ivar strategy: The reference pressure strategy, fixed for the lifetime of the valve
    :ivar position: Normalized actuator position (opening fraction) used during the current step
    :ivar position_previous: Position committed at the end of the previous step
    :ivar position_delta: Increment applied during the last controller update
    :ivar error: Control error (reference minus controlled pressure) of the current step
    :ivar error_previous: Control error committed at the end of the previous step
    :ivar error_integral: Running sum of the control error, clamped to ``ERROR_INTEGRAL_LIMIT``
    :ivar error_derivative: Difference between the current and the previous control error
    :ivar reference: Last reference pressure (m) determined by the controller
    """

    strategy: ReferenceStrategy
    position: float = 0.0
    position_previous: float = 0.0
    position_delta: float = 0.0
    error: float = 0.0
    error_previous: float = 0.0
    error_integral: float = 0.0
    error_derivative: float = 0.0
    reference: t.Optional[float] = None

    ERROR_INTEGRAL_LIMIT: t.ClassVar[float] = 100.0

    def reset(self, position: float):
        self.position = position
        self.position_previous = position
        self.position_delta = 0.0
        self.error = 0.0
        self.error_previous = 0.0
        self.error_integral = 0.0
        self.error_derivative = 0.0
        self.reference = None

    def commit(self):
        self.position_previous = self.position
        self.error_previous = self.error


@dataclasses.dataclass
class Valve:
    """A flow control device between two nodes.

    Only the fields relevant for the valve's ``kind`` are used: ``curve`` for a general purpose
    valve and ``actuator`` for a dynamic pressure reducing valve. The meaning of ``setting``
    depends on the kind:

    - PRV, PSV, PBV: pressure (m)
    - FCV: flow (m3/s)
    - TCV: loss coefficient
    - CCV: relative opening between 0 and 1
    - GPV, DPRV: unused

    ``from_node`` and ``to_node`` are indices into the network's ``NodeTable``.
    """

    name: str
    kind: ValveKind
    from_node: int
    to_node: int
    diameter: float
    loss_coefficient: float = 0.0
    initial_status: LinkStatus = LinkStatus.ACTIVE
    initial_setting: float = 0.0
    curve: t.Optional[Curve] = None
    actuator: t.Optional[ActuatorState] = None

    status: LinkStatus = dataclasses.field(init=False)
    setting: float = dataclasses.field(init=False)
    has_fixed_status: bool = dataclasses.field(init=False)
    loss_factor: float = dataclasses.field(init=False, default=0.0)
    elevation: float = dataclasses.field(init=False, default=0.0)
    flow: float = dataclasses.field(init=False, default=0.0)
    head_loss: float = dataclasses.field(init=False, default=0.0)
    head_gradient: float = dataclasses.field(init=False, default=0.0)

    def __post_init__(self):
        if self.kind is ValveKind.GPV and self.curve is None:
            raise ConfigurationError(f"General purpose valve '{self.name}' requires a curve")
        if self.kind is ValveKind.DPRV and self.actuator is None:
            raise ConfigurationError(
                f"Dynamic pressure reducing valve '{self.name}' requires a reference strategy"
            )
        if self.kind is not ValveKind.DPRV and self.actuator is not None:
            raise ConfigurationError(
                f"Valve '{self.name}' of type {self.kind.label} cannot have a reference strategy"
            )
        if self.diameter <= 0:
            raise ConfigurationError(f"Valve '{self.name}' must have a positive diameter")
        self.status = self.initial_status
        self.setting = self.initial_setting
        self.has_fixed_status = self.initial_status is not LinkStatus.ACTIVE
        self.set_loss_factor()

    @property
    def area(self) -> float:
        return math.pi * self.diameter**2 / 4.0

    @property
    def is_dynamic(self) -> bool:
        return self.kind is ValveKind.DPRV

    def set_loss_factor(self):
        coeff = max(self.loss_coefficient, MIN_LOSS_COEFF)
        self.loss_factor = LOSS_FACTOR_CONVERSION * coeff / self.diameter**4

    def prepare(self, nodes: NodeTable):
        """Derive the properties that depend on the surrounding network. The head-set point of a
        PRV (or DPRV) is relative to its downstream node, that of a PSV to its upstream node
        """
        self.set_loss_factor()
        if self.kind in (ValveKind.PRV, ValveKind.DPRV):
            self.elevation = nodes.elevation(self.to_node)
        elif self.kind is ValveKind.PSV:
            self.elevation = nodes.elevation(self.from_node)

    def initialize(self, init_flow: bool = True):
        self.status = self.initial_status
        self.setting = self.initial_setting
        self.has_fixed_status = self.initial_status is not LinkStatus.ACTIVE
        self.head_loss = 0.0
        self.head_gradient = 0.0
        if init_flow:
            self.set_initial_flow()

    def set_initial_flow(self):
        if self.kind is ValveKind.FCV:
            self.flow = self.setting
        elif self.kind is ValveKind.CCV and self.setting == 0:
            self.flow = ZERO_FLOW
        elif self.kind is ValveKind.DPRV and self.status.is_closed:
            self.flow = ZERO_FLOW
        else:
            self.flow = self.area * INITIAL_VELOCITY

    def get_setting(self) -> float:
        return self.setting

    def get_velocity(self) -> float:
        return self.flow / self.area

    def get_reynolds(self, flow: float, viscosity: float) -> float:
        return abs(flow) / self.area * self.diameter / viscosity

    def change_status(self, new_status: LinkStatus, reason: str = "", make_change=True) -> bool:
        """Pin the valve's status, bypassing the status state machine from then on.

        :return: Whether the status changes (or would change when ``make_change`` is False)
        """
        if self.has_fixed_status and self.status is new_status:
            return False
        if make_change:
            logger.info(f"Valve '{self.name}' status set to {new_status.label}. {reason}".strip())
            self.status = new_status
            self.has_fixed_status = True
            if new_status is LinkStatus.CLOSED:
                self.flow = 0.0
        return True

    def change_setting(self, new_setting: float, reason: str = "", make_change=True) -> bool:
        """Change the valve's setting. A zero setting closes the valve, any other setting opens it.
        A closed valve (other than a CCV, unless the new setting is zero) only takes over the new
        setting without changing its status.

        :return: Whether the valve changes (or would change when ``make_change`` is False)
        """
        if self.setting == new_setting:
            return False
        if self.status is LinkStatus.CLOSED and (
            self.kind is not ValveKind.CCV or new_setting == 0.0
        ):
            self.setting = new_setting
            return False
        if make_change:
            if new_setting == 0.0:
                self.status = LinkStatus.CLOSED
                self.flow = 0.0
            else:
                self.status = LinkStatus.OPEN
            logger.info(f"Valve '{self.name}' setting changed to {new_setting}. {reason}".strip())
            self.setting = new_setting
        return True

    def validate_status(self, flow_tolerance: float) -> bool:
        """Check for reverse flow through a PRV or PSV, which should have been closed

        :return: False if the valve carries an unexpected reverse flow
        """
        if self.kind in (ValveKind.PRV, ValveKind.PSV) and self.flow < -flow_tolerance:
            logger.warning(f"Valve '{self.name}' has reverse flow {self.flow}")
            return False
        return True

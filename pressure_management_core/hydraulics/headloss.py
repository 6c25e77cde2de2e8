"""Head loss laws of the different valve kinds.

Every function returns the head loss across the valve (m) and its derivative with respect to the
flow, as used by a gradient based network solver. Gradients are never smaller than
``MIN_GRADIENT``.
"""

from __future__ import annotations

import math
import typing as t

from pressure_management_core.control import actuator
from pressure_management_core.network.enums import LinkStatus, ValveKind
from pressure_management_core.network.valve import Valve

from .constants import GRAVITY, HIGH_RESISTANCE, LOSS_FACTOR_CONVERSION, MIN_GRADIENT
from .context import ClosureCurve, EvaluationContext


class HeadLoss(t.NamedTuple):
    head_loss: float
    gradient: float


# conductance (m^2.5/s) of a fully open globe valve
VALVE_CONDUCTANCE = 0.87
# discharge coefficient of a globe valve as a function of its opening, highest order first
DISCHARGE_COEFFICIENT_POLYNOMIAL = (-1.1293, 3.3823, -3.443, 0.5671, 1.0371, -0.0037, 0.0)
# valves whose setting only throttles them while active, an open one has its plain minor loss
SETTING_CONTROLLED_KINDS = frozenset([ValveKind.PBV, ValveKind.TCV, ValveKind.GPV, ValveKind.FCV])


def closed_head_loss(q: float) -> HeadLoss:
    return HeadLoss(HIGH_RESISTANCE * q, HIGH_RESISTANCE)


def open_head_loss(loss_factor: float, q: float) -> HeadLoss:
    """Quadratic minor loss ``loss_factor * q * |q|``. When the gradient would drop below
    ``MIN_GRADIENT`` the loss becomes linear in the flow
    """
    gradient = 2.0 * loss_factor * abs(q)
    if gradient < MIN_GRADIENT:
        return HeadLoss(MIN_GRADIENT * q, MIN_GRADIENT)
    return HeadLoss(gradient * q / 2.0, gradient)


def pbv_head_loss(valve: Valve, q: float) -> HeadLoss:
    if valve.loss_factor * q * q >= abs(valve.setting):
        return open_head_loss(valve.loss_factor, q)
    return HeadLoss(valve.setting, MIN_GRADIENT)


def tcv_head_loss(valve: Valve, q: float) -> HeadLoss:
    throttled = LOSS_FACTOR_CONVERSION * valve.setting / valve.diameter**4
    return open_head_loss(max(throttled, valve.loss_factor), q)


def ccv_loss_factor(valve: Valve, closure_curve: ClosureCurve) -> float:
    opening = valve.setting
    if closure_curve is ClosureCurve.VALVE_TRAVEL:
        return 1.0 / (VALVE_CONDUCTANCE**2 * opening**2)

    cd = 0.0
    for coefficient in DISCHARGE_COEFFICIENT_POLYNOMIAL:
        cd = cd * opening + coefficient
    if cd == 0:
        return math.inf
    return (1.0 / cd**2 - 1.0) / (2.0 * GRAVITY * valve.area**2)


def ccv_head_loss(valve: Valve, q: float, context: EvaluationContext) -> HeadLoss:
    if valve.setting == 0:
        return closed_head_loss(q)
    factor = ccv_loss_factor(valve, context.closure_curve)
    if math.isinf(factor):
        return closed_head_loss(q)
    return open_head_loss(factor, q)


def gpv_head_loss(valve: Valve, q: float) -> HeadLoss:
    slope, intercept = valve.curve.find_segment(abs(q))
    head_loss = intercept + slope * abs(q)
    if q < 0.0:
        head_loss = -head_loss
    return HeadLoss(head_loss, max(slope, MIN_GRADIENT))


def fcv_head_loss(valve: Valve, q: float) -> HeadLoss:
    excess = q - valve.setting
    if excess > 0.0:
        return HeadLoss(
            valve.loss_factor * valve.setting**2 + HIGH_RESISTANCE * excess, HIGH_RESISTANCE
        )
    if q < 0.0:
        return closed_head_loss(q)
    return open_head_loss(valve.loss_factor, q)


def dprv_head_loss(valve: Valve, q: float) -> HeadLoss:
    position = valve.actuator.position
    if valve.status is LinkStatus.CLOSED or position <= 0:
        return closed_head_loss(q)
    if valve.status is LinkStatus.OPEN:
        return open_head_loss(valve.loss_factor, q)
    return open_head_loss(actuator.loss_factor(position), q)


def pressure_valve_head_loss(valve: Valve, q: float) -> HeadLoss:
    # an active PRV/PSV fixes a node head inside the solver, it contributes no loss of its own
    if valve.status is LinkStatus.CLOSED:
        return closed_head_loss(q)
    if valve.status is LinkStatus.OPEN:
        return open_head_loss(valve.loss_factor, q)
    return HeadLoss(0.0, MIN_GRADIENT)


def find_head_loss(valve: Valve, q: float, context: EvaluationContext) -> HeadLoss:
    """Determine the head loss and gradient of a valve at trial flow ``q``, store them on the
    valve and return them. Only the dynamic pressure reducing valve reads its actuator state, no
    valve's loss factor is modified.
    """
    if valve.status.is_closed:
        result = closed_head_loss(q)
    elif valve.status is LinkStatus.OPEN and (
        valve.has_fixed_status or valve.kind in SETTING_CONTROLLED_KINDS
    ):
        result = open_head_loss(valve.loss_factor, q)
    else:
        result = _dispatch_active(valve, q, context)
    valve.head_loss, valve.head_gradient = result
    return result


def _dispatch_active(valve: Valve, q: float, context: EvaluationContext) -> HeadLoss:
    kind = valve.kind
    if kind is ValveKind.PBV:
        return pbv_head_loss(valve, q)
    if kind is ValveKind.TCV:
        return tcv_head_loss(valve, q)
    if kind is ValveKind.CCV:
        return ccv_head_loss(valve, q, context)
    if kind is ValveKind.GPV:
        return gpv_head_loss(valve, q)
    if kind is ValveKind.FCV:
        return fcv_head_loss(valve, q)
    if kind is ValveKind.DPRV:
        return dprv_head_loss(valve, q)
    if kind in (ValveKind.PRV, ValveKind.PSV):
        return pressure_valve_head_loss(valve, q)
    raise ValueError(f"Unsupported valve kind {kind}")

"""Status transitions of pressure regulating valves.

PRVs, PSVs and dynamic PRVs cycle between ACTIVE, OPEN and CLOSED depending on the flow through
them and on how the heads at their end nodes compare to their head-set point. All other valve
kinds keep their status.
"""

from __future__ import annotations

from pressure_management_core.network.enums import LinkStatus, ValveKind
from pressure_management_core.network.valve import Valve

from .constants import ZERO_FLOW
from .context import EvaluationContext


def prv_status(status: LinkStatus, q: float, h1: float, h2: float, hset: float) -> LinkStatus:
    if status is LinkStatus.ACTIVE:
        if q < -ZERO_FLOW:
            return LinkStatus.CLOSED
        if h1 < hset:
            return LinkStatus.OPEN
    elif status is LinkStatus.OPEN:
        if q < -ZERO_FLOW:
            return LinkStatus.CLOSED
        if h2 > hset:
            return LinkStatus.ACTIVE
    elif status is LinkStatus.CLOSED:
        if h1 > hset and h2 < hset:
            return LinkStatus.ACTIVE
        if h1 < hset and h1 > h2:
            return LinkStatus.OPEN
    return status


def psv_status(status: LinkStatus, q: float, h1: float, h2: float, hset: float) -> LinkStatus:
    if status is LinkStatus.ACTIVE:
        if q < -ZERO_FLOW:
            return LinkStatus.CLOSED
        if h2 > hset:
            return LinkStatus.OPEN
    elif status is LinkStatus.OPEN:
        if q < -ZERO_FLOW:
            return LinkStatus.CLOSED
        if h1 < hset:
            return LinkStatus.ACTIVE
    elif status is LinkStatus.CLOSED:
        if h2 < hset and h1 > hset:
            return LinkStatus.ACTIVE
        if h2 > hset and h1 > h2:
            return LinkStatus.OPEN
    return status


def head_set_point(valve: Valve, q: float, context: EvaluationContext) -> float:
    """Head (m) that a pressure regulating valve tries to maintain. For a dynamic PRV this is the
    current reference pressure, re-evaluated on every call
    """
    if valve.kind is ValveKind.DPRV:
        strategy = valve.actuator.strategy
        return strategy.reference_pressure(q, context.nodes, context.time) + valve.elevation
    return valve.setting + valve.elevation


def update_status(
    valve: Valve, q: float, h1: float, h2: float, context: EvaluationContext
) -> LinkStatus:
    """Update a valve's status given a trial flow and the heads at its upstream (``h1``) and
    downstream (``h2``) node. A valve that is closed by this update gets zero flow.

    :return: The (possibly unchanged) status
    """
    if valve.has_fixed_status or not valve.kind.is_pressure_valve:
        return valve.status

    hset = head_set_point(valve, q, context)
    if valve.kind is ValveKind.PSV:
        new_status = psv_status(valve.status, q, h1, h2, hset)
    else:
        new_status = prv_status(valve.status, q, h1, h2, hset)

    if new_status is not valve.status:
        if new_status is LinkStatus.CLOSED:
            valve.flow = 0.0
        valve.status = new_status
    return new_status

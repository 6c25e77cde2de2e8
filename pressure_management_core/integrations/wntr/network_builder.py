"""Conversion of a WNTR ``WaterNetworkModel`` into a ``ValveNetwork``.

WNTR stores all quantities in SI units, which are also the internal units of this package, so
diameters, settings and heads are taken over as is.
"""

from __future__ import annotations

import typing as t

from pressure_management_core.control.config import parse_reference_config
from pressure_management_core.exceptions import ConfigurationError
from pressure_management_core.network.curves import Curve
from pressure_management_core.network.enums import LinkStatus, ValveKind
from pressure_management_core.network.network import ValveNetwork
from pressure_management_core.network.nodes import NodeTable
from pressure_management_core.network.valve import ActuatorState, Valve
from pressure_management_core.settings import Settings

if t.TYPE_CHECKING:
    import wntr


def build_network(
    wn: wntr.network.WaterNetworkModel,
    dynamic_valves: t.Optional[t.Dict[str, dict]] = None,
    closure_valves: t.Iterable[str] = (),
    settings: t.Optional[Settings] = None,
) -> ValveNetwork:
    """Create a ``ValveNetwork`` with the nodes and valves of a WNTR network model

    :param wn: The WNTR network model
    :param dynamic_valves: Valves (by name) that become dynamic pressure reducing valves,
        with their pressure management configuration, eg. ``{"V1": {"FO": {"pressure": 40}}}``
    :param closure_valves: Valves (by name) that become closure control valves. Their initial
        setting is interpreted as the relative opening
    :param settings: Provides the closure curve used for closure control valves
    :raises ConfigurationError: for an unknown valve name, an invalid pressure management
        configuration or a valve that is both dynamic and closure controlled
    """
    dynamic_valves = dict(dynamic_valves or {})
    closure_valves = set(closure_valves)
    settings = settings or Settings()

    overlap = closure_valves.intersection(dynamic_valves)
    if overlap:
        raise ConfigurationError(
            f"Valves cannot be both dynamic and closure controlled: {sorted(overlap)}"
        )
    valve_names = set(wn.valve_name_list)
    unknown = (closure_valves | set(dynamic_valves)) - valve_names
    if unknown:
        raise ConfigurationError(f"Unknown valves: {sorted(unknown)}")

    nodes = build_node_table(wn)
    curves: t.Dict[str, Curve] = {}
    valves = []
    for name, wntr_valve in wn.valves():
        kind = get_valve_kind(wntr_valve)
        config = None
        if name in dynamic_valves:
            kind = ValveKind.DPRV
            config = dynamic_valves[name]
        elif name in closure_valves:
            kind = ValveKind.CCV
        valves.append(build_valve(wntr_valve, nodes, kind, config=config, curves=curves))

    return ValveNetwork(nodes, valves, curves=curves, closure_curve=settings.closure_curve)


def build_node_table(wn: wntr.network.WaterNetworkModel) -> NodeTable:
    """Junctions start with zero pressure, tanks at their initial level. A reservoir's elevation
    is its base head
    """
    names, elevations, heads = [], [], []
    for name, node in wn.nodes():
        if node.node_type == "Reservoir":
            elevation = head = node.base_head
        elif node.node_type == "Tank":
            elevation = node.elevation
            head = node.elevation + node.init_level
        else:
            elevation = head = node.elevation
        names.append(name)
        elevations.append(elevation)
        heads.append(head)
    return NodeTable(names, elevations, heads)


def build_valve(
    wntr_valve,
    nodes: NodeTable,
    kind: t.Optional[ValveKind] = None,
    config: t.Optional[dict] = None,
    curves: t.Optional[t.Dict[str, Curve]] = None,
) -> Valve:
    kind = kind or get_valve_kind(wntr_valve)
    curve = None
    actuator = None
    initial_setting = 0.0
    if kind is ValveKind.GPV:
        # the setting of a wntr GPV is the name of its headloss curve
        curve = get_headloss_curve(wntr_valve, curves if curves is not None else {})
    elif kind is ValveKind.DPRV:
        if config is None:
            raise ConfigurationError(
                f"Dynamic valve '{wntr_valve.name}' requires a pressure management config"
            )
        actuator = ActuatorState(strategy=parse_reference_config(config, nodes))
    else:
        initial_setting = float(wntr_valve.initial_setting or 0.0)

    return Valve(
        name=wntr_valve.name,
        kind=kind,
        from_node=nodes.index_of(wntr_valve.start_node_name),
        to_node=nodes.index_of(wntr_valve.end_node_name),
        diameter=float(wntr_valve.diameter),
        loss_coefficient=float(wntr_valve.minor_loss or 0.0),
        initial_status=get_initial_status(wntr_valve),
        initial_setting=initial_setting,
        curve=curve,
        actuator=actuator,
    )


def get_valve_kind(wntr_valve) -> ValveKind:
    try:
        return ValveKind.from_label(str(wntr_valve.valve_type))
    except ValueError as e:
        raise ConfigurationError(str(e)) from e


def get_initial_status(wntr_valve) -> LinkStatus:
    status = wntr_valve.initial_status
    # wntr uses its own LinkStatus enum (Closed, Open, Active) but also accepts plain strings
    label = getattr(status, "name", status)
    return LinkStatus.from_label(str(label))


def get_headloss_curve(wntr_valve, curves: t.Dict[str, Curve]) -> Curve:
    name = wntr_valve.headloss_curve_name
    if name is None:
        raise ConfigurationError(f"General purpose valve '{wntr_valve.name}' has no curve")
    if name not in curves:
        curves[name] = Curve(name, wntr_valve.headloss_curve.points)
    return curves[name]

"""Validation and parsing of per-valve pressure management configuration.

A configuration has exactly one key, the strategy label, e.g.::

    {"FO": {"pressure": 40}}
    {"TM": {"day_pressure": 40, "night_pressure": 25, "night": [["01:00", "05:00"]]}}
    {"FM": {"a": -2000, "b": 50, "c": 30}}
    {"RNM": {"node": "J12", "pressure": 20}}
"""

from __future__ import annotations

import typing as t

from jsonschema import validators

from pressure_management_core.exceptions import ConfigurationError
from pressure_management_core.network.enums import ReferenceKind
from pressure_management_core.network.nodes import NodeTable
from pressure_management_core.utils.time import clock_to_seconds

from .reference import (
    DaySchedule,
    FixedOutlet,
    FlowModulated,
    ReferenceStrategy,
    RemoteNode,
    TimeModulated,
)

_NUMBER = {"type": "number"}
_CLOCK_TIME = {
    "anyOf": [{"type": "string"}, {"type": "number", "minimum": 0, "exclusiveMaximum": 86400}]
}


def _strategy_schema(properties: dict, required: t.List[str]):
    return {
        "type": "object",
        "properties": properties,
        "required": required,
        "additionalProperties": False,
    }


CONFIG_SCHEMA = {
    "type": "object",
    "minProperties": 1,
    "maxProperties": 1,
    "additionalProperties": False,
    "properties": {
        "FO": _strategy_schema({"pressure": _NUMBER}, ["pressure"]),
        "TM": _strategy_schema(
            {
                "day_pressure": _NUMBER,
                "night_pressure": _NUMBER,
                "night": {
                    "type": "array",
                    "items": {
                        "type": "array",
                        "items": _CLOCK_TIME,
                        "minItems": 2,
                        "maxItems": 2,
                    },
                },
            },
            ["day_pressure", "night_pressure"],
        ),
        "FM": _strategy_schema({"a": _NUMBER, "b": _NUMBER, "c": _NUMBER}, ["a", "b", "c"]),
        "RNM": _strategy_schema(
            {"node": {"type": "string"}, "pressure": _NUMBER}, ["node", "pressure"]
        ),
    },
}


def validate_config(config: dict):
    """Validate a pressure management configuration against ``CONFIG_SCHEMA``

    :raises ConfigurationError: describing every violation
    """
    validator_cls = validators.validator_for(CONFIG_SCHEMA)
    validator = validator_cls(CONFIG_SCHEMA)
    errors = sorted(validator.iter_errors(config), key=lambda e: list(e.path))
    if errors:
        messages = "; ".join(
            f"{'/'.join(str(p) for p in err.path) or '<root>'}: {err.message}" for err in errors
        )
        raise ConfigurationError(f"Invalid pressure management config: {messages}")


def parse_schedule(windows: t.Optional[t.Sequence[t.Sequence]]) -> DaySchedule:
    if windows is None:
        return DaySchedule()
    try:
        return DaySchedule(
            night=tuple((clock_to_seconds(start), clock_to_seconds(end)) for start, end in windows)
        )
    except (ValueError, OverflowError) as e:
        raise ConfigurationError(f"Invalid night window in {windows}: {e}") from e


def parse_reference_config(config: dict, nodes: NodeTable) -> ReferenceStrategy:
    """Validate a configuration and create the corresponding ``ReferenceStrategy``

    :param config: The pressure management configuration of a single valve
    :param nodes: Used to resolve the remote node of a ``RNM`` configuration
    :raises ConfigurationError: if the config is invalid or refers to an unknown node
    """
    validate_config(config)
    ((label, params),) = config.items()
    kind = ReferenceKind(label)
    if kind is ReferenceKind.FIXED_OUTLET:
        return FixedOutlet(pressure=float(params["pressure"]))
    if kind is ReferenceKind.TIME_MODULATED:
        return TimeModulated(
            day_pressure=float(params["day_pressure"]),
            night_pressure=float(params["night_pressure"]),
            schedule=parse_schedule(params.get("night")),
        )
    if kind is ReferenceKind.FLOW_MODULATED:
        return FlowModulated(a=float(params["a"]), b=float(params["b"]), c=float(params["c"]))

    node_name = params["node"]
    if node_name not in nodes:
        raise ConfigurationError(f"Remote node '{node_name}' does not exist")
    return RemoteNode(node=nodes.index_of(node_name), pressure=float(params["pressure"]))

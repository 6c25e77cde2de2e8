"""Enumerations for valve kinds, link statuses and reference-pressure strategies.

Each enumeration's value is the conventional label used in network descriptions and controller
configuration, so that ``ValveKind("PRV")`` and ``ValveKind.PRV.label`` round trip.
"""

from __future__ import annotations

import enum


class _LabeledEnum(enum.Enum):
    @property
    def label(self) -> str:
        return self.value

    @classmethod
    def from_label(cls, label: str):
        try:
            return cls(label.upper())
        except ValueError:
            valid = ", ".join(m.value for m in cls)
            raise ValueError(f"Unknown {cls.__name__} '{label}', must be one of {valid}") from None


class ValveKind(_LabeledEnum):
    PRV = "PRV"
    PSV = "PSV"
    FCV = "FCV"
    TCV = "TCV"
    PBV = "PBV"
    GPV = "GPV"
    CCV = "CCV"
    DPRV = "DPRV"

    @property
    def is_pressure_valve(self):
        return self in (ValveKind.PRV, ValveKind.PSV, ValveKind.DPRV)


class LinkStatus(_LabeledEnum):
    CLOSED = "CLOSED"
    OPEN = "OPEN"
    ACTIVE = "ACTIVE"
    TEMP_CLOSED = "TEMP_CLOSED"

    @property
    def is_closed(self):
        return self in (LinkStatus.CLOSED, LinkStatus.TEMP_CLOSED)


class ReferenceKind(_LabeledEnum):
    """Pressure management strategies of a dynamic pressure reducing valve"""

    FIXED_OUTLET = "FO"
    TIME_MODULATED = "TM"
    FLOW_MODULATED = "FM"
    REMOTE_NODE = "RNM"

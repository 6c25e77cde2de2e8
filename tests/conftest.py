import pytest

from pressure_management_core.control.reference import FixedOutlet
from pressure_management_core.network.enums import LinkStatus, ValveKind
from pressure_management_core.network.network import ValveNetwork
from pressure_management_core.network.nodes import NodeTable
from pressure_management_core.network.valve import ActuatorState, Valve
from pressure_management_core.settings import Settings


@pytest.fixture
def settings():
    return Settings(hydraulic_timestep=60)


@pytest.fixture
def nodes():
    # an upstream node at 60 m pressure, a downstream node at 30 m and a remote node at 25 m
    return NodeTable(["R1", "J1", "J2"], elevations=[0.0, 0.0, 5.0], heads=[60.0, 30.0, 30.0])


@pytest.fixture
def make_valve():
    def _make_valve(kind=ValveKind.PRV, **kwargs):
        kwargs.setdefault("name", "V1")
        kwargs.setdefault("from_node", 0)
        kwargs.setdefault("to_node", 1)
        kwargs.setdefault("diameter", 0.2)
        kwargs.setdefault("initial_status", LinkStatus.ACTIVE)
        if kind is ValveKind.DPRV:
            kwargs.setdefault("actuator", ActuatorState(strategy=FixedOutlet(pressure=40.0)))
        return Valve(kind=kind, **kwargs)

    return _make_valve


@pytest.fixture
def dprv(make_valve, nodes):
    valve = make_valve(ValveKind.DPRV)
    valve.prepare(nodes)
    valve.initialize()
    return valve


@pytest.fixture
def network(nodes, dprv):
    return ValveNetwork(nodes, [dprv])

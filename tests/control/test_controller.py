import pytest

from pressure_management_core.control.actuator import actuator_cross_section
from pressure_management_core.control.controller import PressureController
from pressure_management_core.control.reference import RemoteNode, TimeModulated
from pressure_management_core.network.enums import LinkStatus, ValveKind
from pressure_management_core.network.network import ValveNetwork
from pressure_management_core.network.valve import ActuatorState
from pressure_management_core.settings import Settings


@pytest.fixture
def controller(settings):
    return PressureController(settings)


def expected_position(previous, error, gain=1e-6, timestep=60):
    return previous + gain * error / actuator_cross_section(previous) * timestep


class TestInitialize:
    def test_resets_actuator(self, controller, network, dprv):
        dprv.actuator.position = 0.9
        dprv.actuator.error_integral = 50.0
        controller.initialize(network)
        assert dprv.actuator.position == dprv.actuator.position_previous == 0.2
        assert dprv.actuator.error_integral == 0.0

    def test_configured_initial_position(self, network, dprv):
        PressureController(Settings(initial_actuator_position=0.35)).initialize(network)
        assert dprv.actuator.position == 0.35

    def test_update_at_time_zero_resets(self, controller, network, dprv):
        dprv.actuator.position_previous = 0.9
        controller.update(network, 0)
        assert dprv.actuator.position == pytest.approx(expected_position(0.2, 10.0))


class TestControlLaw:
    def test_opens_below_reference(self, controller, network, dprv):
        # outlet pressure 30 m, reference 40 m
        controller.update(network, 0)
        assert dprv.actuator.error == 10.0
        assert dprv.actuator.reference == 40.0
        assert dprv.actuator.position == pytest.approx(expected_position(0.2, 10.0))
        assert dprv.actuator.position_delta > 0

    def test_closes_above_reference(self, network, dprv, nodes):
        controller = PressureController(Settings(close_gain=2e-6))
        nodes.set_head(1, 50.0)
        controller.update(network, 0)
        assert dprv.actuator.error == -10.0
        assert dprv.actuator.position == pytest.approx(expected_position(0.2, -10.0, gain=2e-6))

    def test_increment_relative_to_committed_position(self, controller, network, dprv):
        controller.update(network, 0)
        first = dprv.actuator.position
        controller.update(network, 60)
        assert dprv.actuator.position == first
        network.commit()
        controller.update(network, 120)
        assert dprv.actuator.position == pytest.approx(expected_position(first, 10.0))

    @pytest.mark.parametrize("head, expected", [(-1e9, 1.0), (1e9, 0.0)])
    def test_position_is_clamped(self, controller, network, dprv, nodes, head, expected):
        nodes.set_head(1, head)
        controller.update(network, 0)
        assert dprv.actuator.position == expected

    def test_position_stays_in_range(self, controller, network, dprv, nodes):
        for step, head in enumerate([-1e6, 1e6, -1e3, 40.0, 1e4, -50.0]):
            nodes.set_head(1, head)
            controller.update(network, step * 60)
            assert 0.0 <= dprv.actuator.position <= 1.0
            network.commit()

    def test_error_integral_is_bounded(self, controller, network, dprv, nodes):
        nodes.set_head(1, -1e3)
        for step in range(5):
            controller.update(network, step * 60)
            network.commit()
        assert dprv.actuator.error_integral == 100.0

    def test_error_derivative(self, controller, network, dprv, nodes):
        controller.update(network, 0)
        network.commit()
        nodes.set_head(1, 35.0)
        controller.update(network, 60)
        assert dprv.actuator.error_derivative == pytest.approx(-5.0)

    def test_inactive_valve_is_not_controlled(self, controller, network, dprv):
        controller.initialize(network)
        dprv.status = LinkStatus.OPEN
        controller.update(network, 60)
        assert dprv.actuator.position == 0.2
        assert dprv.actuator.position_delta == 0.0

    def test_remote_node(self, controller, nodes, make_valve):
        valve = make_valve(
            ValveKind.DPRV, actuator=ActuatorState(strategy=RemoteNode(node=2, pressure=20.0))
        )
        valve.initialize()
        controller.update(ValveNetwork(nodes, [valve]), 0)
        assert valve.actuator.error == -5.0
        assert valve.actuator.position < 0.2

    def test_time_modulated(self, controller, nodes, make_valve):
        strategy = TimeModulated(day_pressure=40.0, night_pressure=25.0)
        valve = make_valve(ValveKind.DPRV, actuator=ActuatorState(strategy=strategy))
        valve.initialize()
        network = ValveNetwork(nodes, [valve])
        controller.update(network, 0)
        assert valve.actuator.reference == 40.0
        controller.update(network, 7200)
        assert valve.actuator.reference == 25.0


class TestActivation:
    @pytest.fixture
    def closed_dprv(self, dprv, nodes):
        nodes.set_heads([50.0, 30.0, 30.0])
        dprv.status = LinkStatus.CLOSED
        return dprv

    def test_activates_and_moves(self, controller, network, closed_dprv):
        controller.update(network, 0)
        assert closed_dprv.status is LinkStatus.ACTIVE
        assert closed_dprv.actuator.position_delta > 0

    def test_no_activation_below_reference(self, controller, network, closed_dprv, nodes):
        nodes.set_head(0, 35.0)
        controller.update(network, 0)
        assert closed_dprv.status is LinkStatus.CLOSED
        assert closed_dprv.actuator.position == 0.2

    def test_no_activation_with_fixed_status(self, controller, network, closed_dprv):
        closed_dprv.has_fixed_status = True
        controller.update(network, 0)
        assert closed_dprv.status is LinkStatus.CLOSED

    def test_only_fixed_outlet_activates(self, controller, nodes, make_valve):
        nodes.set_heads([50.0, 30.0, 30.0])
        strategy = TimeModulated(day_pressure=40.0, night_pressure=40.0)
        valve = make_valve(ValveKind.DPRV, actuator=ActuatorState(strategy=strategy))
        valve.initialize()
        valve.status = LinkStatus.CLOSED
        controller.update(ValveNetwork(nodes, [valve]), 0)
        assert valve.status is LinkStatus.CLOSED

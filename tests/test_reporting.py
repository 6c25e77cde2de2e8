import io

from pressure_management_core.network.network import ValveNetwork
from pressure_management_core.reporting import ActuatorPositionRecorder


class TestActuatorPositionRecorder:
    def test_history(self, network, dprv):
        recorder = ActuatorPositionRecorder()
        dprv.actuator.position = 0.25
        recorder.record(0, network)
        dprv.actuator.position = 0.3
        recorder.record(60, network)
        assert recorder.history == {"V1": [(0, 0.25), (60, 0.3)]}
        assert recorder.positions("V1") == [0.25, 0.3]
        assert recorder.positions("V2") == []

    def test_write_to_stream(self, network, dprv):
        stream = io.StringIO()
        recorder = ActuatorPositionRecorder(stream)
        dprv.actuator.position = 0.125
        recorder.record(3725, network)
        assert stream.getvalue() == "1:02:05 V1 0.125\n"

    def test_write_to_file(self, network, dprv, tmp_path):
        path = tmp_path / "positions.txt"
        dprv.actuator.position = 0.5
        with ActuatorPositionRecorder(path) as recorder:
            recorder.record(0, network)
            recorder.record(90000, network)
        assert path.read_text() == "0:00:00 V1 0.5\n25:00:00 V1 0.5\n"

    def test_only_dynamic_valves(self, nodes, make_valve):
        recorder = ActuatorPositionRecorder()
        recorder.record(0, ValveNetwork(nodes, [make_valve()]))
        assert recorder.history == {}

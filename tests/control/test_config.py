import pytest

from pressure_management_core.control.config import (
    parse_reference_config,
    parse_schedule,
    validate_config,
)
from pressure_management_core.control.reference import (
    DaySchedule,
    FixedOutlet,
    FlowModulated,
    RemoteNode,
    TimeModulated,
)
from pressure_management_core.exceptions import ConfigurationError


class TestValidateConfig:
    @pytest.mark.parametrize(
        "config",
        [
            {"FO": {"pressure": 40}},
            {"TM": {"day_pressure": 40, "night_pressure": 25}},
            {"TM": {"day_pressure": 40, "night_pressure": 25, "night": [["01:00", 18000]]}},
            {"FM": {"a": -1.0, "b": 2.0, "c": 30}},
            {"RNM": {"node": "J2", "pressure": 20}},
        ],
    )
    def test_valid(self, config):
        validate_config(config)

    @pytest.mark.parametrize(
        "config",
        [
            {},
            {"FO": {"pressure": 40}, "FM": {"a": 1, "b": 2, "c": 3}},
            {"XX": {"pressure": 40}},
            {"FO": {}},
            {"FO": {"pressure": "high"}},
            {"FO": {"pressure": 40, "extra": 1}},
            {"TM": {"day_pressure": 40, "night_pressure": 25, "night": [["01:00"]]}},
            {"TM": {"day_pressure": 40, "night_pressure": 25, "night": [[3600, 90000]]}},
            {"RNM": {"pressure": 20}},
        ],
    )
    def test_invalid(self, config):
        with pytest.raises(ConfigurationError):
            validate_config(config)


class TestParseSchedule:
    def test_default(self):
        assert parse_schedule(None) == DaySchedule(night=((3600, 18000),))

    def test_clock_times(self):
        schedule = parse_schedule([["22:00", "3:30"], [43200, "13:00:00"]])
        assert schedule.night == ((79200, 12600), (43200, 46800))

    def test_invalid_clock_time(self):
        with pytest.raises(ConfigurationError):
            parse_schedule([["not a time", "05:00"]])

    @pytest.mark.parametrize("window", [[3600, "90000"], ["01:00", 90000]])
    def test_window_outside_day(self, window):
        with pytest.raises(ConfigurationError):
            parse_schedule([window])


class TestParseReferenceConfig:
    def test_fixed_outlet(self, nodes):
        assert parse_reference_config({"FO": {"pressure": 40}}, nodes) == FixedOutlet(40.0)

    def test_time_modulated(self, nodes):
        strategy = parse_reference_config(
            {"TM": {"day_pressure": 40, "night_pressure": 25, "night": [["00:00", "06:00"]]}},
            nodes,
        )
        assert isinstance(strategy, TimeModulated)
        assert strategy.night_pressure == 25.0
        assert strategy.schedule.night == ((0, 21600),)

    def test_flow_modulated(self, nodes):
        strategy = parse_reference_config({"FM": {"a": -1, "b": 2, "c": 30}}, nodes)
        assert strategy == FlowModulated(a=-1.0, b=2.0, c=30.0)

    def test_remote_node(self, nodes):
        strategy = parse_reference_config({"RNM": {"node": "J2", "pressure": 20}}, nodes)
        assert strategy == RemoteNode(node=2, pressure=20.0)

    def test_unknown_remote_node(self, nodes):
        with pytest.raises(ConfigurationError):
            parse_reference_config({"RNM": {"node": "J9", "pressure": 20}}, nodes)

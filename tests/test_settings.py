import pydantic
import pytest

from pressure_management_core.settings import Settings


class TestSettings:
    def test_defaults(self):
        settings = Settings()
        assert settings.hydraulic_timestep == 60
        assert settings.open_gain == settings.close_gain == 1e-6
        assert settings.initial_actuator_position == 0.2
        assert settings.closure_curve == "discharge_coefficient"
        assert settings.actuator_output is None

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("PM_HYDRAULIC_TIMESTEP", "300")
        monkeypatch.setenv("PM_CLOSURE_CURVE", "valve_travel")
        settings = Settings()
        assert settings.hydraulic_timestep == 300
        assert settings.closure_curve == "valve_travel"

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"hydraulic_timestep": 0},
            {"open_gain": -1.0},
            {"initial_actuator_position": 1.5},
            {"closure_curve": "unknown"},
            {"unknown_setting": 1},
        ],
    )
    def test_invalid(self, kwargs):
        with pytest.raises(pydantic.ValidationError):
            Settings(**kwargs)

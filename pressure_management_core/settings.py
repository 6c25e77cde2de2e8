from __future__ import annotations

import typing as t
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    name: str = "pressure_management"
    log_level: str = "INFO"
    log_format: str = "[{asctime}] [{levelname:8s}] {name:17s}: {message}"

    hydraulic_timestep: int = Field(default=60, gt=0)
    open_gain: float = Field(default=1e-6, ge=0)
    close_gain: float = Field(default=1e-6, ge=0)
    initial_actuator_position: float = Field(default=0.2, ge=0, le=1)
    closure_curve: t.Literal["discharge_coefficient", "valve_travel"] = "discharge_coefficient"
    actuator_output: t.Optional[Path] = None

    model_config = SettingsConfigDict(env_prefix="pm_", extra="forbid")

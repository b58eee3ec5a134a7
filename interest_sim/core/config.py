"""Environment-driven settings for the simulator and its HTTP surface."""

from __future__ import annotations

from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from interest_sim.domain.accrual import DEFAULT_ANNUAL_RATE, monthly_rate_from_annual


class SimulatorSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="INTEREST_SIM_")

    # Engine
    annual_rate: float = Field(DEFAULT_ANNUAL_RATE, ge=0)

    # Presentation affordances (not enforced by the engine)
    max_months: int = Field(24, ge=1)
    deposit_presets: List[int] = Field(default_factory=lambda: [500, 1000, 5000])
    default_deposit: float = Field(1000, gt=0)
    message_seconds: float = Field(1.5, ge=0)
    slider_tick_step: int = Field(6, ge=1)

    # HTTP
    max_games: int = Field(1000, ge=1)
    cors_origins: List[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://127.0.0.1:5173"]
    )

    log_level: str = "INFO"

    @property
    def monthly_rate(self) -> float:
        return monthly_rate_from_annual(self.annual_rate)

    @property
    def slider_ticks(self) -> List[int]:
        ticks = list(range(0, self.max_months + 1, self.slider_tick_step))
        if ticks[-1] != self.max_months:
            ticks.append(self.max_months)
        return ticks


@lru_cache(maxsize=1)
def get_settings() -> SimulatorSettings:
    return SimulatorSettings()

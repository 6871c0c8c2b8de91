"""Data models for battery telemetry samples and derived insights."""

from dataclasses import asdict, dataclass
from datetime import datetime


@dataclass
class RawSample:
    """A single battery telemetry sample.

    Positive current is discharge, negative current is charge.
    """

    timestamp: datetime
    voltage: float
    current: float
    state_of_charge: float  # percent, 0-100
    temperature: float | None = None
    power: float | None = None  # watts


@dataclass
class ProcessedSample:
    """A raw sample plus the quantities integrated up to and including it."""

    timestamp: datetime
    voltage: float
    current: float
    state_of_charge: float
    temperature: float | None
    power: float
    incremental_charge_ah: float
    cumulative_charge_ah: float
    incremental_energy_kwh: float
    cumulative_energy_kwh: float


@dataclass(frozen=True)
class InsightsSummary:
    """Summary statistics for one batch of processed samples.

    `efficiency_percent` is consumed / generated * 100. It is a ratio, not a
    bounded efficiency, and can exceed 100.
    """

    total_energy_consumed_kwh: float = 0.0
    total_energy_generated_kwh: float = 0.0
    average_voltage: float = 0.0
    peak_current_magnitude: float = 0.0
    min_voltage: float = 0.0
    max_voltage: float = 0.0
    average_soc: float = 0.0
    charging_cycle_count: int = 0
    efficiency_percent: float = 0.0

    @property
    def voltage_range(self) -> float:
        """Spread between the highest and lowest voltage."""
        return self.max_voltage - self.min_voltage

    @property
    def net_energy_kwh(self) -> float:
        """Energy generated minus energy consumed."""
        return self.total_energy_generated_kwh - self.total_energy_consumed_kwh

    def to_dict(self) -> dict:
        return asdict(self)

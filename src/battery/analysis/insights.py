"""Summary statistics and charge cycle detection over processed samples."""

from enum import Enum

from ..models import InsightsSummary, ProcessedSample, RawSample
from .integration import integrate

# Cycle detection thresholds (SOC %)
LOW_SOC_THRESHOLD = 20.0
HIGH_SOC_THRESHOLD = 80.0

# Health score penalties
HEALTHY_EFFICIENCY = 80.0
HEALTHY_MAX_CYCLES = 20
HEALTHY_VOLTAGE_RANGE = 15.0
HEALTHY_MIN_AVERAGE_SOC = 40.0


class CycleState(Enum):
    NORMAL = "normal"
    AWAITING_RECHARGE = "awaiting_recharge"


def count_charging_cycles(
    socs: list[float],
    low: float = LOW_SOC_THRESHOLD,
    high: float = HIGH_SOC_THRESHOLD,
) -> int:
    """Count low-SOC to high-SOC transitions.

    Algorithm:
    1. Start in NORMAL.
    2. A reading below `low` moves to AWAITING_RECHARGE.
    3. While awaiting, a reading above `high` completes one cycle and
       returns to NORMAL.

    Dipping low again while already awaiting does not add a cycle, and a
    depletion that never recovers above `high` is not counted.
    """
    cycles = 0
    state = CycleState.NORMAL

    for soc in socs:
        if state is CycleState.NORMAL and soc < low:
            state = CycleState.AWAITING_RECHARGE
        elif state is CycleState.AWAITING_RECHARGE and soc > high:
            cycles += 1
            state = CycleState.NORMAL

    return cycles


def aggregate(processed: list[ProcessedSample]) -> InsightsSummary:
    """Compute an InsightsSummary for one batch of processed samples.

    An empty batch gives a summary with every field zero.
    """
    if not processed:
        return InsightsSummary()

    voltages = [s.voltage for s in processed]
    socs = [s.state_of_charge for s in processed]

    consumed = sum(s.incremental_energy_kwh for s in processed if s.current > 0)
    generated = sum(abs(s.incremental_energy_kwh) for s in processed if s.current < 0)

    return InsightsSummary(
        total_energy_consumed_kwh=consumed,
        total_energy_generated_kwh=generated,
        average_voltage=sum(voltages) / len(voltages),
        peak_current_magnitude=max(abs(s.current) for s in processed),
        min_voltage=min(voltages),
        max_voltage=max(voltages),
        average_soc=sum(socs) / len(socs),
        charging_cycle_count=count_charging_cycles(socs),
        efficiency_percent=consumed / generated * 100 if generated > 0 else 0.0,
    )


def analyze(
    samples: list[RawSample],
    min_delta_hours: float | None = None,
) -> tuple[list[ProcessedSample], InsightsSummary]:
    """Run integration and aggregation over a batch of raw samples."""
    processed = integrate(samples, min_delta_hours=min_delta_hours)
    return processed, aggregate(processed)


def health_score(insights: InsightsSummary) -> float:
    """Score overall battery condition from 0 (poor) to 100 (excellent)."""
    score = 100.0

    if insights.efficiency_percent < HEALTHY_EFFICIENCY:
        score -= (HEALTHY_EFFICIENCY - insights.efficiency_percent) * 0.5

    if insights.charging_cycle_count > HEALTHY_MAX_CYCLES:
        score -= (insights.charging_cycle_count - HEALTHY_MAX_CYCLES) * 2

    if insights.voltage_range > HEALTHY_VOLTAGE_RANGE:
        score -= (insights.voltage_range - HEALTHY_VOLTAGE_RANGE) * 2

    if insights.average_soc < HEALTHY_MIN_AVERAGE_SOC:
        score -= (HEALTHY_MIN_AVERAGE_SOC - insights.average_soc) * 1.5

    return max(0.0, min(100.0, score))

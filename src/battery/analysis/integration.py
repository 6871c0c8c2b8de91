"""Integrate raw samples into cumulative charge and energy throughput."""

from ..models import ProcessedSample, RawSample

# The first sample has no predecessor, so it is credited with a fixed interval.
# Changing this changes every cumulative total.
FIRST_SAMPLE_DELTA_HOURS = 1.0

SECONDS_PER_HOUR = 3600


def sample_power(sample: RawSample) -> float:
    """Power in watts: the reported value if non-zero, else voltage * current."""
    if sample.power:
        return sample.power
    return sample.voltage * sample.current


def find_ordering_violations(samples: list[RawSample]) -> list[int]:
    """Return indices whose timestamp is not strictly after the previous one."""
    return [
        i
        for i in range(1, len(samples))
        if samples[i].timestamp <= samples[i - 1].timestamp
    ]


def integrate(
    samples: list[RawSample],
    min_delta_hours: float | None = None,
) -> list[ProcessedSample]:
    """Walk the samples once, accumulating charge (Ah) and energy (kWh).

    Samples must be sorted by timestamp. Out-of-order or duplicate timestamps
    are not rejected: they give zero or negative deltas, which then flow into
    the running totals. Pass `min_delta_hours` to clamp such deltas up to a
    floor instead.

    Args:
        samples: Raw samples in ascending timestamp order
        min_delta_hours: Optional lower bound applied to every time delta

    Returns:
        One ProcessedSample per input sample, in the same order
    """
    processed = []
    cumulative_ah = 0.0
    cumulative_kwh = 0.0

    for i, sample in enumerate(samples):
        if i == 0:
            delta_hours = FIRST_SAMPLE_DELTA_HOURS
        else:
            elapsed = sample.timestamp - samples[i - 1].timestamp
            delta_hours = elapsed.total_seconds() / SECONDS_PER_HOUR

        if min_delta_hours is not None and delta_hours < min_delta_hours:
            delta_hours = min_delta_hours

        charge_ah = abs(sample.current) * delta_hours
        cumulative_ah += charge_ah

        power = sample_power(sample)
        energy_kwh = abs(power) * delta_hours / 1000
        cumulative_kwh += energy_kwh

        processed.append(
            ProcessedSample(
                timestamp=sample.timestamp,
                voltage=sample.voltage,
                current=sample.current,
                state_of_charge=sample.state_of_charge,
                temperature=sample.temperature,
                power=power,
                incremental_charge_ah=charge_ah,
                cumulative_charge_ah=cumulative_ah,
                incremental_energy_kwh=energy_kwh,
                cumulative_energy_kwh=cumulative_kwh,
            )
        )

    return processed

"""Generated demo telemetry.

Used when the telemetry API is unreachable, and by the `demo` command. Models
a battery that discharges through the day and recharges overnight, with a
mild seasonal swing.
"""

import math
import random
from datetime import datetime, timedelta, timezone

from ..models import RawSample

DEFAULT_YEAR = 2024
SAMPLES_PER_DAY = 4
SAMPLE_INTERVAL_HOURS = 6


def generate_demo_samples(
    year: int | None = None,
    seed: int | None = None,
    days: int = 365,
) -> list[RawSample]:
    """Generate `days` worth of 6-hourly samples starting on Jan 1 of `year`.

    Args:
        year: Calendar year to start in (default: 2024)
        seed: Seed for reproducible output
        days: Number of days to generate

    Returns:
        List of RawSample objects in timestamp order
    """
    rng = random.Random(seed)
    start = datetime(year or DEFAULT_YEAR, 1, 1, tzinfo=timezone.utc)

    samples = []
    for i in range(days * SAMPLES_PER_DAY):
        timestamp = start + timedelta(hours=i * SAMPLE_INTERVAL_HOURS)
        hour = timestamp.hour
        day_of_year = (timestamp - start).days

        seasonal = math.sin(day_of_year / 365 * 2 * math.pi) * 0.1 + 1

        if 6 <= hour <= 18:
            # Daytime discharge
            soc = max(20.0, (100 - (hour - 6) * 6 + rng.random() * 10) * seasonal)
            voltage = 45 + soc / 100 * 10 + rng.random() * 2
            current = rng.random() * 25 * seasonal
        else:
            # Overnight charge
            hours_charging = hour - 19 if hour >= 19 else hour + 5
            soc = min(100.0, (20 + hours_charging * 10 + rng.random() * 5) * seasonal)
            voltage = 50 + soc / 100 * 8 + rng.random() * 2
            current = -(rng.random() * 15 * seasonal)

        samples.append(
            RawSample(
                timestamp=timestamp,
                voltage=round(voltage, 2),
                current=round(current, 2),
                state_of_charge=round(soc, 1),
                temperature=round(25 + rng.random() * 10, 1),
                power=round(voltage * current, 2),
            )
        )

    return samples

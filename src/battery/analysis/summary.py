"""Human-readable summaries of battery insights."""

from ..models import InsightsSummary
from .insights import health_score


def format_insights_text(
    insights: InsightsSummary,
    source: str | None = None,
    sample_count: int | None = None,
) -> str:
    """Format an insights summary as human-readable text."""
    header = "Battery Summary"
    if source:
        header += f" ({source} data"
        if sample_count is not None:
            header += f", {sample_count} samples"
        header += ")"

    lines = [
        header,
        "",
        "Voltage:",
        f"  - Average: {insights.average_voltage:.2f} V",
        f"  - Range: {insights.min_voltage:.2f} V to {insights.max_voltage:.2f} V",
        "",
        "Energy:",
        f"  - Consumed: {insights.total_energy_consumed_kwh:.3f} kWh",
        f"  - Generated: {insights.total_energy_generated_kwh:.3f} kWh",
        f"  - Net balance: {insights.net_energy_kwh:.3f} kWh",
        # consumed / generated, may exceed 100%
        f"  - Efficiency ratio: {insights.efficiency_percent:.1f}%",
        "",
        "Usage:",
        f"  - Peak current: {insights.peak_current_magnitude:.2f} A",
        f"  - Average SOC: {insights.average_soc:.1f}%",
        f"  - Charging cycles: {insights.charging_cycle_count}",
        f"  - Health score: {health_score(insights):.0f}/100",
    ]

    return "\n".join(lines)

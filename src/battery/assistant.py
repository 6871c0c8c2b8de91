"""Canned assistant responses narrating battery insights.

Questions are routed on keywords; there is no language model behind this.
"""

from .analysis.insights import health_score
from .models import InsightsSummary

GREETING = "Hello! I'm your battery assistant. Ask me anything about the data."

LOADING_MESSAGE = "I'm still loading the battery data. Please wait a moment and try again."

DEEP_DISCHARGE_VOLTAGE = 45.0
HIGH_CYCLE_COUNT = 10


def _voltage_response(insights: InsightsSummary) -> str:
    verdict = (
        "some deep discharge cycles"
        if insights.min_voltage < DEEP_DISCHARGE_VOLTAGE
        else "healthy voltage levels"
    )
    return (
        "The battery voltage analysis shows:\n"
        f"• Average voltage: {insights.average_voltage:.2f}V\n"
        f"• Minimum voltage: {insights.min_voltage:.2f}V\n"
        f"• Maximum voltage: {insights.max_voltage:.2f}V\n"
        f"• Voltage range: {insights.voltage_range:.2f}V\n"
        "\n"
        f"This indicates {verdict}."
    )


def _energy_response(insights: InsightsSummary) -> str:
    if insights.efficiency_percent > 85:
        verdict = "Excellent efficiency!"
    elif insights.efficiency_percent > 70:
        verdict = "Good efficiency"
    else:
        verdict = "Consider checking for energy losses"
    return (
        "Energy analysis reveals:\n"
        f"• Total energy consumed: {insights.total_energy_consumed_kwh:.3f} kWh\n"
        f"• Total energy generated: {insights.total_energy_generated_kwh:.3f} kWh\n"
        f"• Net energy balance: {insights.net_energy_kwh:.3f} kWh\n"
        f"• System efficiency: {insights.efficiency_percent:.1f}%\n"
        "\n"
        f"{verdict}"
    )


def _cycle_response(insights: InsightsSummary) -> str:
    verdict = (
        "High cycle count - monitor battery health"
        if insights.charging_cycle_count > HIGH_CYCLE_COUNT
        else "Normal charging cycle activity"
    )
    return (
        "Charging cycle analysis:\n"
        f"• Total charging cycles detected: {insights.charging_cycle_count}\n"
        f"• Average State of Charge: {insights.average_soc:.1f}%\n"
        f"• Peak current: {insights.peak_current_magnitude:.2f}A\n"
        "\n"
        f"{verdict}"
    )


def _current_response(insights: InsightsSummary) -> str:
    return (
        "Current analysis shows:\n"
        f"• Peak current: {insights.peak_current_magnitude:.2f}A\n"
        "• This represents the maximum instantaneous current draw/charge\n"
        "\n"
        "High current peaks can indicate:\n"
        "- Heavy load usage during discharge\n"
        "- Fast charging during charge cycles\n"
        "- Potential system inefficiencies if sustained"
    )


def _soc_response(insights: InsightsSummary) -> str:
    verdict = "healthy" if insights.average_soc > 60 else "on the lower side"
    return (
        "State of Charge (SOC) insights:\n"
        f"• Average SOC: {insights.average_soc:.1f}%\n"
        f"• Operating range appears {verdict}\n"
        "\n"
        "Recommendations:\n"
        "- Keep SOC between 20-80% for optimal battery life\n"
        "- Avoid deep discharges below 20%\n"
        "- Regular full charges help calibrate the system"
    )


def _health_response(insights: InsightsSummary) -> str:
    score = health_score(insights)
    if score > 80:
        verdict = "Battery is in excellent condition"
    elif score > 60:
        verdict = "Battery is in good condition"
    else:
        verdict = "Battery may need attention - consider maintenance"
    return (
        "Battery health assessment:\n"
        f"• Health score: {score:.0f}/100\n"
        f"• Efficiency rating: {insights.efficiency_percent:.1f}%\n"
        f"• Charging cycles: {insights.charging_cycle_count}\n"
        "\n"
        f"{verdict}"
    )


def _recommendation_response(insights: InsightsSummary) -> str:
    charging = (
        "Increase charging frequency"
        if insights.average_soc < 50
        else "Current charging pattern looks good"
    )
    voltage = (
        "Avoid deep discharges"
        if insights.min_voltage < DEEP_DISCHARGE_VOLTAGE
        else "Voltage levels are healthy"
    )
    efficiency = (
        "Check for energy losses in the system"
        if insights.efficiency_percent < 80
        else "Efficiency is optimal"
    )
    return (
        "Based on your battery data, here are my recommendations:\n"
        "\n"
        f"1. Charging Strategy: {charging}\n"
        f"2. Voltage Management: {voltage}\n"
        f"3. Efficiency: {efficiency}\n"
        "4. Monitoring: Track temperature and current spikes for early warning signs\n"
        "\n"
        "Would you like me to elaborate on any of these points?"
    )


HELP_TEXT = (
    "I can provide insights about your battery system including:\n"
    "• Voltage analysis and trends\n"
    "• Energy consumption and generation\n"
    "• Charging cycle patterns\n"
    "• Current draw analysis\n"
    "• State of charge optimization\n"
    "• Battery health assessment\n"
    "• Performance recommendations\n"
    "\n"
    "What specific aspect would you like to explore?"
)

# First matching rule wins
RESPONSE_RULES = [
    (("voltage",), _voltage_response),
    (("energy", "consumption"), _energy_response),
    (("charging", "cycle"), _cycle_response),
    (("current", "ampere"), _current_response),
    (("soc", "state of charge"), _soc_response),
    (("health", "condition"), _health_response),
    (("recommend", "advice"), _recommendation_response),
]


def generate_response(message: str, insights: InsightsSummary | None) -> str:
    """Answer a free-text question about the insights."""
    if insights is None:
        return LOADING_MESSAGE

    text = message.lower()
    for keywords, respond in RESPONSE_RULES:
        if any(keyword in text for keyword in keywords):
            return respond(insights)

    return HELP_TEXT

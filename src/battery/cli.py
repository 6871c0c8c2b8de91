"""Command-line interface for battery telemetry analysis."""

import json
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from . import assistant
from .analysis import insights as insights_mod
from .analysis import summary
from .analysis.integration import find_ordering_violations, integrate
from .collectors import battery_api, demo
from .config import load_settings

console = Console()


@click.group()
@click.option("--config", "config_path", type=click.Path(exists=True), help="Path to battery.yaml")
@click.pass_context
def cli(ctx, config_path):
    """Battery telemetry analysis - energy throughput, cycles and health."""
    ctx.ensure_object(dict)
    try:
        ctx.obj["settings"] = load_settings(Path(config_path) if config_path else None)
    except ValueError as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        ctx.exit(1)


def _load_samples(ctx, year, fallback):
    """Fetch samples using the configured endpoint, reporting warnings."""
    settings = ctx.obj["settings"]
    year = year or settings.default_year

    samples, source = battery_api.fetch_samples(
        year=year,
        api_url=settings.api_url,
        timeout=settings.timeout,
        fallback=fallback,
    )
    if source == battery_api.SOURCE_DEMO:
        console.print("[yellow]Battery API unavailable, using demo data[/yellow]")

    _warn_ordering(samples)
    return samples, source


def _warn_ordering(samples):
    violations = find_ordering_violations(samples)
    if violations:
        console.print(
            f"[yellow]{len(violations)} sample(s) out of timestamp order "
            f"(first at index {violations[0]}); totals may be inaccurate[/yellow]"
        )


def _print_insights_table(result, title):
    table = Table(title=title)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")

    table.add_row("Average voltage", f"{result.average_voltage:.2f} V")
    table.add_row("Min voltage", f"{result.min_voltage:.2f} V")
    table.add_row("Max voltage", f"{result.max_voltage:.2f} V")
    table.add_row("Peak current", f"{result.peak_current_magnitude:.2f} A")
    table.add_row("Average SOC", f"{result.average_soc:.1f}%")
    table.add_row("Energy consumed", f"{result.total_energy_consumed_kwh:.3f} kWh")
    table.add_row("Energy generated", f"{result.total_energy_generated_kwh:.3f} kWh")
    table.add_row("Net energy", f"{result.net_energy_kwh:.3f} kWh")
    table.add_row("Efficiency ratio", f"{result.efficiency_percent:.1f}%")
    table.add_row("Charging cycles", str(result.charging_cycle_count))
    table.add_row("Health score", f"{insights_mod.health_score(result):.0f}/100")

    console.print(table)


@cli.command()
@click.option("--year", type=int, help="Year to fetch (default: all, or BATTERY_DEFAULT_YEAR)")
@click.option("--no-fallback", is_flag=True, help="Fail instead of using demo data")
@click.option("--limit", default=20, help="Number of samples to show (default: 20)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def fetch(ctx, year, no_fallback, limit, as_json):
    """Fetch samples and show integrated charge and energy."""
    try:
        samples, source = _load_samples(ctx, year, fallback=not no_fallback)
        processed = integrate(
            samples, min_delta_hours=ctx.obj["settings"].min_delta_hours
        )
    except (battery_api.BatteryApiError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        return

    shown = processed[:limit]

    if as_json:
        rows = [
            {
                "timestamp": p.timestamp.isoformat(),
                "voltage": p.voltage,
                "current": p.current,
                "soc": p.state_of_charge,
                "power": p.power,
                "cumulative_ah": round(p.cumulative_charge_ah, 3),
                "cumulative_kwh": round(p.cumulative_energy_kwh, 3),
            }
            for p in shown
        ]
        console.print(json.dumps(rows, indent=2))
        return

    table = Table(title=f"Battery Samples ({source}, {len(shown)} of {len(processed)})")
    table.add_column("Timestamp", style="cyan")
    table.add_column("Voltage", justify="right")
    table.add_column("Current", justify="right")
    table.add_column("SOC", justify="right")
    table.add_column("Power", justify="right")
    table.add_column("Cum. Ah", justify="right")
    table.add_column("Cum. kWh", justify="right")

    for p in shown:
        table.add_row(
            p.timestamp.strftime("%Y-%m-%d %H:%M"),
            f"{p.voltage:.2f} V",
            f"{p.current:.2f} A",
            f"{p.state_of_charge:.1f}%",
            f"{p.power:.1f} W",
            f"{p.cumulative_charge_ah:.2f}",
            f"{p.cumulative_energy_kwh:.3f}",
        )

    console.print(table)


@cli.command("summary")
@click.option("--year", type=int, help="Year to analyse (default: all, or BATTERY_DEFAULT_YEAR)")
@click.option("--no-fallback", is_flag=True, help="Fail instead of using demo data")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option("--text", "as_text", is_flag=True, help="Output as plain text")
@click.pass_context
def summary_cmd(ctx, year, no_fallback, as_json, as_text):
    """Summarise voltage, energy, cycles and health."""
    try:
        samples, source = _load_samples(ctx, year, fallback=not no_fallback)
    except (battery_api.BatteryApiError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        return

    _, result = insights_mod.analyze(samples, min_delta_hours=ctx.obj["settings"].min_delta_hours)

    if as_json:
        data = result.to_dict()
        data["health_score"] = insights_mod.health_score(result)
        data["source"] = source
        data["sample_count"] = len(samples)
        console.print(json.dumps(data, indent=2))
    elif as_text:
        console.print(summary.format_insights_text(result, source, len(samples)))
    else:
        _print_insights_table(result, f"Battery Insights ({source}, {len(samples)} samples)")


@cli.command()
@click.argument("question", required=False)
@click.option("--year", type=int, help="Year to analyse (default: all, or BATTERY_DEFAULT_YEAR)")
@click.pass_context
def ask(ctx, question, year):
    """Ask the battery assistant a question about the data."""
    if not question:
        console.print(assistant.GREETING)
        console.print(assistant.HELP_TEXT)
        return

    samples, _ = _load_samples(ctx, year, fallback=True)

    _, result = insights_mod.analyze(samples, min_delta_hours=ctx.obj["settings"].min_delta_hours)
    console.print(assistant.generate_response(question, result))


@cli.command("demo")
@click.option("--year", type=int, help="Year to generate (default: 2024)")
@click.option("--seed", type=int, help="Random seed for reproducible data")
@click.option("--days", default=365, help="Number of days to generate (default: 365)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def demo_cmd(year, seed, days, as_json):
    """Analyse generated demo data without touching the network."""
    samples = demo.generate_demo_samples(year=year, seed=seed, days=days)
    _, result = insights_mod.analyze(samples)

    if as_json:
        console.print(json.dumps(result.to_dict(), indent=2))
    else:
        _print_insights_table(result, f"Demo Battery Insights ({len(samples)} samples)")


if __name__ == "__main__":
    cli()

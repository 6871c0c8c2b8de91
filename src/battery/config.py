"""Settings loaded from config/battery.yaml and environment variables.

Environment variables (including those in a .env file) override the YAML
file, which overrides the built-in defaults.
"""

import os
from dataclasses import dataclass
from pathlib import Path

import yaml
from dotenv import load_dotenv

from .collectors.battery_api import DEFAULT_API_URL, DEFAULT_TIMEOUT


@dataclass
class Settings:
    """Runtime settings for fetching and analysing telemetry."""

    api_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT
    default_year: int | None = None
    min_delta_hours: float | None = None  # None = use time deltas as-is


def get_config_path() -> Path | None:
    """Find the battery.yaml config file, if any."""
    candidates = [
        Path.cwd() / "config" / "battery.yaml",
        Path.home() / ".config" / "battery-insights" / "battery.yaml",
    ]
    for path in candidates:
        if path.exists():
            return path
    return None


def _env_number(name: str, cast):
    value = os.environ.get(name)
    if value is None or value == "":
        return None
    try:
        return cast(value)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {value!r}") from None


def load_settings(config_path: Path | None = None) -> Settings:
    """Build Settings from defaults, the YAML file, then the environment."""
    load_dotenv()

    if config_path is None:
        config_path = get_config_path()

    data = {}
    if config_path is not None:
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

    settings = Settings(
        api_url=data.get("api_url", DEFAULT_API_URL),
        timeout=float(data.get("timeout", DEFAULT_TIMEOUT)),
        default_year=data.get("default_year"),
        min_delta_hours=data.get("min_delta_hours"),
    )

    api_url = os.environ.get("BATTERY_API_URL")
    if api_url:
        settings.api_url = api_url

    timeout = _env_number("BATTERY_API_TIMEOUT", float)
    if timeout is not None:
        settings.timeout = timeout

    year = _env_number("BATTERY_DEFAULT_YEAR", int)
    if year is not None:
        settings.default_year = year

    min_delta = _env_number("BATTERY_MIN_DELTA_HOURS", float)
    if min_delta is not None:
        settings.min_delta_hours = min_delta

    return settings

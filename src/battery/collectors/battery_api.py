"""Battery telemetry API collector.

Fetches raw battery samples from the telemetry REST endpoint and coerces the
loosely-typed JSON into RawSample objects.
"""

import math
from datetime import datetime, timezone
from typing import Any

import httpx

from ..models import RawSample
from .demo import generate_demo_samples

DEFAULT_API_URL = "https://batterydemoapi-521905205220.asia-south1.run.app/battery-data"
DEFAULT_TIMEOUT = 30.0

SOURCE_API = "api"
SOURCE_DEMO = "demo"


class BatteryApiError(Exception):
    """Base exception for battery API collector errors."""
    pass


def _to_float(value: Any) -> float:
    """Coerce to float, mapping missing or unparseable values to 0."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return 0.0 if math.isnan(number) else number


def _to_optional_float(value: Any) -> float | None:
    if not value:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return None if math.isnan(number) else number


def parse_timestamp(value: Any) -> datetime:
    """Parse a timestamp into an aware datetime.

    Accepts ISO-8601 strings (naive ones are taken as UTC) and epoch
    milliseconds. A missing value means now (UTC). Anything else raises
    ValueError.
    """
    if value is None or value == "":
        return datetime.now(timezone.utc)

    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value / 1000, timezone.utc)
        except (OverflowError, OSError) as e:
            raise ValueError(f"Epoch timestamp out of range: {value}") from e

    if not isinstance(value, str):
        raise ValueError(f"Unsupported timestamp: {value!r}")

    # fromisoformat only accepts a trailing Z from 3.11
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    timestamp = datetime.fromisoformat(value)
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    return timestamp


def parse_sample(item: dict[str, Any]) -> RawSample:
    """Convert one API record into a RawSample.

    Numeric fields that are absent or invalid become 0. Temperature and
    power become None when absent, so power falls back to voltage * current.
    """
    soc = item.get("soc")
    if soc is None:
        soc = item.get("stateOfCharge")

    return RawSample(
        timestamp=parse_timestamp(item.get("timestamp") or item.get("time")),
        voltage=_to_float(item.get("voltage")),
        current=_to_float(item.get("current")),
        state_of_charge=_to_float(soc),
        temperature=_to_optional_float(item.get("temperature")),
        power=_to_optional_float(item.get("power")),
    )


def fetch_raw(
    year: int | None = None,
    api_url: str = DEFAULT_API_URL,
    timeout: float = DEFAULT_TIMEOUT,
) -> list[dict[str, Any]]:
    """Fetch raw telemetry records from the API.

    Args:
        year: Restrict to a single calendar year
        api_url: Endpoint returning a JSON list of samples
        timeout: Request timeout in seconds

    Returns:
        List of raw JSON records
    """
    params = {"year": str(year)} if year else None

    try:
        response = httpx.get(api_url, params=params, timeout=timeout)
        response.raise_for_status()
        data = response.json()
    except httpx.HTTPStatusError as e:
        raise BatteryApiError(f"HTTP error from battery API: {e.response.status_code}") from e
    except httpx.HTTPError as e:
        raise BatteryApiError(f"Network error connecting to battery API: {e}") from e
    except ValueError as e:
        raise BatteryApiError(f"Invalid JSON from battery API: {e}") from e

    if not isinstance(data, list):
        raise BatteryApiError(f"Expected a list of samples, got {type(data).__name__}")

    return data


def fetch_samples(
    year: int | None = None,
    api_url: str = DEFAULT_API_URL,
    timeout: float = DEFAULT_TIMEOUT,
    fallback: bool = True,
) -> tuple[list[RawSample], str]:
    """Fetch and parse samples, falling back to demo data if the API fails.

    Records with an unparseable timestamp are skipped; the rest of the batch
    is kept.

    Returns:
        Tuple of (samples, source) where source is 'api' or 'demo'
    """
    try:
        records = fetch_raw(year=year, api_url=api_url, timeout=timeout)
    except BatteryApiError:
        if not fallback:
            raise
        return generate_demo_samples(year), SOURCE_DEMO

    samples = []
    for item in records:
        if not isinstance(item, dict):
            continue
        try:
            samples.append(parse_sample(item))
        except ValueError:
            # Skip records with invalid timestamps
            continue

    return samples, SOURCE_API

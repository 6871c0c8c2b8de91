"""Tests for the battery API collector."""

from datetime import datetime, timezone
from unittest.mock import patch

import httpx
import pytest
from battery.analysis.insights import analyze
from battery.collectors import battery_api


@pytest.fixture
def mock_get():
    with patch("httpx.get") as mock:
        yield mock


def make_response(payload, status_code=200):
    request = httpx.Request("GET", battery_api.DEFAULT_API_URL)
    return httpx.Response(status_code, json=payload, request=request)


def test_parse_sample_full_record():
    sample = battery_api.parse_sample({
        "timestamp": "2024-03-01T06:00:00Z",
        "voltage": "51.2",
        "current": -4.5,
        "soc": "72.5",
        "temperature": "28.1",
        "power": -230.4,
    })

    assert sample.timestamp == datetime(2024, 3, 1, 6, 0, tzinfo=timezone.utc)
    assert sample.voltage == 51.2
    assert sample.current == -4.5
    assert sample.state_of_charge == 72.5
    assert sample.temperature == 28.1
    assert sample.power == -230.4


def test_parse_sample_invalid_numbers_become_zero():
    sample = battery_api.parse_sample({
        "time": "2024-03-01T06:00:00+00:00",
        "voltage": "n/a",
        "current": None,
    })

    assert sample.timestamp == datetime(2024, 3, 1, 6, 0, tzinfo=timezone.utc)
    assert sample.voltage == 0.0
    assert sample.current == 0.0
    assert sample.state_of_charge == 0.0
    assert sample.temperature is None
    assert sample.power is None


def test_parse_sample_accepts_state_of_charge_key():
    sample = battery_api.parse_sample({"timestamp": "2024-01-01T00:00:00", "stateOfCharge": 64})
    assert sample.state_of_charge == 64.0


def test_parse_sample_missing_timestamp_defaults_to_now():
    before = datetime.now(timezone.utc)
    sample = battery_api.parse_sample({"voltage": 50})
    assert sample.timestamp >= before


def test_fetch_raw_passes_year(mock_get):
    mock_get.return_value = make_response([{"timestamp": "2022-01-01T00:00:00Z"}])

    records = battery_api.fetch_raw(year=2022, api_url="http://battery.local/data")

    assert len(records) == 1
    args, kwargs = mock_get.call_args
    assert args[0] == "http://battery.local/data"
    assert kwargs["params"] == {"year": "2022"}


def test_fetch_raw_http_error(mock_get):
    mock_get.return_value = make_response({"detail": "nope"}, status_code=500)

    with pytest.raises(battery_api.BatteryApiError, match="500"):
        battery_api.fetch_raw()


def test_fetch_raw_network_error(mock_get):
    mock_get.side_effect = httpx.ConnectError("connection refused")

    with pytest.raises(battery_api.BatteryApiError, match="Network error"):
        battery_api.fetch_raw()


def test_fetch_raw_rejects_non_list(mock_get):
    mock_get.return_value = make_response({"data": []})

    with pytest.raises(battery_api.BatteryApiError, match="Expected a list"):
        battery_api.fetch_raw()


def test_fetch_samples_from_api(mock_get):
    mock_get.return_value = make_response([
        {"timestamp": "2022-01-01T00:00:00Z", "voltage": 50, "current": 10, "soc": 80},
        {"timestamp": "2022-01-01T06:00:00Z", "voltage": 52, "current": -5, "soc": 90},
    ])

    samples, source = battery_api.fetch_samples(year=2022)

    assert source == battery_api.SOURCE_API
    assert [s.voltage for s in samples] == [50.0, 52.0]


def test_fetch_samples_falls_back_to_demo(mock_get):
    mock_get.side_effect = httpx.ConnectError("connection refused")

    samples, source = battery_api.fetch_samples(year=2023)

    assert source == battery_api.SOURCE_DEMO
    assert len(samples) == 365 * 4
    assert samples[0].timestamp == datetime(2023, 1, 1, tzinfo=timezone.utc)


def test_fetch_samples_without_fallback_raises(mock_get):
    mock_get.side_effect = httpx.ConnectError("connection refused")

    with pytest.raises(battery_api.BatteryApiError):
        battery_api.fetch_samples(fallback=False)


def test_naive_and_missing_timestamps_are_comparable():
    """Naive timestamps are taken as UTC, so they mix with defaulted ones."""
    samples = [
        battery_api.parse_sample({"timestamp": "2024-01-01T00:00:00", "voltage": 50, "current": 10}),
        battery_api.parse_sample({"voltage": 50, "current": -10}),
    ]

    assert samples[0].timestamp == datetime(2024, 1, 1, tzinfo=timezone.utc)

    processed, summary = analyze(samples)
    assert len(processed) == 2
    assert summary.peak_current_magnitude == 10.0


def test_parse_timestamp_epoch_milliseconds():
    assert battery_api.parse_timestamp(1704067200000) == datetime(2024, 1, 1, tzinfo=timezone.utc)


def test_parse_timestamp_rejects_unsupported_types():
    with pytest.raises(ValueError):
        battery_api.parse_timestamp(["2024-01-01"])


def test_fetch_samples_skips_bad_timestamps(mock_get):
    """One bad record does not replace the batch with demo data."""
    mock_get.return_value = make_response([
        {"timestamp": "2022-01-01T00:00:00Z", "voltage": 50, "current": 10, "soc": 80},
        {"timestamp": "garbage", "voltage": 51, "current": 5, "soc": 70},
        {"timestamp": {"nested": True}, "voltage": 52, "current": 5, "soc": 70},
        {"timestamp": "2022-01-01T06:00:00Z", "voltage": 53, "current": -5, "soc": 90},
    ])

    samples, source = battery_api.fetch_samples()

    assert source == battery_api.SOURCE_API
    assert [s.voltage for s in samples] == [50.0, 53.0]


def test_fetch_samples_epoch_timestamps(mock_get):
    mock_get.return_value = make_response([
        {"timestamp": 1704067200000, "voltage": 50, "current": 10, "soc": 80},
        {"timestamp": 1704070800000, "voltage": 50, "current": 10, "soc": 70},
    ])

    samples, source = battery_api.fetch_samples()

    assert source == battery_api.SOURCE_API
    processed, _ = analyze(samples)
    assert processed[1].incremental_charge_ah == pytest.approx(10.0)

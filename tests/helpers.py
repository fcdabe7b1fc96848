# ABOUTME: Shared payloads and mock HTTP client helpers for the dashboard tests.
# ABOUTME: Imported directly by test modules; fixtures wrapping them live in conftest.py.

from unittest.mock import AsyncMock

import httpx

LONDON_HOURLY = {
    "latitude": 51.5,
    "longitude": -0.12,
    "timezone": "Europe/London",
    "hourly": {
        "time": ["2024-01-01T00:00", "2024-01-01T01:00"],
        "temperature_2m": [5.0, 6.0],
    },
}

THREE_DAY_DAILY = {
    "latitude": 51.5,
    "longitude": -0.12,
    "timezone": "Europe/London",
    "daily": {
        "time": ["2024-01-01", "2024-01-02", "2024-01-03"],
        "temperature_2m_max": [4.0, 5.0, 6.0],
        "temperature_2m_min": [-2.0, -1.0, 0.0],
        "temperature_2m_mean": [1.0, 2.0, 3.0],
    },
}


def mock_client(json_data=None, status_code: int = 200, content: bytes | None = None) -> httpx.AsyncClient:
    """Create a mock httpx.AsyncClient whose get() returns the given response."""
    mock = AsyncMock(spec=httpx.AsyncClient)
    request = httpx.Request("GET", "https://test")
    if content is not None:
        response = httpx.Response(status_code=status_code, content=content, request=request)
    else:
        response = httpx.Response(status_code=status_code, json=json_data, request=request)
    mock.get.return_value = response
    return mock


# ABOUTME: Service layer for Open-Meteo API calls and response parsing.
# ABOUTME: Builds the forecast request for a query, fetches it and maps failures to typed errors.

import logging
from enum import Enum

import httpx

from src.config import FORECAST_URL
from src.models import DailyBlock, HourlyBlock, QueryParams, RequestSpec, WeatherResponse

logger = logging.getLogger(__name__)

HOURLY_PARAMS = "temperature_2m"
DAILY_PARAMS = "temperature_2m_max,temperature_2m_min,temperature_2m_mean"

FETCH_ERROR_MESSAGE = "Failed to fetch data. Please check your inputs."


class FetchErrorKind(str, Enum):
    NETWORK = "network"
    TIMEOUT = "timeout"
    BAD_STATUS = "bad_status"
    BAD_SHAPE = "bad_shape"


class WeatherFetchError(Exception):
    """A failed forecast fetch.

    The message shown to users is always FETCH_ERROR_MESSAGE; `kind` and `status_code`
    keep the underlying cause for logs and diagnostics.
    """

    def __init__(self, kind: FetchErrorKind, status_code: int | None = None, detail: str = ""):
        super().__init__(FETCH_ERROR_MESSAGE)
        self.kind = kind
        self.status_code = status_code
        self.detail = detail

    @property
    def user_message(self) -> str:
        return FETCH_ERROR_MESSAGE


def build_request(params: QueryParams, base_url: str = FORECAST_URL) -> RequestSpec:
    """Map a validated query to Open-Meteo forecast parameters.

    Single-day queries ask for hourly temperature, longer ranges for daily max/min/mean.
    """
    query: dict[str, str | float] = {
        "latitude": params.latitude,
        "longitude": params.longitude,
        "start_date": params.start_date.isoformat(),
        "end_date": params.end_date.isoformat(),
        "timezone": "auto",
    }
    if params.mode == "hourly":
        query["hourly"] = HOURLY_PARAMS
    else:
        query["daily"] = DAILY_PARAMS
    return RequestSpec(url=base_url, params=query)


async def fetch_weather(client: httpx.AsyncClient, spec: RequestSpec) -> WeatherResponse:
    """Perform one GET against Open-Meteo and parse the result.

    Raises:
        WeatherFetchError: on transport failure, timeout, non-2xx status or an unusable body.
    """
    try:
        resp = await client.get(spec.url, params=spec.params)
        resp.raise_for_status()
    except httpx.TimeoutException as e:
        raise WeatherFetchError(FetchErrorKind.TIMEOUT, detail=str(e)) from e
    except httpx.HTTPStatusError as e:
        raise WeatherFetchError(FetchErrorKind.BAD_STATUS, status_code=e.response.status_code, detail=str(e)) from e
    except httpx.HTTPError as e:
        raise WeatherFetchError(FetchErrorKind.NETWORK, detail=str(e)) from e

    try:
        data = resp.json()
    except ValueError as e:
        raise WeatherFetchError(FetchErrorKind.BAD_SHAPE, status_code=resp.status_code, detail=str(e)) from e
    if not isinstance(data, dict):
        raise WeatherFetchError(
            FetchErrorKind.BAD_SHAPE, status_code=resp.status_code, detail=f"expected a JSON object, got {type(data).__name__}"
        )

    try:
        return parse_weather_response(data)
    except ValueError as e:
        raise WeatherFetchError(FetchErrorKind.BAD_SHAPE, status_code=resp.status_code, detail=str(e)) from e


def parse_weather_response(data: dict) -> WeatherResponse:
    """Parse an Open-Meteo JSON object into a WeatherResponse.

    A block that is missing any of its columns or has no timestamps is dropped, so a payload
    without usable data parses to an empty response. Mismatched column lengths raise ValueError.
    """
    hourly = parse_hourly_block(data.get("hourly"))
    daily = None if hourly is not None else parse_daily_block(data.get("daily"))
    if hourly is None and daily is None:
        logger.info("Open-Meteo response carried no hourly or daily temperature data")
    return WeatherResponse(
        latitude=data.get("latitude"),
        longitude=data.get("longitude"),
        timezone=data.get("timezone"),
        hourly=hourly,
        daily=daily,
    )


def parse_hourly_block(raw) -> HourlyBlock | None:
    """Parse the `hourly` object, or return None if it is absent or incomplete."""
    if not isinstance(raw, dict) or not raw.get("time") or raw.get("temperature_2m") is None:
        return None
    return HourlyBlock(time=raw["time"], temperature_2m=raw["temperature_2m"])


def parse_daily_block(raw) -> DailyBlock | None:
    """Parse the `daily` object, or return None if it is absent or incomplete."""
    columns = ("temperature_2m_max", "temperature_2m_min", "temperature_2m_mean")
    if not isinstance(raw, dict) or not raw.get("time") or any(raw.get(c) is None for c in columns):
        return None
    return DailyBlock(time=raw["time"], **{c: raw[c] for c in columns})

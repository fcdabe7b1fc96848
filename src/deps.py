# ABOUTME: Dependency container for the dashboard controller using Pydantic BaseModel.
# ABOUTME: Holds the httpx.AsyncClient and settings used to call the Open-Meteo API.

import httpx
from pydantic import BaseModel, ConfigDict
from pydantic_ai.retries import AsyncTenacityTransport, RetryConfig, wait_retry_after
from tenacity import retry_if_exception_type, stop_after_attempt

from src.config import Settings


class WeatherDeps(BaseModel):
    """Dependencies injected into each dashboard controller."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    http_client: httpx.AsyncClient
    settings: Settings = Settings()


def create_http_client(settings: Settings) -> httpx.AsyncClient:
    """Create an httpx client bounded by the configured timeout.

    Non-2xx responses are raised as httpx.HTTPStatusError by the transport. Connection errors,
    read timeouts and bad statuses are retried only when fetch_attempts is above 1.
    """
    transport = AsyncTenacityTransport(
        RetryConfig(
            retry=retry_if_exception_type((httpx.ConnectError, httpx.ReadTimeout, httpx.HTTPStatusError)),
            wait=wait_retry_after(max_wait=30),
            stop=stop_after_attempt(max(settings.fetch_attempts, 1)),
            reraise=True,
        ),
        validate_response=lambda r: r.raise_for_status(),
    )
    return httpx.AsyncClient(transport=transport, timeout=settings.timeout)

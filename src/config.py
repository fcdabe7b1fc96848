# ABOUTME: Runtime settings for the weather dashboard, read from the environment.
# ABOUTME: Loads a .env file with python-dotenv and collects values into a pydantic model.

import os

from dotenv import load_dotenv
from pydantic import BaseModel

FORECAST_URL = "https://api.open-meteo.com/v1/forecast"

_ENV_PREFIX = "WEATHER_DASHBOARD_"


class Settings(BaseModel):
    """Dashboard settings. Every field can be overridden with WEATHER_DASHBOARD_<NAME>."""

    forecast_url: str = FORECAST_URL
    timeout: float = 10.0
    fetch_attempts: int = 1
    max_sessions: int = 1000
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from os.environ after loading a local .env file."""
        load_dotenv()
        overrides = {}
        for name in cls.model_fields:
            value = os.environ.get(f"{_ENV_PREFIX}{name.upper()}")
            if value is not None:
                overrides[name] = value
        return cls(**overrides)

# ABOUTME: Pydantic BaseModels for dashboard queries, Open-Meteo responses and derived rows.
# ABOUTME: Defines the structured types shared by validation, fetching, charting and the table.

from datetime import date, datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, field_validator, model_validator

Mode = Literal["hourly", "daily"]


class Theme(str, Enum):
    """Presentation theme, passed explicitly to every renderer."""

    DARK = "dark"
    LIGHT = "light"

    def toggled(self) -> "Theme":
        return Theme.LIGHT if self is Theme.DARK else Theme.DARK


class QueryParams(BaseModel):
    """Validated user input for one weather lookup."""

    latitude: float
    longitude: float
    start_date: date
    end_date: date

    @property
    def mode(self) -> Mode:
        """Single-day ranges are fetched hourly, longer ranges daily."""
        return "hourly" if self.start_date == self.end_date else "daily"


class RequestSpec(BaseModel):
    """Upstream GET request: endpoint plus query parameters."""

    url: str
    params: dict[str, str | float]


class HourlyBlock(BaseModel):
    """Column-oriented hourly data from the Open-Meteo `hourly` object."""

    time: list[datetime]
    temperature_2m: list[float | None]

    @field_validator("time", mode="before")
    @classmethod
    def _parse_times(cls, value):
        if not isinstance(value, list):
            return value
        return [datetime.fromisoformat(t) if isinstance(t, str) else t for t in value]

    @model_validator(mode="after")
    def _check_lengths(self) -> "HourlyBlock":
        if len(self.temperature_2m) != len(self.time):
            raise ValueError(
                f"hourly.temperature_2m has {len(self.temperature_2m)} values for {len(self.time)} timestamps"
            )
        return self


class DailyBlock(BaseModel):
    """Column-oriented daily data from the Open-Meteo `daily` object."""

    time: list[date]
    temperature_2m_max: list[float | None]
    temperature_2m_min: list[float | None]
    temperature_2m_mean: list[float | None]

    @field_validator("time", mode="before")
    @classmethod
    def _parse_dates(cls, value):
        if not isinstance(value, list):
            return value
        return [date.fromisoformat(d) if isinstance(d, str) else d for d in value]

    @model_validator(mode="after")
    def _check_lengths(self) -> "DailyBlock":
        for name in ("temperature_2m_max", "temperature_2m_min", "temperature_2m_mean"):
            column = getattr(self, name)
            if len(column) != len(self.time):
                raise ValueError(f"daily.{name} has {len(column)} values for {len(self.time)} dates")
        return self


class WeatherResponse(BaseModel):
    """Parsed Open-Meteo response. At most one of `hourly` or `daily` is set."""

    latitude: float | None = None
    longitude: float | None = None
    timezone: str | None = None
    hourly: HourlyBlock | None = None
    daily: DailyBlock | None = None

    @property
    def mode(self) -> Mode | None:
        if self.hourly is not None:
            return "hourly"
        if self.daily is not None:
            return "daily"
        return None

    @property
    def has_data(self) -> bool:
        return self.mode is not None


class SeriesRow(BaseModel):
    """One point of the flat temperature series shared by chart and table."""

    time: datetime
    label: str
    max: float | None = None
    min: float | None = None
    mean: float | None = None


class ValidationResult(BaseModel):
    """Outcome of validating the lookup form. Errors are keyed by field."""

    errors: dict[str, str] = {}
    params: QueryParams | None = None

    @property
    def ok(self) -> bool:
        return not self.errors

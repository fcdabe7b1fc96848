# ABOUTME: Per-session dashboard controller owning form input, fetch state and view options.
# ABOUTME: Validates submissions, runs one fetch at a time and supersedes stale requests.

import asyncio
import logging
from datetime import date

from src.chart import DEFAULT_SERIES
from src.deps import WeatherDeps
from src.models import SeriesRow, Theme, WeatherResponse
from src.pagination import DEFAULT_PAGE_SIZE, PAGE_SIZE_CHOICES
from src.series import SERIES, to_series
from src.validation import validate
from src.weather_service import WeatherFetchError, build_request, fetch_weather

logger = logging.getLogger(__name__)


class DashboardController:
    """State of one dashboard view: inputs, errors, the last response and display options."""

    def __init__(self, deps: WeatherDeps, today=date.today):
        self.deps = deps
        self._today = today

        self.form: dict[str, str] = {"latitude": "", "longitude": "", "start_date": "", "end_date": ""}
        self.errors: dict[str, str] = {}
        self.fetch_error: WeatherFetchError | None = None
        self.response: WeatherResponse | None = None
        self.loading = False

        self.theme = Theme.DARK
        self.series = DEFAULT_SERIES
        self.page = 1
        self.page_size = DEFAULT_PAGE_SIZE

        self._inflight: asyncio.Task | None = None

    @property
    def rows(self) -> list[SeriesRow]:
        return to_series(self.response)

    async def submit(self, latitude: str, longitude: str, start_date: str, end_date: str) -> bool:
        """Validate the inputs and, if they pass, fetch weather data for them.

        A submission made while an earlier fetch is still running cancels that fetch.
        Returns True when a new response was stored.
        """
        self.form = {"latitude": latitude, "longitude": longitude, "start_date": start_date, "end_date": end_date}
        self.errors = {}
        self.fetch_error = None

        if self._inflight is not None and not self._inflight.done():
            logger.debug("Cancelling superseded fetch")
            self._inflight.cancel()
        self._inflight = None
        self.loading = False

        result = validate(latitude, longitude, start_date, end_date, today=self._today())
        if not result.ok:
            self.errors = result.errors
            return False

        spec = build_request(result.params, base_url=self.deps.settings.forecast_url)
        task = asyncio.ensure_future(fetch_weather(self.deps.http_client, spec))
        self._inflight = task
        self.loading = True
        logger.info(
            "Fetching %s weather for %.4f,%.4f from %s to %s",
            result.params.mode,
            result.params.latitude,
            result.params.longitude,
            result.params.start_date,
            result.params.end_date,
        )
        try:
            response = await task
        except asyncio.CancelledError:
            if task.cancelled() and self._inflight is not task:
                logger.debug("Fetch superseded by a newer submission")
                return False
            raise
        except WeatherFetchError as e:
            logger.warning("Weather fetch failed: kind=%s status=%s %s", e.kind.value, e.status_code, e.detail)
            self.fetch_error = e
            return False
        finally:
            if self._inflight is task:
                self._inflight = None
                self.loading = False

        self.response = response
        self.page = 1
        logger.info("Fetched %d rows", len(self.rows))
        return True

    def toggle_theme(self) -> Theme:
        self.theme = self.theme.toggled()
        return self.theme

    def select_series(self, series: str) -> bool:
        if series not in SERIES:
            return False
        self.series = series
        return True

    def go_to_page(self, page: int) -> None:
        """Move to `page`; the paginator clamps it when rendering."""
        self.page = max(page, 1)

    def set_page_size(self, page_size: int) -> bool:
        """Change rows per page and return to the first page. Unknown sizes are ignored."""
        if page_size not in PAGE_SIZE_CHOICES:
            return False
        self.page_size = page_size
        self.page = 1
        return True

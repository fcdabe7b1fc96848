# ABOUTME: Derives the flat temperature series shared by the chart and the table.
# ABOUTME: Zips Open-Meteo hourly or daily columns into rows and computes per-series averages.

from datetime import datetime

from src.models import SeriesRow, WeatherResponse

SERIES = ("max", "min", "mean")


def to_series(response: WeatherResponse | None) -> list[SeriesRow]:
    """Convert a parsed response into one row per timestamp.

    Hourly data has a single temperature, which fills max, min and mean alike.
    Returns an empty list when the response carries neither block.
    """
    if response is None:
        return []

    if response.hourly is not None:
        hourly = response.hourly
        return [
            SeriesRow(time=t, label=t.strftime("%H:%M"), max=temp, min=temp, mean=temp)
            for t, temp in zip(hourly.time, hourly.temperature_2m, strict=True)
        ]

    if response.daily is not None:
        daily = response.daily
        return [
            SeriesRow(
                time=datetime.combine(d, datetime.min.time()),
                label=d.strftime("%b %d"),
                max=hi,
                min=lo,
                mean=avg,
            )
            for d, hi, lo, avg in zip(
                daily.time,
                daily.temperature_2m_max,
                daily.temperature_2m_min,
                daily.temperature_2m_mean,
                strict=True,
            )
        ]

    return []


def compute_averages(rows: list[SeriesRow]) -> dict[str, float | None]:
    """Mean of each series across rows, rounded to one decimal.

    Missing values are skipped. Returns {} for no rows.
    """
    if not rows:
        return {}
    averages: dict[str, float | None] = {}
    for name in SERIES:
        values = [v for v in (getattr(row, name) for row in rows) if v is not None]
        averages[name] = round(sum(values) / len(values), 1) if values else None
    return averages

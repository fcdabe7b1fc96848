# ABOUTME: Altair line chart for the selected temperature series.
# ABOUTME: Turns series rows into a Vega-Lite spec that the dashboard page embeds.

import altair as alt

from src.models import Mode, SeriesRow, Theme
from src.series import SERIES

SERIES_CONFIG = {
    "max": {"label": "Max Temperature", "color": "#ef4444"},
    "min": {"label": "Min Temperature", "color": "#3b82f6"},
    "mean": {"label": "Mean Temperature", "color": "#10b981"},
}

DEFAULT_SERIES = "mean"

# d3 time formats matching the row labels produced by to_series.
_AXIS_FORMATS = {"hourly": "%H:%M", "daily": "%b %d"}


def chart_title(mode: Mode) -> str:
    return "Hourly Temperature" if mode == "hourly" else "Daily Temperature"


def chart_description(mode: Mode, count: int) -> str:
    if mode == "hourly":
        return "Hourly temperature data for the selected day"
    return f"Daily temperature data for {count} days"


def build_chart(rows: list[SeriesRow], series: str, mode: Mode) -> alt.Chart:
    """Line chart of one series (max, min or mean) against time.

    Raises:
        ValueError: if `series` is not one of max, min, mean.
    """
    if series not in SERIES:
        raise ValueError(f"Unknown series {series!r}, expected one of {', '.join(SERIES)}")
    config = SERIES_CONFIG[series]
    values = [
        {"time": row.time.isoformat(), "label": row.label, series: getattr(row, series)}
        for row in rows
    ]
    return (
        alt.Chart(alt.Data(values=values))
        .mark_line(color=config["color"], strokeWidth=2, point=alt.OverlayMarkDef(color=config["color"], size=40))
        .encode(
            x=alt.X("time:T", title=None, axis=alt.Axis(format=_AXIS_FORMATS[mode], labelFontSize=12)),
            y=alt.Y(f"{series}:Q", title="°C", axis=alt.Axis(labelFontSize=12)),
            tooltip=[alt.Tooltip("label:N", title="Time"), alt.Tooltip(f"{series}:Q", title=config["label"], format=".1f")],
        )
        .properties(width="container", height=300)
    )


def chart_spec(rows: list[SeriesRow], series: str, mode: Mode, theme: Theme) -> dict:
    """Vega-Lite spec dict for embedding, styled for the given theme."""
    chart = build_chart(rows, series, mode)
    if theme is Theme.DARK:
        chart = chart.configure(background="#111827").configure_axis(
            labelColor="#e5e7eb", titleColor="#e5e7eb", gridColor="#374151", gridOpacity=0.3
        ).configure_view(stroke=None)
    else:
        chart = chart.configure_axis(gridOpacity=0.3).configure_view(stroke=None)
    return chart.to_dict()

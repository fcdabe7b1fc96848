# ABOUTME: HTML rendering for the dashboard page: form, chart card and paginated table.
# ABOUTME: Pure functions of controller state; the theme is passed in explicitly rather than read globally.

import json
from datetime import date
from html import escape
from urllib.parse import urlencode

from src.chart import SERIES_CONFIG, chart_description, chart_spec, chart_title
from src.models import Mode, SeriesRow, Theme
from src.pagination import PAGE_SIZE_CHOICES, Page, page_window, paginate
from src.series import compute_averages

NO_DATA_MESSAGE = "No weather data available"

_VEGA_SCRIPTS = (
    "https://cdn.jsdelivr.net/npm/vega@5",
    "https://cdn.jsdelivr.net/npm/vega-lite@5",
    "https://cdn.jsdelivr.net/npm/vega-embed@6",
)

_STYLES = """
body { font-family: system-ui, sans-serif; margin: 0; padding: 1rem; }
body.dark { background: #111827; color: #f9fafb; }
body.light { background: #ffffff; color: #111827; }
.header { display: flex; justify-content: space-between; align-items: center; }
.form { display: flex; flex-wrap: wrap; gap: 1rem; margin: 1rem 0; }
.field { display: flex; flex-direction: column; }
.field input { width: 150px; padding: 0.4rem; }
body.dark .field input { background: #374151; color: #ffffff; border: 1px solid #4b5563; }
.error { color: #ef4444; font-size: 0.875rem; margin-top: 0.25rem; }
.card { border: 1px solid #6b7280; border-radius: 0.5rem; padding: 1rem; margin-bottom: 1.5rem; }
.card-header { display: flex; justify-content: space-between; align-items: center; gap: 1rem; }
.selector { display: flex; gap: 0.5rem; }
.selector a { display: flex; flex-direction: column; padding: 0.75rem; border: 1px solid #6b7280;
  border-radius: 0.375rem; text-decoration: none; color: inherit; }
.selector a.active { background: #374151; color: #ffffff; }
.selector .badge { font-size: 1.125rem; font-weight: bold; }
.skeleton { height: 8rem; width: 100%; border-radius: 0.375rem; background: #6b7280; opacity: 0.3; }
table { width: 100%; border-collapse: collapse; }
th, td { text-align: left; padding: 0.5rem; border-bottom: 1px solid #6b7280; }
.placeholder { border: 1px solid #6b7280; border-radius: 0.375rem; padding: 1rem; text-align: center; }
.table-footer { display: flex; justify-content: space-between; align-items: center; padding: 1rem; }
.pagination { display: flex; gap: 0.25rem; align-items: center; list-style: none; margin: 0; padding: 0; }
.pagination a, .pagination span { padding: 0.25rem 0.6rem; color: inherit; }
.pagination a.active { border: 1px solid #6b7280; border-radius: 0.25rem; }
.pagination .disabled { pointer-events: none; opacity: 0.5; }
"""


def format_temperature(value: float | None) -> str:
    if value is None:
        return "N/A"
    return f"{value:.1f}"


def format_average(value: float | None) -> str:
    return "N/A" if value is None else f"{value:.1f}°C"


def table_label(row: SeriesRow, mode: Mode) -> str:
    """Hourly rows show the clock time, daily rows the full date."""
    if mode == "hourly":
        return row.label
    return row.time.strftime("%b %d, %Y")


def _query(**params) -> str:
    return "/?" + urlencode(params)


def render_form(form: dict[str, str], errors: dict[str, str], loading: bool, today: date) -> str:
    def field_error(name: str) -> str:
        if name not in errors:
            return ""
        return f'<p class="error">{escape(errors[name])}</p>'

    busy = '<span class="spinner" aria-hidden="true">&#8987;</span> ' if loading else ""
    return f"""
<form class="form" method="post" action="/fetch">
  <div class="field">
    <input type="text" name="latitude" placeholder="Latitude" value="{escape(form.get("latitude", ""))}">
    {field_error("latitude")}
  </div>
  <div class="field">
    <input type="text" name="longitude" placeholder="Longitude" value="{escape(form.get("longitude", ""))}">
    {field_error("longitude")}
  </div>
  <div class="field">
    <input type="date" name="start_date" aria-label="Start Date" max="{today.isoformat()}"
           value="{escape(form.get("start_date", ""))}">
  </div>
  <div class="field">
    <input type="date" name="end_date" aria-label="End Date" max="{today.isoformat()}"
           value="{escape(form.get("end_date", ""))}">
  </div>
  <div>
    <button type="submit"{' aria-busy="true"' if loading else ""}>{busy}<span>Fetch Weather</span></button>
  </div>
</form>
{field_error("dates")}"""


def render_chart_section(rows: list[SeriesRow], mode: Mode | None, series: str, theme: Theme, loading: bool) -> str:
    """Chart card with series selector and average badges; empty string when there is no data."""
    if mode is None or not rows:
        return ""
    if loading:
        return '<div class="skeleton"></div>'

    averages = compute_averages(rows)
    buttons = []
    for key, config in SERIES_CONFIG.items():
        css = "active" if key == series else ""
        buttons.append(
            f'<a class="{css}" href="{escape(_query(series=key))}" data-series="{key}">'
            f'<span class="label">{escape(config["label"])}</span>'
            f'<span class="badge">{format_average(averages.get(key))}</span></a>'
        )

    spec = json.dumps(chart_spec(rows, series, mode, theme)).replace("</", "<\\/")
    return f"""
<div class="card chart">
  <div class="card-header">
    <div>
      <h2>{chart_title(mode)}</h2>
      <p class="description">{escape(chart_description(mode, len(rows)))}</p>
    </div>
    <div class="selector">{"".join(buttons)}</div>
  </div>
  <div id="chart" style="width: 100%; height: 300px;"></div>
  <script type="application/json" id="chart-spec">{spec}</script>
  <script>
    vegaEmbed("#chart", JSON.parse(document.getElementById("chart-spec").textContent), {{actions: false}});
  </script>
</div>"""


def render_pagination(current: Page) -> str:
    """Prev/next and numbered page links; nothing for a single page."""
    page, pages = current.page, current.total_pages
    if pages <= 1:
        return ""
    items = []
    prev_css = "" if current.has_previous else "disabled"
    items.append(f'<li><a class="{prev_css}" href="{escape(_query(page=max(1, page - 1)))}">Previous</a></li>')
    for number in page_window(page, pages):
        if number is None:
            items.append('<li><span class="ellipsis">&hellip;</span></li>')
        else:
            css = "active" if number == page else ""
            items.append(f'<li><a class="{css}" href="{escape(_query(page=number))}">{number}</a></li>')
    next_css = "" if current.has_next else "disabled"
    items.append(f'<li><a class="{next_css}" href="{escape(_query(page=min(pages, page + 1)))}">Next</a></li>')
    return f'<ul class="pagination">{"".join(items)}</ul>'


def render_page_size_control(page_size: int) -> str:
    options = "".join(
        f'<option value="{n}"{" selected" if n == page_size else ""}>{n}</option>' for n in PAGE_SIZE_CHOICES
    )
    return f"""<form class="page-size" method="get" action="/">
  <label>Rows per page:
    <select name="page_size" onchange="this.form.submit()">{options}</select>
  </label>
  <noscript><button type="submit">Apply</button></noscript>
</form>"""


def render_table_section(rows: list[SeriesRow], mode: Mode | None, page: int, page_size: int, loading: bool) -> str:
    """Paginated data table, or a placeholder when the response holds no data."""
    if mode is None:
        return f'<div class="placeholder">{NO_DATA_MESSAGE}</div>'
    if loading:
        return '<div class="skeleton"></div>'

    current = paginate(rows, page, page_size)
    if mode == "hourly":
        header = "<th>Time</th><th>Temperature (°C)</th>"
    else:
        header = (
            "<th>Date</th><th>Max Temperature (°C)</th><th>Min Temperature (°C)</th><th>Mean Temperature (°C)</th>"
        )

    body = []
    for row in current.rows:
        if mode == "hourly":
            cells = [table_label(row, mode), format_temperature(row.mean)]
        else:
            cells = [table_label(row, mode), format_temperature(row.max), format_temperature(row.min),
                     format_temperature(row.mean)]
        body.append("<tr>" + "".join(f"<td>{escape(c)}</td>" for c in cells) + "</tr>")

    footer = ""
    if rows:
        footer = f"""
  <div class="table-footer">
    <div class="page-info">Page {current.page} of {current.total_pages}</div>
    {render_pagination(current)}
    {render_page_size_control(page_size)}
  </div>"""

    return f"""
<div class="card table">
  <table>
    <thead><tr>{header}</tr></thead>
    <tbody>{"".join(body)}</tbody>
  </table>{footer}
</div>"""


def render_page(controller, today: date) -> str:
    """Full dashboard HTML for one controller's current state."""
    theme = controller.theme
    toggle_label = "Switch to Light Mode" if theme is Theme.DARK else "Switch to Dark Mode"
    scripts = "".join(f'<script src="{src}"></script>' for src in _VEGA_SCRIPTS)

    results = ""
    if controller.fetch_error is not None:
        results += f'<p class="error fetch-error">{escape(controller.fetch_error.user_message)}</p>'
    if controller.response is not None:
        rows = controller.rows
        mode = controller.response.mode
        results += render_chart_section(rows, mode, controller.series, theme, controller.loading)
        results += render_table_section(rows, mode, controller.page, controller.page_size, controller.loading)

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>Weather Dashboard</title>
<style>{_STYLES}</style>
{scripts}
</head>
<body class="{theme.value}">
<div class="header">
  <h1>Weather Dashboard</h1>
  <form method="post" action="/theme"><button type="submit">{toggle_label}</button></form>
</div>
{render_form(controller.form, controller.errors, controller.loading, today)}
{results}
</body>
</html>"""

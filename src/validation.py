# ABOUTME: Form validation for the dashboard lookup inputs.
# ABOUTME: Collects field-scoped errors for coordinates and the date range without short-circuiting.

import math
from datetime import date, datetime

from src.models import QueryParams, ValidationResult

LATITUDE_ERROR = "Latitude must be a number between -90 and 90."
LONGITUDE_ERROR = "Longitude must be a number between -180 and 180."
DATES_REQUIRED_ERROR = "Both start and end dates are required."
DATES_FORMAT_ERROR = "Dates must use the YYYY-MM-DD format."
DATES_FUTURE_ERROR = "Dates cannot be in the future."
DATES_ORDER_ERROR = "Start date must be before or equal to end date."


def parse_coordinate(value, lower: float, upper: float) -> float | None:
    """Parse a coordinate and check it is finite and inside [lower, upper].

    Returns None for empty, non-numeric, non-finite or out-of-range input.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number) or not lower <= number <= upper:
        return None
    return number


def parse_date(value) -> date | None:
    """Parse a YYYY-MM-DD string. Raises ValueError for malformed text; empty input is None."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise TypeError(f"expected a date or YYYY-MM-DD string, got {type(value).__name__}")
    value = value.strip()
    if not value:
        return None
    return date.fromisoformat(value)


def validate(latitude, longitude, start_date, end_date, today: date | None = None) -> ValidationResult:
    """Validate raw lookup inputs, reporting every failing field at once.

    Args:
        latitude: Latitude as typed by the user, or a number.
        longitude: Longitude as typed by the user, or a number.
        start_date: Start of the range as YYYY-MM-DD text or a date.
        end_date: End of the range as YYYY-MM-DD text or a date.
        today: Reference date for the "no future dates" rule. Defaults to date.today().
    """
    today = today or date.today()
    errors: dict[str, str] = {}

    lat = parse_coordinate(latitude, -90.0, 90.0)
    if lat is None:
        errors["latitude"] = LATITUDE_ERROR

    lon = parse_coordinate(longitude, -180.0, 180.0)
    if lon is None:
        errors["longitude"] = LONGITUDE_ERROR

    start = end = None
    try:
        start = parse_date(start_date)
        end = parse_date(end_date)
    except (TypeError, ValueError):
        errors["dates"] = DATES_FORMAT_ERROR
    else:
        if start is None or end is None:
            errors["dates"] = DATES_REQUIRED_ERROR
        elif start > today or end > today:
            errors["dates"] = DATES_FUTURE_ERROR
        elif start > end:
            errors["dates"] = DATES_ORDER_ERROR

    if errors:
        return ValidationResult(errors=errors)
    return ValidationResult(params=QueryParams(latitude=lat, longitude=lon, start_date=start, end_date=end))

# ABOUTME: Contract tests for lookup form validation.
# ABOUTME: Covers coordinate ranges, date rules and simultaneous field-scoped errors.

from datetime import date

import pytest

from src.validation import (
    DATES_FORMAT_ERROR,
    DATES_FUTURE_ERROR,
    DATES_ORDER_ERROR,
    DATES_REQUIRED_ERROR,
    LATITUDE_ERROR,
    LONGITUDE_ERROR,
    validate,
)

TODAY = date(2024, 6, 1)


def _validate(latitude="51.5", longitude="-0.12", start="2024-01-01", end="2024-01-03"):
    return validate(latitude, longitude, start, end, today=TODAY)


class TestCoordinates:
    @pytest.mark.parametrize("value", ["-90", "90", "0", "51.5", " 45.25 "])
    def test_latitude_inside_range_passes(self, value):
        """Latitudes in the closed interval [-90, 90] pass.

        Implementation: Validates boundary and interior latitudes.
        Passing implies: The latitude bounds are inclusive.
        """
        result = _validate(latitude=value)
        assert "latitude" not in result.errors

    @pytest.mark.parametrize("value", ["-90.01", "90.5", "", "abc", "nan", "inf", None])
    def test_latitude_outside_range_or_non_numeric_fails(self, value):
        """Out-of-range, empty, non-numeric and non-finite latitudes fail.

        Implementation: Validates a set of invalid latitudes.
        Passing implies: Only finite numbers in range reach the API.
        """
        result = _validate(latitude=value)
        assert result.errors["latitude"] == LATITUDE_ERROR
        assert result.params is None

    @pytest.mark.parametrize("value", ["-180", "180", "-0.12", 12.5])
    def test_longitude_inside_range_passes(self, value):
        """Longitudes in the closed interval [-180, 180] pass.

        Implementation: Validates boundary and interior longitudes, including a float.
        Passing implies: The longitude bounds are inclusive and numbers are accepted as-is.
        """
        result = _validate(longitude=value)
        assert "longitude" not in result.errors

    @pytest.mark.parametrize("value", ["-180.5", "181", "", "east", "-inf"])
    def test_longitude_outside_range_or_non_numeric_fails(self, value):
        """Out-of-range, empty and non-numeric longitudes fail.

        Implementation: Validates a set of invalid longitudes.
        Passing implies: The longitude rule mirrors the latitude rule.
        """
        result = _validate(longitude=value)
        assert result.errors["longitude"] == LONGITUDE_ERROR


class TestDates:
    def test_missing_dates(self):
        """A missing start or end date reports the required-dates error.

        Implementation: Validates with an empty end date.
        Passing implies: Both dates are mandatory.
        """
        assert _validate(end="").errors["dates"] == DATES_REQUIRED_ERROR
        assert _validate(start=None).errors["dates"] == DATES_REQUIRED_ERROR

    def test_malformed_date(self):
        """Text that is not YYYY-MM-DD reports the format error.

        Implementation: Validates with a slash-separated date.
        Passing implies: Unparseable dates are a validation error, not a crash.
        """
        assert _validate(start="01/01/2024").errors["dates"] == DATES_FORMAT_ERROR

    @pytest.mark.parametrize("start,end", [("2024-06-02", "2024-06-02"), ("2024-05-01", "2024-06-02")])
    def test_future_dates(self, start, end):
        """Either date after today reports the future-dates error.

        Implementation: Validates ranges that end or start after the reference date.
        Passing implies: Future dates never reach the API.
        """
        assert _validate(start=start, end=end).errors["dates"] == DATES_FUTURE_ERROR

    def test_inverted_range(self):
        """A start date after the end date reports the ordering error.

        Implementation: Validates a reversed range in the past.
        Passing implies: Ranges must run forwards.
        """
        assert _validate(start="2024-01-03", end="2024-01-01").errors["dates"] == DATES_ORDER_ERROR

    def test_today_is_allowed(self):
        """A range ending today passes.

        Implementation: Validates start == end == reference date.
        Passing implies: Only dates strictly after today are rejected.
        """
        result = _validate(start="2024-06-01", end="2024-06-01")
        assert result.ok
        assert result.params.mode == "hourly"

    def test_accepts_date_objects(self):
        """validate accepts date objects as well as strings.

        Implementation: Passes date instances for the range.
        Passing implies: Callers with typed input need not format dates first.
        """
        result = validate(10, 20, date(2024, 1, 1), date(2024, 1, 2), today=TODAY)
        assert result.ok
        assert result.params.start_date == date(2024, 1, 1)


class TestValidate:
    def test_valid_input_builds_params(self):
        """Valid input yields ok and typed QueryParams.

        Implementation: Validates a London three-day range.
        Passing implies: The fetch step receives parsed floats and dates.
        """
        result = _validate()

        assert result.ok
        assert result.errors == {}
        assert result.params.latitude == 51.5
        assert result.params.longitude == -0.12
        assert result.params.end_date == date(2024, 1, 3)
        assert result.params.mode == "daily"

    def test_reports_all_errors_at_once(self):
        """Validation collects every failing field instead of stopping at the first.

        Implementation: Validates input where all three field groups fail.
        Passing implies: Users see every problem with a single submission.
        """
        result = _validate(latitude="100", longitude="x", start="2024-02-01", end="2024-01-01")

        assert not result.ok
        assert result.errors == {
            "latitude": LATITUDE_ERROR,
            "longitude": LONGITUDE_ERROR,
            "dates": DATES_ORDER_ERROR,
        }

# ABOUTME: Shared test fixtures for the weather dashboard test suite.
# ABOUTME: Provides the hourly and daily Open-Meteo payloads used across modules.

import pytest

from tests.helpers import LONDON_HOURLY, THREE_DAY_DAILY


@pytest.fixture
def hourly_payload() -> dict:
    return LONDON_HOURLY


@pytest.fixture
def daily_payload() -> dict:
    return THREE_DAY_DAILY

"""Shared fixtures for pkgtrend tests."""

import logging
from datetime import date, timedelta

import pytest

# A Thursday; its week (Sunday start) begins on 2024-03-10.
TODAY = date(2024, 3, 14)


def make_series(name, first_day, values, fetch_error=None):
    """Build a RawSeries with one point per consecutive day."""
    return {
        "package_name": name,
        "points": [
            {"day": first_day + timedelta(days=i), "downloads": v}
            for i, v in enumerate(values)
        ],
        "fetch_error": fetch_error,
    }


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def sample_groups():
    """Two plain groups and a combined group."""
    return [
        {"packages": [{"name": "swr"}]},
        {"packages": [{"name": "@tanstack/react-query"}, {"name": "react-query"}]},
        {"packages": [{"name": "zustand"}], "color": "#764ABC"},
    ]


@pytest.fixture
def sample_raw_series():
    """Thirty days of data ending yesterday for the sample groups."""
    first = TODAY - timedelta(days=30)
    return [
        make_series("swr", first, [100] * 30),
        make_series("@tanstack/react-query", first, [200 + i for i in range(30)]),
        make_series("react-query", first, [50] * 30),
        make_series("zustand", first, [10 * i for i in range(30)]),
    ]


@pytest.fixture(autouse=True)
def reset_pkgtrend_logger():
    """Drop handlers installed by CLI runs so they don't outlive capsys."""
    yield
    logger = logging.getLogger("pkgtrend")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)

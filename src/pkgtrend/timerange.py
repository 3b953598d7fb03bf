"""Resolve a symbolic time range into a concrete window."""

from datetime import date, datetime, timedelta
from typing import Iterable

from .types import RawSeries, TimeRange
from .utils import to_utc_day

# npm download statistics only go back to January 10, 2015
NPM_STATS_START_DATE = date(2015, 1, 10)

RANGE_DAYS: dict[str, int] = {
    "7-days": 7,
    "30-days": 30,
    "90-days": 90,
    "180-days": 180,
    "365-days": 365,
    "730-days": 730,
    "1825-days": 1825,
}

TIME_RANGE_LABELS: dict[str, str] = {
    "7-days": "7 Days",
    "30-days": "30 Days",
    "90-days": "90 Days",
    "180-days": "6 Months",
    "365-days": "1 Year",
    "730-days": "2 Years",
    "1825-days": "5 Years",
    "all-time": "All Time",
}


def earliest_nonzero_day(raw_series: Iterable[RawSeries]) -> date | None:
    """Earliest day with a non-zero download count across all good series."""
    earliest: date | None = None
    for series in raw_series:
        if series.get("fetch_error"):
            continue
        for point in series["points"]:
            if point["downloads"] > 0 and (earliest is None or point["day"] < earliest):
                earliest = point["day"]
    return earliest


def resolve_time_range(
    time_range: TimeRange,
    now: date | datetime,
    raw_series: Iterable[RawSeries] | None = None,
) -> tuple[date, date]:
    """Map a range token to a ``[start_date, end_date)`` window.

    ``end_date`` is ``now`` floored to its UTC day. The start date is not
    floored to a bin boundary here; binning does that.

    Args:
        time_range: One of the ``TIME_RANGES`` tokens.
        now: The current moment, injected by the caller.
        raw_series: Observed data, consulted only for ``all-time``.

    Returns:
        Tuple of (start_date, end_date).

    Raises:
        ValueError: If ``time_range`` is not a known token.
    """
    end_date = to_utc_day(now)

    if time_range in RANGE_DAYS:
        return end_date - timedelta(days=RANGE_DAYS[time_range]), end_date

    if time_range == "all-time":
        start_date = NPM_STATS_START_DATE
        if raw_series is not None:
            observed = earliest_nonzero_day(raw_series)
            if observed is not None and observed < start_date:
                start_date = observed
        return start_date, end_date

    raise ValueError(f"Unknown time range: {time_range!r}")

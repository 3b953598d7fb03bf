"""Bin boundaries, range/bin validity and per-bin summation.

All arithmetic works on UTC calendar days (``datetime.date``), so the same
input always lands in the same bins regardless of the local timezone.
"""

import logging
from datetime import date, timedelta
from typing import Iterable, TypedDict

from .types import BinType, RawDownloadPoint, RawSeries, TimeRange

logger = logging.getLogger("pkgtrend")


class BinOption(TypedDict):
    """Display metadata for a bin type."""

    label: str
    single: str


BINNING_OPTIONS: dict[str, BinOption] = {
    "yearly": {"label": "Yearly", "single": "year"},
    "monthly": {"label": "Monthly", "single": "month"},
    "weekly": {"label": "Weekly", "single": "week"},
    "daily": {"label": "Daily", "single": "day"},
}

# Bin types allowed for each range
_VALID_BIN_TYPES: dict[str, tuple[str, ...]] = {
    "7-days": ("daily",),
    "30-days": ("daily",),
    "90-days": ("daily", "weekly", "monthly"),
    "180-days": ("daily", "weekly", "monthly"),
    "365-days": ("daily", "weekly", "monthly"),
    "730-days": ("daily", "weekly", "monthly", "yearly"),
    "1825-days": ("daily", "weekly", "monthly", "yearly"),
    "all-time": ("daily", "weekly", "monthly", "yearly"),
}

DEFAULT_RANGE_BIN_TYPES: dict[str, BinType] = {
    "7-days": "daily",
    "30-days": "daily",
    "90-days": "weekly",
    "180-days": "weekly",
    "365-days": "weekly",
    "730-days": "monthly",
    "1825-days": "monthly",
    "all-time": "monthly",
}


# -----------------------------------------------------------------------------
# Floors and offsets
# -----------------------------------------------------------------------------


def floor_date(day: date, bin_type: BinType) -> date:
    """Round a day down to the start of its bin.

    Weeks start on Sunday.
    """
    if bin_type == "daily":
        return day
    if bin_type == "weekly":
        return day - timedelta(days=(day.weekday() + 1) % 7)
    if bin_type == "monthly":
        return day.replace(day=1)
    if bin_type == "yearly":
        return day.replace(month=1, day=1)
    raise ValueError(f"Unknown bin type: {bin_type!r}")


def offset_date(day: date, bin_type: BinType, step: int = 1) -> date:
    """Move a bin start forward (or backward) by ``step`` bins."""
    start = floor_date(day, bin_type)
    if bin_type == "daily":
        return start + timedelta(days=step)
    if bin_type == "weekly":
        return start + timedelta(weeks=step)
    if bin_type == "monthly":
        months = start.year * 12 + (start.month - 1) + step
        return date(months // 12, months % 12 + 1, 1)
    # yearly
    return date(start.year + step, 1, 1)


# -----------------------------------------------------------------------------
# Validity policy
# -----------------------------------------------------------------------------


def valid_bin_types(time_range: str) -> tuple[str, ...]:
    """Bin types that may be used with ``time_range``."""
    try:
        return _VALID_BIN_TYPES[time_range]
    except KeyError:
        raise ValueError(f"Unknown time range: {time_range!r}") from None


def is_bin_type_valid_for_range(time_range: TimeRange, bin_type: BinType) -> bool:
    """Check if a binning option is valid for a time range."""
    return bin_type in valid_bin_types(time_range)


def default_bin_type(time_range: TimeRange) -> BinType:
    """Default bin type shown when a range is first selected."""
    valid_bin_types(time_range)
    return DEFAULT_RANGE_BIN_TYPES[time_range]


def clamp_bin_type(time_range: TimeRange, bin_type: BinType) -> BinType:
    """Return ``bin_type`` if legal for ``time_range``, else the range default."""
    if is_bin_type_valid_for_range(time_range, bin_type):
        return bin_type
    fallback = default_bin_type(time_range)
    logger.warning(
        "Binning '%s' is not available for range '%s'; using '%s'",
        bin_type,
        time_range,
        fallback,
    )
    return fallback


# -----------------------------------------------------------------------------
# Summation
# -----------------------------------------------------------------------------


def bin_points(
    points: Iterable[RawDownloadPoint],
    start_date: date,
    bin_type: BinType,
    end_date: date | None = None,
) -> list[tuple[date, int]]:
    """Sum raw daily points into bins.

    Points before the bin floor of ``start_date`` (and, when given, on or
    after ``end_date``) are discarded. Only bins with at least one
    contributing point are returned, ordered by bin start.

    Args:
        points: Raw per-day download points.
        start_date: First day of the window.
        bin_type: Granularity to sum into.
        end_date: Exclusive end of the window.

    Returns:
        List of (bin_start, downloads) tuples.
    """
    floor_start = floor_date(start_date, bin_type)
    totals: dict[date, int] = {}

    for point in points:
        day = point["day"]
        if day < floor_start:
            continue
        if end_date is not None and day >= end_date:
            continue
        key = floor_date(day, bin_type)
        totals[key] = totals.get(key, 0) + point["downloads"]

    return sorted(totals.items())


def bin_raw_series(
    raw_series: Iterable[RawSeries],
    start_date: date,
    bin_type: BinType,
    end_date: date | None = None,
) -> dict[str, list[tuple[date, int]]]:
    """Bin every series that fetched successfully, keyed by package name."""
    binned: dict[str, list[tuple[date, int]]] = {}
    for series in raw_series:
        if series.get("fetch_error"):
            continue
        binned[series["package_name"]] = bin_points(
            series["points"], start_date, bin_type, end_date
        )
    return binned

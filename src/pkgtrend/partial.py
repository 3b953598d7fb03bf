"""Handling of the most recent, still-open bin."""

from datetime import date, datetime
from typing import Sequence

from .binning import floor_date, offset_date
from .types import BinnedSeriesPoint, BinType, ShowDataMode, TransformMode
from .utils import to_utc_day


def effective_show_data(transform: TransformMode, show_data: ShowDataMode) -> ShowDataMode:
    """Relative change is only drawn over closed bins."""
    if transform == "normalize-y":
        return "complete"
    return show_data


def partial_bin_start(now: date | datetime, bin_type: BinType) -> date:
    """Start of the bin that contains today."""
    return floor_date(to_utc_day(now), bin_type)


def last_complete_bin_start(now: date | datetime, bin_type: BinType) -> date:
    """Start of the bin immediately before the partial one."""
    return offset_date(partial_bin_start(now, bin_type), bin_type, -1)


def apply_partial_policy(
    points: Sequence[BinnedSeriesPoint],
    now: date | datetime,
    bin_type: BinType,
    transform: TransformMode,
    show_data: ShowDataMode,
) -> tuple[list[BinnedSeriesPoint], list[bool]]:
    """Drop or flag points that fall in the partial bin.

    Returns:
        Tuple of (points, is_partial) where ``is_partial[i]`` tells whether
        ``points[i]`` lies in the partial bin.
    """
    cutoff = partial_bin_start(now, bin_type)
    if effective_show_data(transform, show_data) == "complete":
        kept = [p for p in points if p["date"] < cutoff]
        return kept, [False] * len(kept)

    kept = list(points)
    return kept, [p["date"] >= cutoff for p in kept]

"""Baseline ratios and change-since-first-bin."""

from datetime import date
from typing import Sequence

from .types import BinnedSeriesPoint


def normalize_series(
    name: str,
    values: Sequence[tuple[date, int]],
    baseline_values: dict[date, int] | None = None,
) -> list[BinnedSeriesPoint]:
    """Build chart points for one combined series.

    When ``baseline_values`` is given every value is divided by the
    baseline's value at the same bin. A missing or zero baseline value
    divides by 1 instead. ``change`` is always the (corrected) value minus
    the value of the first bin.

    Args:
        name: Series name stamped on every point.
        values: Combined (bin_start, downloads) pairs in bin order.
        baseline_values: Baseline downloads keyed by bin start.

    Returns:
        One BinnedSeriesPoint per bin.
    """
    corrected: list[tuple[date, float]] = []
    for bin_start, downloads in values:
        value: float = downloads
        if baseline_values is not None:
            value = downloads / (baseline_values.get(bin_start) or 1)
        corrected.append((bin_start, value))

    if not corrected:
        return []

    first = corrected[0][1]
    return [
        {"name": name, "date": bin_start, "downloads": value, "change": value - first}
        for bin_start, value in corrected
    ]


def normalize_all(
    names: Sequence[str],
    combined: Sequence[Sequence[tuple[date, int]]],
    baseline: int | None = None,
) -> list[list[BinnedSeriesPoint]]:
    """Normalize every combined series against the baseline at ``baseline``.

    The baseline series itself is normalized too (its ratios are all 1.0);
    callers drop it from the rendered set.
    """
    baseline_values = None
    if baseline is not None:
        baseline_values = dict(combined[baseline])

    return [
        normalize_series(name, values, baseline_values)
        for name, values in zip(names, combined)
    ]

"""Per-series summary statistics for tabular display."""

from datetime import date, datetime
from typing import Sequence

from .partial import partial_bin_start
from .types import BinType, SummaryRow, TransformMode


def summarize_series(
    name: str,
    values: Sequence[tuple[date, int]],
    now: date | datetime,
    bin_type: BinType,
    color: str | None = None,
) -> SummaryRow | None:
    """Summarize a combined series over its complete bins.

    The partial bin is always left out, whatever the chart shows.

    Returns:
        A SummaryRow, or None when the series has no complete bins.
    """
    cutoff = partial_bin_start(now, bin_type)
    complete = [downloads for bin_start, downloads in values if bin_start < cutoff]
    if not complete:
        return None

    first = complete[0]
    last = complete[-1]
    growth = last - first

    return {
        "name": name,
        "color": color,
        "total_downloads": sum(complete),
        "last_bin_downloads": last,
        "growth": growth,
        "growth_percentage": growth / (first or 1),
    }


def sort_summary(rows: Sequence[SummaryRow], transform: TransformMode) -> list[SummaryRow]:
    """Order rows by growth for relative change, else by latest bin."""
    key = "growth" if transform == "normalize-y" else "last_bin_downloads"
    return sorted(rows, key=lambda row: row[key], reverse=True)

"""The full transform: raw per-day downloads to chart series and summary."""

import logging
from datetime import date, datetime
from typing import Sequence

from .binning import bin_raw_series, is_bin_type_valid_for_range
from .colors import assign_colors
from .combine import baseline_index, combine_group, group_name, is_group_hidden
from .normalize import normalize_all
from .partial import apply_partial_policy, effective_show_data
from .summary import sort_summary, summarize_series
from .timerange import resolve_time_range
from .types import (
    ChartConfig,
    ChartResult,
    PackageGroup,
    RawSeries,
    RenderedSeries,
    SummaryRow,
)

logger = logging.getLogger("pkgtrend")


def _group_error(group: PackageGroup, errors: dict[str, str]) -> str | None:
    """Error label for a group whose main package failed to fetch."""
    return errors.get(group_name(group))


def build_chart(
    groups: Sequence[PackageGroup],
    raw_series: Sequence[RawSeries],
    config: ChartConfig,
    now: date | datetime,
) -> ChartResult:
    """Run every stage for one comparison.

    Args:
        groups: The configured comparison set, in display order.
        raw_series: One series per package name referenced by the groups.
        config: A validated configuration (see ``config.parse_config``).
        now: The current moment. Nothing here reads the clock.

    Returns:
        A ChartResult with one rendered series per visible, non-baseline
        group and one summary row per such group with complete-bin data.
    """
    time_range = config["range"]
    bin_type = config["bin_type"]
    transform = config["transform"]
    show_data = config["show_data"]

    if not is_bin_type_valid_for_range(time_range, bin_type):
        raise ValueError(
            f"Bin type {bin_type!r} is not valid for range {time_range!r}; "
            "use config.parse_config to clamp it"
        )

    errors = {
        s["package_name"]: s["fetch_error"] for s in raw_series if s["fetch_error"]
    }
    for name, message in errors.items():
        logger.debug("Excluding %s from aggregation: %s", name, message)

    start_date, end_date = resolve_time_range(time_range, now, raw_series)
    binned = bin_raw_series(raw_series, start_date, bin_type, end_date)

    names = [group_name(g) for g in groups]
    combined = [combine_group(g, binned) for g in groups]

    baseline = baseline_index(groups)
    if baseline is not None and _group_error(groups[baseline], errors):
        logger.warning(
            "Baseline %s has no data; showing unnormalized values", names[baseline]
        )
        baseline = None

    normalized = normalize_all(names, combined, baseline)
    colors = assign_colors(groups)

    series: list[RenderedSeries] = []
    rows: list[SummaryRow] = []
    for i, group in enumerate(groups):
        if group.get("baseline") or is_group_hidden(group):
            continue

        color = colors[i] or ""
        points, partial_flags = apply_partial_policy(
            normalized[i], now, bin_type, transform, show_data
        )
        series.append(
            {
                "name": names[i],
                "color": color,
                "points": points,
                "is_partial_trailing": partial_flags,
                "error": _group_error(group, errors),
            }
        )

        row = summarize_series(names[i], combined[i], now, bin_type, color)
        if row is not None:
            rows.append(row)

    logger.debug(
        "Built %d series (%s..%s, %s, %s) with %d summary rows",
        len(series),
        start_date.isoformat(),
        end_date.isoformat(),
        bin_type,
        transform,
        len(rows),
    )

    return {
        "series": series,
        "summary": sort_summary(rows, transform),
        "start_date": start_date,
        "end_date": end_date,
        "bin_type": bin_type,
        "transform": transform,
        "show_data": effective_show_data(transform, show_data),
        "baseline": names[baseline] if baseline is not None else None,
        "errors": errors,
    }

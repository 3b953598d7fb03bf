"""Merge the sub-packages of a package group into one series."""

from datetime import date
from typing import Sequence

from .types import PackageGroup


def group_name(group: PackageGroup) -> str:
    """Series name of a group: the name of its main package."""
    return group["packages"][0]["name"]


def is_group_hidden(group: PackageGroup) -> bool:
    """A group is hidden when its main package is flagged hidden."""
    return bool(group["packages"][0].get("hidden"))


def baseline_index(groups: Sequence[PackageGroup]) -> int | None:
    """Position of the baseline group, or None if there is none."""
    for i, group in enumerate(groups):
        if group.get("baseline"):
            return i
    return None


def included_packages(group: PackageGroup) -> list[str]:
    """Names of the sub-packages that count toward the group's total.

    The main package is always included; its ``hidden`` flag hides the
    whole group instead.
    """
    return [
        ref["name"]
        for i, ref in enumerate(group["packages"])
        if i == 0 or not ref.get("hidden")
    ]


def combine_group(
    group: PackageGroup,
    binned_by_name: dict[str, list[tuple[date, int]]],
) -> list[tuple[date, int]]:
    """Sum the binned downloads of a group's included sub-packages.

    Args:
        group: The package group.
        binned_by_name: Binned data per package name. Packages that are
            missing (not fetched, or failed) contribute nothing.

    Returns:
        List of (bin_start, downloads) tuples ordered by bin start.
    """
    totals: dict[date, int] = {}
    for name in included_packages(group):
        for bin_start, downloads in binned_by_name.get(name, []):
            totals[bin_start] = totals.get(bin_start, 0) + downloads
    return sorted(totals.items())

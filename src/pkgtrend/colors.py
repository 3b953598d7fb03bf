"""Deterministic per-series colors."""

from typing import Sequence

from .types import PackageGroup

# d3 category10
DEFAULT_PALETTE: tuple[str, ...] = (
    "#1f77b4",  # blue
    "#ff7f0e",  # orange
    "#2ca02c",  # green
    "#d62728",  # red
    "#9467bd",  # purple
    "#8c564b",  # brown
    "#e377c2",  # pink
    "#7f7f7f",  # gray
    "#bcbd22",  # yellow-green
    "#17becf",  # cyan
)


def assign_colors(
    groups: Sequence[PackageGroup],
    palette: Sequence[str] = DEFAULT_PALETTE,
) -> list[str | None]:
    """Assign one color per group, in group order.

    An explicit ``color`` wins. Otherwise the color is taken from the
    palette by the group's position among non-baseline groups, wrapping
    around. The baseline gets None and never consumes a palette slot.
    """
    colors: list[str | None] = []
    position = 0
    for group in groups:
        if group.get("baseline"):
            colors.append(None)
            continue
        colors.append(group.get("color") or palette[position % len(palette)])
        position += 1
    return colors

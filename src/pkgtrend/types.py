"""Type definitions for pkgtrend using TypedDict for known structures."""

from datetime import date
from typing import Literal, TypedDict

TimeRange = Literal[
    "7-days",
    "30-days",
    "90-days",
    "180-days",
    "365-days",
    "730-days",
    "1825-days",
    "all-time",
]
BinType = Literal["yearly", "monthly", "weekly", "daily"]
TransformMode = Literal["none", "normalize-y"]
ShowDataMode = Literal["all", "complete"]

TIME_RANGES: tuple[str, ...] = (
    "7-days",
    "30-days",
    "90-days",
    "180-days",
    "365-days",
    "730-days",
    "1825-days",
    "all-time",
)
BIN_TYPES: tuple[str, ...] = ("yearly", "monthly", "weekly", "daily")
TRANSFORM_MODES: tuple[str, ...] = ("none", "normalize-y")
SHOW_DATA_MODES: tuple[str, ...] = ("all", "complete")


class _PackageRefBase(TypedDict):
    name: str


class PackageRef(_PackageRefBase, total=False):
    """A package inside a group; hidden sub-packages are left out of the sum."""

    hidden: bool


class _PackageGroupBase(TypedDict):
    packages: list[PackageRef]


class PackageGroup(_PackageGroupBase, total=False):
    """One comparison unit. The first package is the main package."""

    color: str | None
    baseline: bool


class RawDownloadPoint(TypedDict):
    """Downloads for one package on one UTC day."""

    day: date
    downloads: int


class RawSeries(TypedDict):
    """Per-day downloads for a package as delivered by the fetch layer."""

    package_name: str
    points: list[RawDownloadPoint]
    fetch_error: str | None


class BinnedSeriesPoint(TypedDict):
    """A single chart point handed to the renderer."""

    name: str
    date: date
    downloads: float
    change: float


class ChartConfig(TypedDict):
    """Display configuration for one chart."""

    range: TimeRange
    bin_type: BinType
    transform: TransformMode
    show_data: ShowDataMode


class RenderedSeries(TypedDict):
    """A visible, non-baseline series ready for rendering."""

    name: str
    color: str
    points: list[BinnedSeriesPoint]
    is_partial_trailing: list[bool]
    error: str | None


class SummaryRow(TypedDict):
    """Scalar aggregates for one series, over complete bins only."""

    name: str
    color: str | None
    total_downloads: int
    last_bin_downloads: int
    growth: int
    growth_percentage: float


class ChartResult(TypedDict):
    """Everything the chart and table collaborators need."""

    series: list[RenderedSeries]
    summary: list[SummaryRow]
    start_date: date
    end_date: date
    bin_type: BinType
    transform: TransformMode
    show_data: ShowDataMode
    baseline: str | None
    errors: dict[str, str]


class Comparison(TypedDict):
    """A named set of package groups, as used by presets and comparison files."""

    title: str
    groups: list[PackageGroup]

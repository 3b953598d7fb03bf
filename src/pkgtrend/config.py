"""Configuration parsing: display settings and comparison files.

This is the boundary where user input is validated. Everything past it
(the engine modules) assumes well-formed groups and a legal
(range, bin type) pair.
"""

import json
import logging
from pathlib import Path
from typing import Any, cast

import yaml

from .binning import clamp_bin_type, default_bin_type
from .types import (
    BIN_TYPES,
    BinType,
    SHOW_DATA_MODES,
    TIME_RANGES,
    TRANSFORM_MODES,
    ChartConfig,
    PackageGroup,
    PackageRef,
    TimeRange,
)
from .utils import validate_package_name

logger = logging.getLogger("pkgtrend")

DEFAULT_COMPARISON_FILE = "comparison.yml"
DEFAULT_RANGE = "365-days"
DEFAULT_TRANSFORM = "none"
DEFAULT_SHOW_DATA = "all"

# Keys a comparison file may use to override display settings
_SETTING_KEYS = ("range", "bin_type", "transform", "show_data")


def _check_choice(value: str, choices: tuple[str, ...], what: str) -> str:
    if value not in choices:
        raise ValueError(
            f"Unknown {what} {value!r}; expected one of: {', '.join(choices)}"
        )
    return value


def parse_config(
    time_range: str | None = None,
    bin_type: str | None = None,
    transform: str | None = None,
    show_data: str | None = None,
) -> ChartConfig:
    """Build a validated chart configuration.

    Missing values fall back to defaults; the bin type defaults to the
    range's default. A bin type that is not allowed for the range is
    clamped to the range default (with a warning) rather than rejected.

    Raises:
        ValueError: If any token is not part of its vocabulary.
    """
    time_range = _check_choice(time_range or DEFAULT_RANGE, TIME_RANGES, "time range")
    transform = _check_choice(
        transform or DEFAULT_TRANSFORM, TRANSFORM_MODES, "transform mode"
    )
    show_data = _check_choice(
        show_data or DEFAULT_SHOW_DATA, SHOW_DATA_MODES, "show-data mode"
    )

    if bin_type is None:
        bin_type = default_bin_type(cast(TimeRange, time_range))
    else:
        _check_choice(bin_type, BIN_TYPES, "bin type")
        bin_type = clamp_bin_type(cast(TimeRange, time_range), cast(BinType, bin_type))

    config = {
        "range": time_range,
        "bin_type": bin_type,
        "transform": transform,
        "show_data": show_data,
    }
    return cast(ChartConfig, config)


def _parse_package_ref(entry: Any) -> PackageRef:
    if isinstance(entry, str):
        ref: PackageRef = {"name": entry}
    elif isinstance(entry, dict) and isinstance(entry.get("name"), str):
        ref = {"name": entry["name"]}
        if entry.get("hidden"):
            ref["hidden"] = True
    else:
        raise ValueError(f"Invalid package entry: {entry!r}")

    is_valid, error = validate_package_name(ref["name"])
    if not is_valid:
        logger.warning("Suspicious package name %r: %s", ref["name"], error)
    return ref


def parse_group(entry: Any) -> PackageGroup:
    """Parse one group from a comparison file.

    Accepts a package name, a list of package names or refs, or a mapping
    with ``packages`` and optional ``color`` and ``baseline``.
    """
    if isinstance(entry, (str, list)):
        entry = {"packages": entry}
    if not isinstance(entry, dict):
        raise ValueError(f"Invalid package group: {entry!r}")

    packages = entry.get("packages")
    if isinstance(packages, str):
        packages = [packages]
    if not packages:
        raise ValueError(f"Package group has no packages: {entry!r}")

    group: PackageGroup = {"packages": [_parse_package_ref(p) for p in packages]}
    if entry.get("color"):
        group["color"] = str(entry["color"])
    if entry.get("baseline"):
        group["baseline"] = True
    return group


def parse_groups(entries: Any) -> list[PackageGroup]:
    """Parse a list of groups, enforcing at most one baseline."""
    if not isinstance(entries, list):
        raise ValueError("Package groups must be a list")

    groups = [parse_group(entry) for entry in entries]
    baselines = [g["packages"][0]["name"] for g in groups if g.get("baseline")]
    if len(baselines) > 1:
        raise ValueError(
            f"Only one package group may be the baseline, got: {', '.join(baselines)}"
        )
    return groups


def set_baseline(groups: list[PackageGroup], name: str | None) -> list[PackageGroup]:
    """Return copies of ``groups`` with only the group named ``name`` as baseline.

    Passing None clears the baseline.
    """
    result: list[PackageGroup] = []
    found = name is None
    for group in groups:
        copy: PackageGroup = {"packages": [PackageRef(**p) for p in group["packages"]]}
        if group.get("color"):
            copy["color"] = group["color"]
        if name is not None and group["packages"][0]["name"] == name:
            copy["baseline"] = True
            found = True
        result.append(copy)
    if not found:
        raise ValueError(f"No package group named {name!r} to use as baseline")
    return result


def load_comparison_file(file_path: str) -> dict[str, Any]:
    """Load a comparison from a YAML or JSON file.

    Supports:
    - a mapping with ``groups`` (or ``packages``) and optional ``title``,
      ``range``, ``bin_type``, ``transform`` and ``show_data``
    - a bare list of groups

    Returns:
        Dict with ``title``, ``groups`` and any display settings found.
    """
    path = Path(file_path)

    with open(file_path) as f:
        content = f.read()

    if path.suffix.lower() == ".json":
        data = json.loads(content)
    else:
        data = yaml.safe_load(content)

    if isinstance(data, list):
        data = {"groups": data}
    if not isinstance(data, dict):
        raise ValueError(f"Comparison file {file_path} must contain a mapping or list")

    result: dict[str, Any] = {
        "title": str(data.get("title") or path.stem),
        "groups": parse_groups(data.get("groups") or data.get("packages") or []),
    }
    for key in _SETTING_KEYS:
        if data.get(key) is not None:
            result[key] = str(data[key])
    return result

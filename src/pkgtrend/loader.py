"""Load raw per-day download series produced by the fetch layer.

The expected shape mirrors the npm bulk downloads endpoint::

    [
      {"package": "react", "downloads": [{"day": "2024-01-01", "downloads": 12}]},
      {"package": "left-pad", "downloads": [], "error": "Not found"}
    ]

A mapping with a ``packages`` list of such records is accepted as well.
"""

import json
import logging
from datetime import date, datetime
from pathlib import Path
from typing import Any

import yaml

from .types import RawDownloadPoint, RawSeries

logger = logging.getLogger("pkgtrend")


def parse_day(value: Any) -> date:
    """Parse an ISO day (``YYYY-MM-DD``) or a date/datetime into a date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value[:10])
        except ValueError:
            raise ValueError(f"Invalid day: {value!r}") from None
    raise ValueError(f"Invalid day: {value!r}")


def _parse_point(record: Any, package_name: str) -> RawDownloadPoint:
    if not isinstance(record, dict):
        raise ValueError(f"Invalid download point for {package_name}: {record!r}")

    downloads = record.get("downloads")
    if isinstance(downloads, bool) or not isinstance(downloads, int) or downloads < 0:
        raise ValueError(
            f"Download count for {package_name} on {record.get('day')} "
            f"must be a non-negative integer, got {downloads!r}"
        )
    return {"day": parse_day(record.get("day")), "downloads": downloads}


def parse_raw_series(record: Any) -> RawSeries:
    """Validate one fetch result and convert it to a RawSeries."""
    if not isinstance(record, dict):
        raise ValueError(f"Invalid series record: {record!r}")

    name = record.get("package") or record.get("package_name") or record.get("name")
    if not isinstance(name, str) or not name:
        raise ValueError(f"Series record has no package name: {record!r}")

    error = record.get("error") or record.get("fetch_error")
    points = record.get("downloads") or record.get("points") or []
    if not isinstance(points, list):
        raise ValueError(f"Downloads for {name} must be a list")

    series: RawSeries = {
        "package_name": name,
        "points": [] if error else [_parse_point(p, name) for p in points],
        "fetch_error": str(error) if error else None,
    }
    if error:
        logger.warning("Fetch failed for %s: %s", name, error)
    return series


def parse_raw_data(data: Any) -> list[RawSeries]:
    """Convert decoded JSON/YAML fetch output into RawSeries records.

    Raises:
        ValueError: If the data is malformed or a package appears twice.
    """
    if isinstance(data, dict):
        data = data.get("packages", [])
    if not isinstance(data, list):
        raise ValueError("Raw download data must be a list of series")

    result: list[RawSeries] = []
    seen: set[str] = set()
    for record in data:
        series = parse_raw_series(record)
        if series["package_name"] in seen:
            raise ValueError(f"Duplicate series for {series['package_name']}")
        seen.add(series["package_name"])
        result.append(series)
    return result


def load_raw_series(file_path: str) -> list[RawSeries]:
    """Load raw download series from a JSON or YAML file."""
    path = Path(file_path)

    with open(file_path) as f:
        content = f.read()

    if path.suffix.lower() in (".yml", ".yaml"):
        data = yaml.safe_load(content)
    else:
        data = json.loads(content)

    series = parse_raw_data(data)
    logger.debug("Loaded %d series from %s", len(series), file_path)
    return series

"""Utility functions for pkgtrend."""

import re
from datetime import date, datetime, timezone

# -----------------------------------------------------------------------------
# Package Validation Constants
# -----------------------------------------------------------------------------

# npm package name pattern
# - Optional @scope/ prefix
# - Lowercase letters, digits, hyphens, underscores, periods and tildes
# - Must not start with a period or underscore
# - Max 214 characters
_PACKAGE_NAME_PATTERN = re.compile(
    r"^(@[a-z0-9~-][a-z0-9._~-]*/)?[a-z0-9~-][a-z0-9._~-]*$"
)
_MAX_PACKAGE_NAME_LENGTH = 214

# -----------------------------------------------------------------------------
# Sparkline Constants
# -----------------------------------------------------------------------------

# Default width for sparkline charts (number of characters)
SPARKLINE_WIDTH = 12

# Characters used to represent values in sparklines (low to high)
SPARKLINE_CHARS = " _.,:-=+*#"


def validate_package_name(name: str) -> tuple[bool, str]:
    """Validate that a package name follows npm naming conventions.

    Args:
        name: Package name to validate.

    Returns:
        Tuple of (is_valid, error_message). If valid, error_message is empty.
    """
    if not name:
        return False, "Package name cannot be empty"

    if len(name) > _MAX_PACKAGE_NAME_LENGTH:
        return False, f"Package name exceeds {_MAX_PACKAGE_NAME_LENGTH} characters"

    if not _PACKAGE_NAME_PATTERN.match(name):
        return False, (
            "Package name must be lowercase, may carry an @scope/ prefix, "
            "and contain only letters, numbers, hyphens, underscores, "
            "periods or tildes"
        )

    return True, ""


def to_utc_day(value: date | datetime) -> date:
    """Floor a date or datetime to its UTC calendar day.

    Naive datetimes are taken to already be in UTC.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    return value


def format_number(num: float) -> str:
    """Format a download count for compact display.

    Examples: 1234 -> "1.2K", 1234567 -> "1.2M", 123 -> "123"
    """
    if abs(num) >= 1_000_000_000:
        return f"{num / 1_000_000_000:.1f}B"
    elif abs(num) >= 1_000_000:
        return f"{num / 1_000_000:.1f}M"
    elif abs(num) >= 1_000:
        return f"{num / 1_000:.1f}K"
    if isinstance(num, float) and not num.is_integer():
        return f"{num:.2f}"
    return str(int(num))


def format_percentage(ratio: float) -> str:
    """Format a growth ratio (0.25 -> "+25.0%")."""
    sign = "+" if ratio >= 0 else ""
    return f"{sign}{ratio * 100:.1f}%"


def make_sparkline(values: list[float], width: int = SPARKLINE_WIDTH) -> str:
    """Generate an ASCII sparkline from a list of values.

    Args:
        values: List of values to visualize, oldest first.
        width: Number of characters in the sparkline (default: SPARKLINE_WIDTH).

    Returns:
        ASCII string representing the trend of values.
    """
    if not values:
        return " " * width

    # Use last 'width' values
    values = values[-width:]

    # Pad on the left so the most recent value stays at the right edge
    if len(values) < width:
        values = [values[0]] * (width - len(values)) + values

    min_val = min(values)
    max_val = max(values)

    if max_val == min_val:
        mid_idx = len(SPARKLINE_CHARS) // 2
        return SPARKLINE_CHARS[mid_idx] * width

    sparkline = ""
    for v in values:
        idx = int((v - min_val) / (max_val - min_val) * (len(SPARKLINE_CHARS) - 1))
        sparkline += SPARKLINE_CHARS[idx]

    return sparkline

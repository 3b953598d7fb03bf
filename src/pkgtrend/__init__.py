"""pkgtrend - Compare package download trends over time."""

from .pipeline import build_chart

__version__ = "0.1.0"

__all__ = ["build_chart", "__version__"]

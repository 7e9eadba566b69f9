from __future__ import annotations


class ChartDataError(ValueError):
    """Raised when series input cannot be turned into chart items."""

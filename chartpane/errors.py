from __future__ import annotations


class ChartDataError(ValueError):
    """Invalid series data or chart configuration supplied by the caller."""

"""
Stats module - read-only projections over recorded games.
"""

from patchwork.stats.projection import (
    GameStats,
    TimeSeriesPoint,
    ChartData,
    calculate_stats,
    build_chart_data,
)

__all__ = [
    "GameStats",
    "TimeSeriesPoint",
    "ChartData",
    "calculate_stats",
    "build_chart_data",
]

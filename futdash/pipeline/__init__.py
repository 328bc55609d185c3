"""
Aggregation, filtering and statistics over the owned-players table
"""

from .aggregator import aggregate
from .dashboard import build_dashboard
from .filtering import filter_players
from .statistics import (
    build_filter_options,
    location_distribution,
    rating_distribution,
    summarize,
)

__all__ = [
    "aggregate",
    "build_dashboard",
    "build_filter_options",
    "filter_players",
    "location_distribution",
    "rating_distribution",
    "summarize",
]

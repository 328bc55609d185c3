"""Models for the assembled dashboard view."""

import datetime
from typing import List, Optional

from pydantic import Field

from .base import FutdashModel
from .catalog import ItemCategory
from .players import AggregatedPlayer


class FilterOption(FutdashModel):
    """Selectable value for a nation, league or team filter."""

    value: str
    label: str
    img_url: Optional[str] = None


class FilterOptions(FutdashModel):
    """Everything a user can filter on, given the owned players."""

    nations: List[FilterOption] = Field(default_factory=list)
    leagues: List[FilterOption] = Field(default_factory=list)
    teams: List[FilterOption] = Field(default_factory=list)
    positions: List[str] = Field(default_factory=list)
    types: List[ItemCategory] = Field(default_factory=list)


class TopItem(FutdashModel):
    """Name with the number of unique players counted under it."""

    name: str
    count: int
    img_url: Optional[str] = None


class DistributionEntry(FutdashModel):
    """One slice of a chart."""

    label: str
    count: int


class DashboardSummary(FutdashModel):
    """Headline numbers and chart data for a filtered player list."""

    unique_players: int = 0
    total_cards: int = 0
    average_rating: int = 0
    duplicates: int = 0
    top_clubs: List[TopItem] = Field(default_factory=list)
    top_nations: List[TopItem] = Field(default_factory=list)
    top_leagues: List[TopItem] = Field(default_factory=list)
    top_positions: List[TopItem] = Field(default_factory=list)
    rating_distribution: List[DistributionEntry] = Field(default_factory=list)
    location_distribution: List[DistributionEntry] = Field(default_factory=list)


class DashboardView(FutdashModel):
    """Result of one dashboard refresh."""

    players: List[AggregatedPlayer] = Field(default_factory=list)
    total_owned: int = 0
    filter_options: FilterOptions = Field(default_factory=FilterOptions)
    summary: DashboardSummary = Field(default_factory=DashboardSummary)
    warnings: List[str] = Field(default_factory=list)
    refreshed_at: datetime.datetime = Field(default_factory=datetime.datetime.now)

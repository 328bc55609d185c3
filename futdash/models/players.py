"""Normalized, aggregated and filter models for the owned-players table."""

from typing import List, Optional

from pydantic import Field, model_validator

from .. import constants
from .base import FutdashModel
from .catalog import ItemCategory


class NormalizedPlayer(FutdashModel):
    """One owned copy, joined against the reference data."""

    asset_id: int
    name: str
    rating: int
    position: str
    nation: str
    nation_id: int
    nation_img: Optional[str] = None
    league: str
    league_id: int
    league_img: Optional[str] = None
    team: str
    team_id: int
    team_img: Optional[str] = None
    type: ItemCategory

    @property
    def aggregation_key(self) -> str:
        """Base cards and special versions of a player never share a key."""
        return f"{self.asset_id}-{self.rating}"

    @property
    def positions(self) -> List[str]:
        """Eligible positions, split back out of the display string."""
        return self.position.split(constants.POSITION_SEPARATOR)


class AggregatedPlayer(NormalizedPlayer):
    """All owned copies sharing an aggregation key."""

    copies: int = Field(default=1, ge=1)
    types: List[ItemCategory] = Field(default_factory=list)


class FilterCriteria(FutdashModel):
    """
    User-selected predicates over aggregated players.
    Empty lists put no restriction on their field.
    """

    rating_min: int = constants.MIN_RATING
    rating_max: int = constants.MAX_RATING
    positions: List[str] = Field(default_factory=list)
    nations: List[str] = Field(default_factory=list)
    leagues: List[str] = Field(default_factory=list)
    teams: List[str] = Field(default_factory=list)
    types: List[ItemCategory] = Field(default_factory=list)
    multiple_copies_only: bool = False

    @model_validator(mode="after")
    def check_rating_range(self) -> "FilterCriteria":
        """Reject inverted rating ranges."""
        if self.rating_min > self.rating_max:
            raise ValueError(
                f"rating_min ({self.rating_min}) is above rating_max ({self.rating_max})"
            )
        return self

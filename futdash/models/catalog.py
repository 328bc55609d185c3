"""Reference catalog and raw owned-item models."""

import enum
from typing import List, Optional

from pydantic import ConfigDict, Field

from .. import constants
from .base import FutdashModel


class ItemCategory(str, enum.Enum):
    """Where an owned item was found."""

    TRANSFER = "Transfer"
    STORAGE = "Storage"
    DUPLICATED = "Duplicated"


class RawCatalogEntry(FutdashModel):
    """Player entry from the static players.json catalog."""

    model_config = ConfigDict(frozen=True)

    id: int
    first_name: str = Field(default="", alias="f")
    last_name: str = Field(default="", alias="l")
    common_name: Optional[str] = Field(default=None, alias="c")
    rating: int = Field(default=0, alias="r")
    nation_id: int = Field(default=0, alias="n")

    @property
    def display_name(self) -> str:
        """Common name when the catalog has one, else 'First Last'."""
        return self.common_name or f"{self.first_name} {self.last_name}"


class RawItemRecord(FutdashModel):
    """One physical copy of a player item, as returned by the game API."""

    asset_id: int
    rating: int = 0
    possible_positions: List[str] = Field(default_factory=list)
    nation: int = 0
    league_id: int = 0
    team_id: int = Field(default=0, alias="teamid")


class EntityInfo(FutdashModel):
    """Display name and image of a club, league or nation."""

    model_config = ConfigDict(frozen=True)

    name: str
    img_url: Optional[str] = None


UNKNOWN_ENTITY = EntityInfo(name=constants.UNKNOWN_NAME)

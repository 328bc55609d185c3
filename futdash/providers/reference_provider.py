"""
Static reference data: player catalog plus club/league/nation lookups.

Both sources change rarely and the catalog is large, so they are
downloaded once and shared by every later request until invalidated.
"""

import asyncio
import logging
import time
import urllib.parse
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional, Tuple

from .. import constants
from ..models import UNKNOWN_ENTITY, EntityInfo, RawCatalogEntry
from .relay_client import RelayClient

LOGGER = logging.getLogger(__name__)


def image_url(kind: str, entity_id: int) -> str:
    """
    EA CDN image for a club, nation or league
    :param kind: "club", "nation" or "league"
    :param entity_id: EA id of the entity
    :return: Image URL
    """
    return f"{constants.EA_IMAGES_URL}/{constants.IMAGE_PATHS[kind]}/{entity_id}.png"


@dataclass
class ReferenceData:
    """Lookups used to turn raw items into displayable players."""

    players: Dict[int, RawCatalogEntry] = field(default_factory=dict)
    teams: Dict[int, EntityInfo] = field(default_factory=dict)
    leagues: Dict[int, EntityInfo] = field(default_factory=dict)
    nations: Dict[int, EntityInfo] = field(default_factory=dict)

    def player_name(self, asset_id: int) -> str:
        """Display name of a catalog player, "Unknown" if not in the catalog."""
        player = self.players.get(asset_id)
        if player is None:
            return constants.UNKNOWN_NAME
        return player.display_name

    def team(self, team_id: int) -> EntityInfo:
        """Club by id."""
        return self.teams.get(team_id, UNKNOWN_ENTITY)

    def league(self, league_id: int) -> EntityInfo:
        """League by id."""
        return self.leagues.get(league_id, UNKNOWN_ENTITY)

    def nation(self, nation_id: int) -> EntityInfo:
        """Nation by id."""
        return self.nations.get(nation_id, UNKNOWN_ENTITY)


def build_catalog(players_json: Dict[str, Any]) -> Dict[int, RawCatalogEntry]:
    """
    Merge legends and regular players into one id -> entry map.
    A duplicate id overwrites the earlier entry.
    :param players_json: Decoded players.json
    :return: Catalog keyed by player id
    """
    catalog: Dict[int, RawCatalogEntry] = {}
    for key in ("LegendsPlayers", "Players"):
        for entry in players_json.get(key) or []:
            player = RawCatalogEntry.model_validate(entry)
            catalog[player.id] = player
    return catalog


def build_entity_maps(
    core_data: Dict[str, Any]
) -> Tuple[Dict[int, EntityInfo], Dict[int, EntityInfo], Dict[int, EntityInfo]]:
    """
    Build the club, league and nation lookups from fut.gg core data.
    Clubs with a sibling club (alternate identity) are also registered
    under the sibling id, with the sibling's image.
    :param core_data: Decoded fut.gg response
    :return: (teams, leagues, nations)
    """
    data = core_data.get("data") or {}

    teams: Dict[int, EntityInfo] = {}
    for club in data.get("clubs") or []:
        club_id = club["eaId"]
        teams[club_id] = EntityInfo(name=club["name"], img_url=image_url("club", club_id))
        sibling_id = club.get("siblingClubEaId")
        if sibling_id:
            teams[sibling_id] = EntityInfo(
                name=club["name"], img_url=image_url("club", sibling_id)
            )

    leagues = _entity_map(data.get("leagues") or [], "league")
    nations = _entity_map(data.get("nations") or [], "nation")

    return teams, leagues, nations


def _entity_map(entries: Iterable[Dict[str, Any]], kind: str) -> Dict[int, EntityInfo]:
    return {
        entry["eaId"]: EntityInfo(name=entry["name"], img_url=image_url(kind, entry["eaId"]))
        for entry in entries
    }


class ReferenceDataCache:
    """
    Holds the reference data for the lifetime of the cache.

    The first caller starts the download; callers arriving while it is
    in flight wait on the same task. A failed download is raised to
    every waiting caller and the next call starts over.
    """

    def __init__(self, client: RelayClient) -> None:
        self.client = client
        self._data: Optional[ReferenceData] = None
        self._pending: Optional["asyncio.Task[ReferenceData]"] = None

    @property
    def is_loaded(self) -> bool:
        """True once the reference data has been downloaded."""
        return self._data is not None

    async def get_reference_data(self) -> ReferenceData:
        """
        Reference data, downloading it on first use
        :return: Cached reference data
        """
        if self._data is not None:
            return self._data

        if self._pending is None:
            self._pending = asyncio.ensure_future(self._load())

        return await asyncio.shield(self._pending)

    def invalidate(self) -> None:
        """Drop the cached data; the next call downloads again."""
        LOGGER.info("Clearing reference data cache")
        self._data = None
        self._pending = None

    async def _load(self) -> ReferenceData:
        task = asyncio.current_task()
        LOGGER.info("Downloading reference data")
        try:
            catalog, (teams, leagues, nations) = await asyncio.gather(
                self._fetch_catalog(), self._fetch_entities()
            )
        except Exception:
            if self._pending is task:
                self._pending = None
            raise

        data = ReferenceData(players=catalog, teams=teams, leagues=leagues, nations=nations)
        LOGGER.info(
            f"Loaded {len(catalog):,} catalog players, {len(teams):,} clubs, "
            f"{len(leagues):,} leagues, {len(nations):,} nations"
        )

        # An invalidate() while in flight means this result is stale
        if self._pending is task:
            self._data = data
            self._pending = None
        return data

    async def _fetch_catalog(self) -> Dict[int, RawCatalogEntry]:
        cache_buster = int(time.time() * 1000)
        players_json = await self.client.fetch_json(
            f"{constants.EA_STATIC_URL}/players.json?_={cache_buster}"
        )
        return build_catalog(players_json)

    async def _fetch_entities(
        self,
    ) -> Tuple[Dict[int, EntityInfo], Dict[int, EntityInfo], Dict[int, EntityInfo]]:
        query = urllib.parse.urlencode(constants.FUTGG_QUERY_FLAGS)
        core_data = await self.client.fetch_json(f"{constants.FUTGG_API_URL}/?{query}")
        return build_entity_maps(core_data)

"""
Owned players: transfer list, storage and duplicate purchases,
joined against the reference data into one table.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Tuple

from .. import constants
from ..models import ItemCategory, NormalizedPlayer, RawItemRecord
from .reference_provider import ReferenceData, ReferenceDataCache
from .relay_client import RelayClient

LOGGER = logging.getLogger(__name__)

ItemExtractor = Callable[[Dict[str, Any]], List[Dict[str, Any]]]


def _trade_pile_items(response: Dict[str, Any]) -> List[Dict[str, Any]]:
    return [auction["itemData"] for auction in response.get("auctionInfo") or []]


def _item_data(response: Dict[str, Any]) -> List[Dict[str, Any]]:
    return list(response.get("itemData") or [])


@dataclass(frozen=True)
class ItemSource:
    """One owned-items endpoint of the game API."""

    category: ItemCategory
    path: str
    label: str
    extract: ItemExtractor

    @property
    def url(self) -> str:
        """Full upstream URL of this source."""
        return f"{constants.FUT_API_URL}{self.path}"


# Output order of the normalized table
ITEM_SOURCES: Tuple[ItemSource, ...] = (
    ItemSource(ItemCategory.TRANSFER, "/tradepile", "Trade pile", _trade_pile_items),
    ItemSource(ItemCategory.STORAGE, "/storagepile?skuMode=FUT", "Storage", _item_data),
    ItemSource(ItemCategory.DUPLICATED, "/purchased/items", "Duplicated items", _item_data),
)


@dataclass
class NormalizeResult:
    """Normalized players plus a warning for every source that failed."""

    players: List[NormalizedPlayer] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


def normalize_item(
    item: RawItemRecord, category: ItemCategory, reference: ReferenceData
) -> NormalizedPlayer:
    """
    Resolve names and images of a raw item
    :param item: Raw item from the game API
    :param category: Source the item came from
    :param reference: Reference lookups
    :return: Normalized player
    """
    nation = reference.nation(item.nation)
    league = reference.league(item.league_id)
    team = reference.team(item.team_id)

    return NormalizedPlayer(
        asset_id=item.asset_id,
        name=reference.player_name(item.asset_id),
        rating=item.rating,
        position=(
            constants.POSITION_SEPARATOR.join(item.possible_positions)
            or constants.UNKNOWN_NAME
        ),
        nation=nation.name,
        nation_id=item.nation,
        nation_img=nation.img_url,
        league=league.name,
        league_id=item.league_id,
        league_img=league.img_url,
        team=team.name,
        team_id=item.team_id,
        team_img=team.img_url,
        type=category,
    )


class PlayerNormalizer:
    """
    Builds the owned-players table for a session.

    The three sources are fetched concurrently; a source that fails
    after its retries becomes a warning and contributes no rows.
    """

    def __init__(self, client: RelayClient, reference_cache: ReferenceDataCache) -> None:
        self.client = client
        self.reference_cache = reference_cache

    async def normalize(self, session_token: str) -> NormalizeResult:
        """
        Fetch and normalize every owned player item
        :param session_token: Game session id (X-UT-SID)
        :return: Players in source order, plus warnings
        """
        reference = await self.reference_cache.get_reference_data()

        responses = await asyncio.gather(
            *(self.fetch_source(source, session_token) for source in ITEM_SOURCES),
            return_exceptions=True,
        )

        result = NormalizeResult()
        for source, response in zip(ITEM_SOURCES, responses):
            if isinstance(response, BaseException):
                if not isinstance(response, Exception):
                    raise response
                LOGGER.warning(f"{source.label} failed: {response}")
                result.warnings.append(f"{source.label} failed: {response}")
                continue

            for item in response:
                result.players.append(normalize_item(item, source.category, reference))

        LOGGER.info(
            f"Normalized {len(result.players):,} owned players "
            f"({len(result.warnings)} source(s) failed)"
        )
        return result

    async def fetch_source(
        self, source: ItemSource, session_token: str
    ) -> List[RawItemRecord]:
        """
        Raw items of one source
        :param source: Source to fetch
        :param session_token: Game session id
        :return: Raw items in upstream order
        """
        response = await self.client.fetch_with_retry(
            source.url, {constants.SESSION_HEADER: session_token}, source.label
        )
        return [RawItemRecord.model_validate(item) for item in source.extract(response)]

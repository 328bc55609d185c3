"""
Services shared by every dashboard request
"""

import logging
from typing import Optional

from .providers import (
    PlayerNormalizer,
    ReferenceDataCache,
    RelayClient,
    SbcRankingService,
)

LOGGER = logging.getLogger(__name__)


class DashboardContext:
    """
    Owns the HTTP client and both caches (reference data, SBC ranking).
    Build one per process and pass it to whatever needs the data.

    Usage:
        async with DashboardContext() as ctx:
            result = await ctx.normalizer.normalize(sid)
    """

    client: RelayClient
    reference_cache: ReferenceDataCache
    normalizer: PlayerNormalizer
    sbc_service: SbcRankingService

    def __init__(
        self,
        client: Optional[RelayClient] = None,
        sbc_cache_seconds: Optional[float] = None,
    ) -> None:
        self.client = client or RelayClient()
        self.reference_cache = ReferenceDataCache(self.client)
        self.normalizer = PlayerNormalizer(self.client, self.reference_cache)
        self.sbc_service = SbcRankingService(self.client, cache_seconds=sbc_cache_seconds)

    async def __aenter__(self) -> "DashboardContext":
        await self.client.open()
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.client.close()

    def invalidate(self) -> None:
        """Clear the reference data and SBC ranking caches together."""
        self.reference_cache.invalidate()
        self.sbc_service.invalidate()

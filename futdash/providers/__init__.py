"""
Upstream data providers
"""

from .club_provider import ITEM_SOURCES, ItemSource, NormalizeResult, PlayerNormalizer
from .reference_provider import ReferenceData, ReferenceDataCache
from .relay_client import ExhaustedRetriesError, FutdashError, NetworkError, RelayClient
from .sbc_provider import SbcRankingService, wilson_lower_bound

__all__ = [
    "ITEM_SOURCES",
    "ExhaustedRetriesError",
    "FutdashError",
    "ItemSource",
    "NetworkError",
    "NormalizeResult",
    "PlayerNormalizer",
    "ReferenceData",
    "ReferenceDataCache",
    "RelayClient",
    "SbcRankingService",
    "wilson_lower_bound",
]

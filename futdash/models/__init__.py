"""
FUTDash data models
"""

from .base import FutdashModel
from .catalog import (
    UNKNOWN_ENTITY,
    EntityInfo,
    ItemCategory,
    RawCatalogEntry,
    RawItemRecord,
)
from .dashboard import (
    DashboardSummary,
    DashboardView,
    DistributionEntry,
    FilterOption,
    FilterOptions,
    TopItem,
)
from .players import AggregatedPlayer, FilterCriteria, NormalizedPlayer
from .sbc import (
    SBCCategory,
    SBCChallenge,
    SBCChallengeDetail,
    SBCChallengeEligibility,
    SBCChallengesResponse,
    SBCSet,
    SBCSetsResponse,
    SBCVote,
    SBCWithDetails,
)

__all__ = [
    "UNKNOWN_ENTITY",
    "AggregatedPlayer",
    "DashboardSummary",
    "DashboardView",
    "DistributionEntry",
    "EntityInfo",
    "FilterCriteria",
    "FilterOption",
    "FilterOptions",
    "FutdashModel",
    "ItemCategory",
    "NormalizedPlayer",
    "RawCatalogEntry",
    "RawItemRecord",
    "SBCCategory",
    "SBCChallenge",
    "SBCChallengeDetail",
    "SBCChallengeEligibility",
    "SBCChallengesResponse",
    "SBCSet",
    "SBCSetsResponse",
    "SBCVote",
    "SBCWithDetails",
    "TopItem",
]

"""
One refresh of the owned-players dashboard
"""

import logging
from typing import TYPE_CHECKING, Optional

from ..models import DashboardView, FilterCriteria
from .aggregator import aggregate
from .filtering import filter_players
from .statistics import build_filter_options, summarize

if TYPE_CHECKING:
    from ..context import DashboardContext

LOGGER = logging.getLogger(__name__)


async def build_dashboard(
    context: "DashboardContext",
    session_token: str,
    criteria: Optional[FilterCriteria] = None,
) -> DashboardView:
    """
    Fetch, aggregate and filter the owned players of a session
    :param context: Services to fetch with
    :param session_token: Game session id
    :param criteria: Filters to apply, none by default
    :return: Table, filter options, statistics and warnings
    """
    criteria = criteria or FilterCriteria()

    normalized = await context.normalizer.normalize(session_token)
    aggregated = aggregate(normalized.players)
    filtered = filter_players(aggregated, criteria)

    LOGGER.info(
        f"{len(filtered):,} of {len(aggregated):,} distinct cards match the filters"
    )

    return DashboardView(
        players=filtered,
        total_owned=len(normalized.players),
        filter_options=build_filter_options(aggregated),
        summary=summarize(filtered),
        warnings=normalized.warnings,
    )

"""Filter options, headline numbers and chart data for the player table."""

from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .. import constants
from ..models import (
    AggregatedPlayer,
    DashboardSummary,
    DistributionEntry,
    FilterOption,
    FilterOptions,
    ItemCategory,
    TopItem,
)
from ..utils import round_half_up


def _options(pairs: Iterable[Tuple[str, Optional[str]]]) -> List[FilterOption]:
    # First image seen for a name wins
    options: Dict[str, FilterOption] = {}
    for name, img_url in pairs:
        if name not in options:
            options[name] = FilterOption(value=name, label=name, img_url=img_url)
    return sorted(options.values(), key=lambda option: option.label.casefold())


def build_filter_options(players: Sequence[AggregatedPlayer]) -> FilterOptions:
    """
    Every nation, league, team, position and source present in the table
    :param players: Aggregated (unfiltered) players
    :return: Options sorted by label
    """
    positions = sorted(
        {position.strip() for player in players for position in player.positions}
    )
    present_types = {item_type for player in players for item_type in player.types}

    return FilterOptions(
        nations=_options((player.nation, player.nation_img) for player in players),
        leagues=_options((player.league, player.league_img) for player in players),
        teams=_options((player.team, player.team_img) for player in players),
        positions=positions,
        types=[item_type for item_type in ItemCategory if item_type in present_types],
    )


def _top_items(
    pairs: Iterable[Tuple[str, Optional[str]]]
) -> List[TopItem]:
    counts: Dict[str, TopItem] = {}
    for name, img_url in pairs:
        item = counts.get(name)
        if item is None:
            counts[name] = TopItem(name=name, count=1, img_url=img_url)
        else:
            item.count += 1
    return sorted(counts.values(), key=lambda item: item.count, reverse=True)


def rating_distribution(players: Sequence[AggregatedPlayer]) -> List[DistributionEntry]:
    """Unique players per rating bucket."""
    return [
        DistributionEntry(
            label=label,
            count=sum(1 for player in players if minimum <= player.rating <= maximum),
        )
        for label, minimum, maximum in constants.RATING_BUCKETS
    ]


def location_distribution(players: Sequence[AggregatedPlayer]) -> List[DistributionEntry]:
    """Cards per source; a player seen in two sources counts in both."""
    counts = {item_type: 0 for item_type in ItemCategory}
    for player in players:
        for item_type in player.types:
            counts[item_type] += player.copies
    return [
        DistributionEntry(label=item_type.value, count=count)
        for item_type, count in counts.items()
    ]


def summarize(players: Sequence[AggregatedPlayer]) -> DashboardSummary:
    """
    Headline numbers of a (filtered) player table.
    Club, nation and league tops count each unique player once;
    positions count once per eligible position.
    :param players: Filtered players
    :return: Summary
    """
    total_cards = sum(player.copies for player in players)
    average_rating = (
        round_half_up(sum(player.rating * player.copies for player in players) / total_cards)
        if total_cards
        else 0
    )

    return DashboardSummary(
        unique_players=len(players),
        total_cards=total_cards,
        average_rating=average_rating,
        duplicates=sum(player.copies - 1 for player in players if player.copies > 1),
        top_clubs=_top_items((player.team, player.team_img) for player in players),
        top_nations=_top_items((player.nation, player.nation_img) for player in players),
        top_leagues=_top_items((player.league, player.league_img) for player in players),
        top_positions=_top_items(
            (position.strip(), None)
            for player in players
            for position in player.positions
        ),
        rating_distribution=rating_distribution(players),
        location_distribution=location_distribution(players),
    )

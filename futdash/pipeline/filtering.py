"""Apply the user's filters to the aggregated player table."""

from typing import List, Sequence

from ..models import AggregatedPlayer, FilterCriteria


def _passes_criteria(player: AggregatedPlayer, criteria: FilterCriteria) -> bool:
    if player.rating < criteria.rating_min or player.rating > criteria.rating_max:
        return False

    if criteria.positions and not any(
        position in criteria.positions for position in player.positions
    ):
        return False

    if criteria.nations and player.nation not in criteria.nations:
        return False
    if criteria.leagues and player.league not in criteria.leagues:
        return False
    if criteria.teams and player.team not in criteria.teams:
        return False

    if criteria.types and not any(
        item_type in criteria.types for item_type in player.types
    ):
        return False

    if criteria.multiple_copies_only and player.copies < 2:
        return False

    return True


def filter_players(
    players: Sequence[AggregatedPlayer], criteria: FilterCriteria
) -> List[AggregatedPlayer]:
    """
    Players matching every criterion, highest rated first.
    Equal ratings keep their input order. The input is left untouched.
    """
    selected = [player for player in players if _passes_criteria(player, criteria)]
    return sorted(selected, key=lambda player: player.rating, reverse=True)

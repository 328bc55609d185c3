"""Collapse owned copies of the same card into one table row."""

import logging
from typing import Dict, Iterable, List

from ..models import AggregatedPlayer, NormalizedPlayer

LOGGER = logging.getLogger(__name__)


def aggregate(players: Iterable[NormalizedPlayer]) -> List[AggregatedPlayer]:
    """
    Group players by (asset id, rating), counting copies and the
    distinct sources each card was seen in.
    :param players: One normalized record per owned copy
    :return: One row per card, in first-seen order
    """
    by_key: Dict[str, AggregatedPlayer] = {}

    for player in players:
        key = player.aggregation_key
        existing = by_key.get(key)
        if existing is None:
            by_key[key] = AggregatedPlayer(
                **player.model_dump(), copies=1, types=[player.type]
            )
            continue

        existing.copies += 1
        if player.type not in existing.types:
            existing.types.append(player.type)

    LOGGER.debug(f"Aggregated into {len(by_key):,} distinct cards")
    return list(by_key.values())

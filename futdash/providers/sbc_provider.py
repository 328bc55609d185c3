"""
Squad Building Challenges: open sets ranked by community votes.
"""

import asyncio
import logging
import math
import time
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from .. import constants
from ..futdash_config import FutdashConfig
from ..models import (
    SBCChallenge,
    SBCChallengeDetail,
    SBCChallengesResponse,
    SBCSet,
    SBCSetsResponse,
    SBCVote,
    SBCWithDetails,
)
from .relay_client import RelayClient

LOGGER = logging.getLogger(__name__)


def wilson_lower_bound(likes: int, dislikes: int, z: float = constants.WILSON_Z) -> float:
    """
    Lower bound of the Wilson score interval for the like ratio.
    Favors sets with many votes over sets with a few perfect ones.
    :param likes: Positive votes
    :param dislikes: Negative votes
    :param z: Quantile of the confidence level (1.96 = 95%)
    :return: Score in [0, 1], 0 without votes
    """
    total = likes + dislikes
    if total <= 0:
        return 0.0

    phat = likes / total
    z2 = z * z
    return (
        phat
        + z2 / (2 * total)
        - z * math.sqrt((phat * (1 - phat) + z2 / (4 * total)) / total)
    ) / (1 + z2 / total)


def open_sets(sets: Iterable[SBCSet]) -> List[SBCSet]:
    """
    Drop exhausted sets; survivors carry their remaining challenge count
    :param sets: Every set listed by the game
    :return: Sets still worth doing, in upstream order
    """
    return [
        sbc_set.model_copy(update={"challenges_count": sbc_set.challenges_remaining})
        for sbc_set in sets
        if not sbc_set.is_exhausted()
    ]


def rank_sets(sets: Iterable[SBCSet], votes: Dict[int, SBCVote]) -> List[SBCWithDetails]:
    """
    Score every set and sort by descending rank score.
    The sort is stable: equal scores keep upstream order.
    :param sets: Open sets
    :param votes: Vote tallies by set id, missing ids count as no votes
    :return: Ranked sets
    """
    ranked: List[SBCWithDetails] = []
    for sbc_set in sets:
        vote = votes.get(sbc_set.set_id)
        likes = vote.likes if vote else 0
        dislikes = vote.dislikes if vote else 0
        total = likes + dislikes

        ranked.append(
            SBCWithDetails(
                set_id=sbc_set.set_id,
                name=sbc_set.name,
                challenges_count=sbc_set.challenges_count or 0,
                likes=likes,
                dislikes=dislikes,
                like_percent=(likes / total) * 100 if total > 0 else 0.0,
                rank_score=wilson_lower_bound(likes, dislikes),
            )
        )

    return sorted(ranked, key=lambda sbc: sbc.rank_score, reverse=True)


def parse_votes(response: Any) -> Dict[int, SBCVote]:
    """
    Vote tallies from the futnext response
    :param response: List of {"dataId", "likes", "disLikes"}
    :return: Votes by set id
    """
    votes: Dict[int, SBCVote] = {}
    if not isinstance(response, list):
        return votes

    for entry in response:
        try:
            set_id = int(entry.get("dataId"))
        except (TypeError, ValueError):
            continue
        votes[set_id] = SBCVote(
            id=set_id,
            likes=entry.get("likes") or 0,
            dislikes=entry.get("disLikes") or 0,
        )
    return votes


def challenge_detail(challenge: SBCChallenge) -> SBCChallengeDetail:
    """Challenge with the value of its team rating requirement, if any."""
    team_rating = next(
        (
            requirement.eligibility_value
            for requirement in challenge.elg_req
            if requirement.type == constants.TEAM_RATING_REQUIREMENT
        ),
        None,
    )
    return SBCChallengeDetail(
        challenge_id=challenge.challenge_id,
        name=challenge.name,
        formation=challenge.formation,
        team_rating=team_rating,
    )


class SbcRankingService:
    """
    Ranked open SBC sets, cached for a short window.

    A cache hit returns the stored list as is. Callers arriving while a
    ranking is being computed share that computation.
    """

    def __init__(
        self,
        client: RelayClient,
        cache_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.client = client
        self.cache_seconds = (
            FutdashConfig().sbc_cache_seconds if cache_seconds is None else cache_seconds
        )
        self.clock = clock
        self._cache: Optional[Tuple[List[SBCWithDetails], float]] = None
        self._pending: Optional["asyncio.Task[List[SBCWithDetails]]"] = None

    def invalidate(self) -> None:
        """Forget the cached ranking."""
        LOGGER.info("Clearing SBC ranking cache")
        self._cache = None
        self._pending = None

    def cached(self) -> Optional[List[SBCWithDetails]]:
        """Cached ranking if still fresh, else None."""
        if self._cache is None:
            return None
        data, timestamp = self._cache
        if self.clock() - timestamp < self.cache_seconds:
            return data
        return None

    async def rank_sbcs(self, session_token: str) -> List[SBCWithDetails]:
        """
        Open SBC sets, best rated first
        :param session_token: Game session id
        :return: Ranked sets
        """
        data = self.cached()
        if data is not None:
            LOGGER.debug("Using cached SBC ranking")
            return data

        if self._pending is None:
            self._pending = asyncio.ensure_future(self._compute(session_token))

        return await asyncio.shield(self._pending)

    async def _compute(self, session_token: str) -> List[SBCWithDetails]:
        task = asyncio.current_task()
        try:
            sets = open_sets(await self.fetch_sets(session_token))
            if not sets:
                # Not cached, so newly released sets show up on the next call
                LOGGER.info("No open SBC sets")
                return []

            votes = await self.fetch_votes([sbc_set.set_id for sbc_set in sets])
            result = rank_sets(sets, votes)

            # Stale when invalidate() ran while this was in flight
            if self._pending is task:
                self._cache = (result, self.clock())
        finally:
            if self._pending is task:
                self._pending = None

        LOGGER.info(f"Ranked {len(result):,} open SBC sets")
        return result

    async def fetch_sets(self, session_token: str) -> List[SBCSet]:
        """
        Every SBC set, categories flattened
        :param session_token: Game session id
        :return: Sets in upstream order
        """
        response = await self.client.fetch_json(
            f"{constants.FUT_API_URL}/sbs/sets",
            {constants.SESSION_HEADER: session_token},
        )
        parsed = SBCSetsResponse.model_validate(response or {})
        return [sbc_set for category in parsed.categories for sbc_set in category.sets]

    async def fetch_votes(self, set_ids: List[int]) -> Dict[int, SBCVote]:
        """
        Community votes for the given sets, in one request.
        Votes are optional: any failure gives an empty result.
        :param set_ids: Set ids to look up
        :return: Votes by set id
        """
        if not set_ids:
            return {}

        ids = "_".join(str(set_id) for set_id in set_ids)
        try:
            response = await self.client.fetch_json(
                f"{constants.FUTNEXT_API_URL}/vote/votes?ids={ids}&type=sbcSet"
            )
            return parse_votes(response)
        except Exception as error:
            LOGGER.warning(f"SBC votes unavailable, ranking without them: {error}")
            return {}

    async def fetch_challenges(self, session_token: str, set_id: int) -> List[SBCChallenge]:
        """
        Challenges of one set
        :param session_token: Game session id
        :param set_id: SBC set id
        :return: Challenges in upstream order
        """
        response = await self.client.fetch_json(
            f"{constants.FUT_API_URL}/sbs/setId/{set_id}/challenges",
            {constants.SESSION_HEADER: session_token},
        )
        return SBCChallengesResponse.model_validate(response or {}).challenges

    async def sbc_challenge_details(
        self, session_token: str, set_id: int
    ) -> List[SBCChallengeDetail]:
        """
        Challenges of one set with their team rating requirement
        :param session_token: Game session id
        :param set_id: SBC set id
        :return: Challenge details
        """
        challenges = await self.fetch_challenges(session_token, set_id)
        return [challenge_detail(challenge) for challenge in challenges]

"""Squad Building Challenge models."""

from typing import List, Optional

from pydantic import Field

from .base import FutdashModel


class SBCSet(FutdashModel):
    """A set of challenges, as listed by /sbs/sets."""

    set_id: int
    name: str = ""
    description: str = ""
    challenges_count: int = 0
    challenges_completed_count: int = 0
    category_id: int = 0
    repeatable: bool = False
    repeats: int = 0
    times_completed: int = 0

    @property
    def challenges_remaining(self) -> int:
        """Challenges not yet completed in the current run of the set."""
        return self.challenges_count - self.challenges_completed_count

    def is_exhausted(self) -> bool:
        """
        True when nothing is left to do in this set.
        Repeatable sets also need their repeat budget used up.
        """
        if self.repeatable:
            return self.times_completed >= self.repeats and self.challenges_remaining == 0
        return self.challenges_remaining == 0


class SBCCategory(FutdashModel):
    """Category grouping in the /sbs/sets response."""

    category_id: int = 0
    name: str = ""
    sets: List[SBCSet] = Field(default_factory=list)


class SBCSetsResponse(FutdashModel):
    """Response body of /sbs/sets."""

    categories: List[SBCCategory] = Field(default_factory=list)


class SBCVote(FutdashModel):
    """Community like/dislike tally for one set."""

    id: int
    likes: int = 0
    dislikes: int = 0


class SBCWithDetails(FutdashModel):
    """Ranked set, the output of the SBC ranking."""

    set_id: int
    name: str
    challenges_count: int
    likes: int = 0
    dislikes: int = 0
    like_percent: float = 0.0
    rank_score: float = 0.0


class SBCChallengeEligibility(FutdashModel):
    """One eligibility requirement of a challenge."""

    type: str = ""
    eligibility_slot: int = 0
    eligibility_key: int = 0
    eligibility_value: int = 0


class SBCChallenge(FutdashModel):
    """Challenge inside a set, as listed by /sbs/setId/{id}/challenges."""

    challenge_id: int
    name: str = ""
    formation: str = ""
    description: str = ""
    status: str = ""
    elg_req: List[SBCChallengeEligibility] = Field(default_factory=list)


class SBCChallengesResponse(FutdashModel):
    """Response body of /sbs/setId/{id}/challenges."""

    challenges: List[SBCChallenge] = Field(default_factory=list)


class SBCChallengeDetail(FutdashModel):
    """Challenge summary with its minimum team rating, if it has one."""

    challenge_id: int
    name: str
    formation: str
    team_rating: Optional[int] = None

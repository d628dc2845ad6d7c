"""
FinalVote - a judge's final score for a team.
"""

from pydantic import Field

from config import MIN_VOTE, MAX_VOTE
from .base import ValueObject
from .people import Participant
from .team import Team


class FinalVote(ValueObject):
    """One vote per (judge, team) pair, score in [0, 10]."""
    judge: Participant
    team: Team
    score: int = Field(ge=MIN_VOTE, le=MAX_VOTE)

    def same_pair(self, other: "FinalVote") -> bool:
        return self.judge == other.judge and self.team == other.team

    def __str__(self) -> str:
        return f"{self.judge.display_name} -> {self.team.name}: {self.score}"

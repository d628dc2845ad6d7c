"""
Orchestration - operator flags, compensated writes and scoring.
"""

from .controller import HackathonController, compensating
from .outcome import Outcome, attempt
from .projections import DocumentEvaluation, JudgeScore, EventCounts, TeamStanding
from .scoring import Grader, VoteSampler, RandomGrader, RandomVoteSampler

__all__ = [
    "HackathonController",
    "compensating",
    "Outcome",
    "attempt",
    "DocumentEvaluation",
    "JudgeScore",
    "EventCounts",
    "TeamStanding",
    "Grader",
    "VoteSampler",
    "RandomGrader",
    "RandomVoteSampler",
]

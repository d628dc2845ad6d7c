"""
Scoring engine - pure functions over grades and votes.

Denominators are fixed on purpose: progress divides by every available
document slot and the final-vote average divides by the whole judge panel,
so a missing document or vote counts as a zero instead of being skipped.
"""

import math
import random
from typing import Callable, Iterable, Optional, Sequence, TypeVar

from config import (
    EVENT_DURATION_DAYS,
    MAX_DOCUMENTS_PER_DAY,
    FINAL_VOTE_WEIGHT,
    PROGRESS_WEIGHT,
    MIN_DOCUMENT_SCORE,
    MAX_DOCUMENT_SCORE,
    MIN_VOTE,
    MAX_VOTE,
)
from models import Participant

T = TypeVar("T")

# (judge) -> score for one submitted document
Grader = Callable[[Participant], int]
# (judge, team) -> final vote for a missing pair
VoteSampler = Callable[[Participant, object], int]


class RandomGrader:
    """Simulated judge: uniform integer score per document."""

    def __init__(self, rng: Optional[random.Random] = None,
                 low: int = MIN_DOCUMENT_SCORE, high: int = MAX_DOCUMENT_SCORE):
        self._rng = rng or random.Random()
        self.low = low
        self.high = high

    def __call__(self, judge: Participant) -> int:
        return self._rng.randint(self.low, self.high)


class RandomVoteSampler:
    """Simulated final vote for a judge who didn't vote: uniform 0..10."""

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()

    def __call__(self, judge: Participant, team) -> int:
        return self._rng.randint(MIN_VOTE, MAX_VOTE)


def document_slots() -> int:
    """Documents a team can deliver over the whole event."""
    return EVENT_DURATION_DAYS * MAX_DOCUMENTS_PER_DAY


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def mean(values: Sequence[int]) -> float:
    if not values:
        return 0.0
    return sum(values) / len(values)


def document_grade(judge_scores: Sequence[int]) -> int:
    """Mean of the judges' scores, rounded to the nearest integer (halves up)."""
    return round_half_up(mean(judge_scores))


def progress_score(grades: Iterable[int], slots: int = None) -> float:
    """Sum of document grades over all available slots (missing = 0)."""
    slots = document_slots() if slots is None else slots
    if slots <= 0:
        return 0.0
    return sum(grades) / slots


def final_vote_average(scores: Iterable[int], panel_size: int) -> float:
    """Sum of final votes over the whole panel (missing vote = 0)."""
    if panel_size <= 0:
        return 0.0
    return sum(scores) / panel_size


def composite_score(final_average: float, progress: float) -> float:
    """70% final votes + 30% progress, range [0, 10]."""
    return FINAL_VOTE_WEIGHT * final_average + PROGRESS_WEIGHT * progress


def rank(items: Sequence[T], score: Callable[[T], float]) -> list[T]:
    """
    Sort by score, highest first.

    sorted() is stable with reverse=True too, so ties keep the order the
    items were given in.
    """
    return sorted(items, key=score, reverse=True)

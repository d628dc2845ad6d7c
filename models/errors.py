"""
Domain errors.

Every error carries an ErrorKind so callers can branch on the failure
category without matching on exception classes:

- VALIDATION:   malformed input, detected before any mutation
- PRECONDITION: phase/capacity/uniqueness rule violated, nothing mutated
- PERSISTENCE:  the store failed after an in-memory mutation (compensated)
"""

from enum import Enum


class ErrorKind(str, Enum):
    VALIDATION = "VALIDATION"
    PRECONDITION = "PRECONDITION"
    PERSISTENCE = "PERSISTENCE"


class HackathonError(Exception):
    """Base for all hackathon errors."""
    kind: ErrorKind = ErrorKind.PRECONDITION

    @property
    def message(self) -> str:
        return str(self)


class InvalidInput(HackathonError, ValueError):
    """Null, blank or out-of-range input."""
    kind = ErrorKind.VALIDATION


# ============ Preconditions ============

class PreconditionFailed(HackathonError):
    """A domain rule forbids the operation right now."""
    kind = ErrorKind.PRECONDITION


class EventNotInitialised(PreconditionFailed):
    def __init__(self):
        super().__init__("Event not initialised")


class PhaseClosed(PreconditionFailed):
    """Operation attempted outside its calendar window."""
    pass


class CapacityReached(PreconditionFailed):
    """Judges, teams, participants or team size at their limit."""
    pass


class DuplicateEntry(PreconditionFailed):
    """Same judge, participant, team, name or vote already present."""
    pass


class MembershipConflict(PreconditionFailed):
    """Team member not registered, or already on another team."""
    pass


class DailyLimitReached(PreconditionFailed):
    pass


class MinimumNotMet(PreconditionFailed):
    """Not enough judges or teams to start the competition."""
    pass


class NotFound(PreconditionFailed):
    pass


class OperatorGateClosed(PreconditionFailed):
    """Registrations or submissions not enabled by the organizer."""
    pass


# ============ Persistence ============

class PersistenceError(HackathonError):
    """The durable store rejected or failed a write/read."""
    kind = ErrorKind.PERSISTENCE

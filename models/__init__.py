"""
Domain models - the event aggregate and its entities.

Design principles:
- Every entity defined once
- Validation at the boundary (constructors reject malformed input)
- Phase is computed from a reference date, never stored
- Backend-agnostic (repository handles persistence)
"""

from .base import DomainModel, ValueObject
from .errors import (
    ErrorKind,
    HackathonError,
    InvalidInput,
    PreconditionFailed,
    EventNotInitialised,
    PhaseClosed,
    CapacityReached,
    DuplicateEntry,
    MembershipConflict,
    DailyLimitReached,
    MinimumNotMet,
    NotFound,
    OperatorGateClosed,
    PersistenceError,
)
from .venue import Venue
from .phase import Phase
from .people import Participant, Organizer
from .document import ProgressDocument
from .team import Team
from .vote import FinalVote
from .event import Event, Registration

__all__ = [
    # Base
    "DomainModel",
    "ValueObject",
    # Errors
    "ErrorKind",
    "HackathonError",
    "InvalidInput",
    "PreconditionFailed",
    "EventNotInitialised",
    "PhaseClosed",
    "CapacityReached",
    "DuplicateEntry",
    "MembershipConflict",
    "DailyLimitReached",
    "MinimumNotMet",
    "NotFound",
    "OperatorGateClosed",
    "PersistenceError",
    # Calendar
    "Venue",
    "Phase",
    # People
    "Participant",
    "Organizer",
    # Event
    "Event",
    "Registration",
    "Team",
    "ProgressDocument",
    "FinalVote",
]

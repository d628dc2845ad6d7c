"""
Phase - where a given date falls in the event calendar.
"""

from enum import Enum


class Phase(str, Enum):
    """
    Exactly one phase holds for any date:

        BEFORE_REGISTRATION | REGISTRATION_OPEN | DEAD_ZONE | DURING_EVENT | AFTER_EVENT

    DEAD_ZONE is the gap between the last registration day and the start.
    """
    BEFORE_REGISTRATION = "BEFORE_REGISTRATION"
    REGISTRATION_OPEN = "REGISTRATION_OPEN"
    DEAD_ZONE = "DEAD_ZONE"
    DURING_EVENT = "DURING_EVENT"
    AFTER_EVENT = "AFTER_EVENT"

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    Phase.BEFORE_REGISTRATION: "Registrations not open yet",
    Phase.REGISTRATION_OPEN: "Registrations open",
    Phase.DEAD_ZONE: "Registrations closed, waiting for start",
    Phase.DURING_EVENT: "Hackathon in progress",
    Phase.AFTER_EVENT: "Hackathon finished",
}

"""
ProgressDocument - a progress artifact submitted by a team.
"""

from datetime import date, datetime
from typing import Optional

from pydantic import field_validator

from .base import ValueObject, require_text
from .errors import InvalidInput


class ProgressDocument(ValueObject):
    """
    Immutable progress document.

    The timestamp's date is the caller-supplied reference date, not the
    wall clock, so a simulated calendar and real submissions stay aligned.
    Only the time of day is taken from the clock.
    """
    content: str
    timestamp: datetime

    @field_validator("content")
    @classmethod
    def _check_content(cls, v: str) -> str:
        return require_text(v, "Document content not valid")

    @classmethod
    def submitted_on(cls, content: str, today: date, now: Optional[datetime] = None) -> "ProgressDocument":
        """Create a document dated `today` with the current time of day."""
        if today is None:
            raise InvalidInput("Reference date is null")
        clock = now or datetime.now()
        return cls(content=content, timestamp=datetime.combine(today, clock.time()))

    @property
    def day(self) -> date:
        return self.timestamp.date()

    def __str__(self) -> str:
        return f"{self.timestamp.isoformat(timespec='seconds')} - {self.content}"

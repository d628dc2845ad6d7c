"""
Team - a group of registered participants and their progress documents.
"""

from pydantic import Field, field_validator

from .base import DomainModel, require_text
from .people import Participant
from .document import ProgressDocument


class Team(DomainModel):
    """
    A team competing in the event.

    Size limits, registration and exclusivity are enforced by the Event when
    the team is added - the team itself only guarantees no duplicate members.
    Identity is the id.
    """
    id: int = Field(gt=0)
    name: str
    members: list[Participant] = Field(default_factory=list)
    documents: list[ProgressDocument] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def _check_name(cls, v: str) -> str:
        return require_text(v, "Team name not valid")

    @field_validator("members")
    @classmethod
    def _check_unique_members(cls, v: list[Participant]) -> list[Participant]:
        ids = [m.id for m in v]
        if len(ids) != len(set(ids)):
            raise ValueError("Duplicate team member")
        return v

    @property
    def normalized_name(self) -> str:
        """Name used for uniqueness checks: trimmed, upper case."""
        return normalize_team_name(self.name)

    def remove_member(self, participant: Participant) -> None:
        if participant in self.members:
            self.members.remove(participant)

    def has_member(self, participant: Participant) -> bool:
        return participant in self.members

    def append_document(self, document: ProgressDocument) -> None:
        if document is None:
            raise ValueError("Document is null")
        self.documents.append(document)

    def pop_last_document(self) -> None:
        """Rollback helper: drop the most recent document, if any."""
        if self.documents:
            self.documents.pop()

    def documents_on(self, day) -> int:
        return sum(1 for d in self.documents if d.day == day)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Team):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __str__(self) -> str:
        return self.name


def normalize_team_name(name: str) -> str:
    if name is None:
        return ""
    return name.strip().upper()

"""
Repository base classes - define the persistence interface.

One repository per entity type. No transaction spans repositories: the
controller compensates in memory when a write fails. Every failure is
reported as PersistenceError.
"""

from abc import ABC, abstractmethod
from typing import Optional

from models import Participant, Organizer, Team, ProgressDocument, FinalVote


class PersonRepository(ABC):
    """Shared contract for participants and judges."""

    @abstractmethod
    def save(self, person: Participant) -> None:
        """Store a person. Duplicate id or email raises PersistenceError."""
        pass

    @abstractmethod
    def find_by_email(self, email: str) -> Optional[Participant]:
        pass

    @abstractmethod
    def list(self) -> list[Participant]:
        pass

    @abstractmethod
    def delete(self, id: int) -> bool:
        """Delete by id. Returns True if deleted."""
        pass


class ParticipantRepository(PersonRepository):
    """Repository for registered participants."""


class JudgeRepository(PersonRepository):
    """Repository for judges."""


class TeamRepository(ABC):
    """Repository for teams (name and member ids)."""

    @abstractmethod
    def save(self, team: Team) -> None:
        pass

    @abstractmethod
    def get(self, id: int) -> Optional[Team]:
        """Load a team. Documents are stored separately and not included."""
        pass

    @abstractmethod
    def list(self) -> list[Team]:
        pass

    @abstractmethod
    def delete(self, id: int) -> bool:
        pass

    @abstractmethod
    def max_id(self) -> int:
        """Highest stored team id, 0 when empty."""
        pass


class DocumentRepository(ABC):
    """Repository for progress documents."""

    @abstractmethod
    def save(self, team_id: int, document: ProgressDocument) -> None:
        pass

    @abstractmethod
    def list_for_team(self, team_id: int) -> list[ProgressDocument]:
        """Documents of a team, oldest first."""
        pass


class VoteRepository(ABC):
    """Repository for final votes."""

    @abstractmethod
    def save(self, vote: FinalVote) -> None:
        """Store a vote. A second vote for the same pair raises PersistenceError."""
        pass

    @abstractmethod
    def list_for_team(self, team_id: int) -> list[int]:
        """Scores received by a team."""
        pass

    @abstractmethod
    def list_for_judge(self, email: str) -> list[int]:
        """Scores given by a judge."""
        pass


class OrganizerRepository(ABC):
    """Repository for organizers."""

    @abstractmethod
    def save(self, organizer: Organizer) -> None:
        pass

    @abstractmethod
    def get(self, id: int) -> Optional[Organizer]:
        pass


class Repository:
    """
    Aggregate repository - provides access to all entity repositories.

    This is what the controller receives. Backend implementations provide
    concrete versions of each sub-repository.
    """

    @property
    @abstractmethod
    def participants(self) -> ParticipantRepository:
        pass

    @property
    @abstractmethod
    def judges(self) -> JudgeRepository:
        pass

    @property
    @abstractmethod
    def teams(self) -> TeamRepository:
        pass

    @property
    @abstractmethod
    def documents(self) -> DocumentRepository:
        pass

    @property
    @abstractmethod
    def votes(self) -> VoteRepository:
        pass

    @property
    @abstractmethod
    def organizers(self) -> OrganizerRepository:
        pass

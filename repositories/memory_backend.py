"""
In-memory backend - dictionaries, nothing survives the process.

Enforces the same uniqueness rules as the JSON backend so both pass the
repository contract tests.
"""

from typing import Optional

from models import Participant, Organizer, Team, ProgressDocument, FinalVote, PersistenceError
from .base import (
    Repository,
    ParticipantRepository,
    JudgeRepository,
    TeamRepository,
    DocumentRepository,
    VoteRepository,
    OrganizerRepository,
)


class _MemoryPersonStore:
    def __init__(self, label: str):
        self._label = label
        self._rows: dict[int, Participant] = {}

    def save(self, person: Participant) -> None:
        if person.id in self._rows:
            raise PersistenceError(f"{self._label} id already stored: {person.id}")
        if any(p.email == person.email for p in self._rows.values()):
            raise PersistenceError(f"{self._label} email already stored: {person.email}")
        self._rows[person.id] = person

    def find_by_email(self, email: str) -> Optional[Participant]:
        return next((p for p in self._rows.values() if p.email == email), None)

    def list(self) -> list[Participant]:
        return sorted(self._rows.values(), key=lambda p: p.id)

    def delete(self, id: int) -> bool:
        return self._rows.pop(id, None) is not None


class MemoryParticipantRepository(_MemoryPersonStore, ParticipantRepository):
    def __init__(self):
        super().__init__("Participant")


class MemoryJudgeRepository(_MemoryPersonStore, JudgeRepository):
    def __init__(self):
        super().__init__("Judge")


class MemoryTeamRepository(TeamRepository):
    def __init__(self):
        self._rows: dict[int, tuple[str, list[Participant]]] = {}

    def save(self, team: Team) -> None:
        self._rows[team.id] = (team.name, list(team.members))

    def get(self, id: int) -> Optional[Team]:
        row = self._rows.get(id)
        if row is None:
            return None
        name, members = row
        return Team(id=id, name=name, members=list(members))

    def list(self) -> list[Team]:
        return [self.get(id) for id in sorted(self._rows)]

    def delete(self, id: int) -> bool:
        return self._rows.pop(id, None) is not None

    def max_id(self) -> int:
        return max(self._rows, default=0)


class MemoryDocumentRepository(DocumentRepository):
    def __init__(self):
        self._rows: dict[int, list[ProgressDocument]] = {}

    def save(self, team_id: int, document: ProgressDocument) -> None:
        self._rows.setdefault(team_id, []).append(document)

    def list_for_team(self, team_id: int) -> list[ProgressDocument]:
        return sorted(self._rows.get(team_id, []), key=lambda d: d.timestamp)


class MemoryVoteRepository(VoteRepository):
    def __init__(self):
        self._rows: list[FinalVote] = []

    def save(self, vote: FinalVote) -> None:
        if any(v.same_pair(vote) for v in self._rows):
            raise PersistenceError(
                f"Vote already stored for judge {vote.judge.id} and team {vote.team.id}"
            )
        self._rows.append(vote)

    def list_for_team(self, team_id: int) -> list[int]:
        return [v.score for v in self._rows if v.team.id == team_id]

    def list_for_judge(self, email: str) -> list[int]:
        return [v.score for v in self._rows if v.judge.email == email]


class MemoryOrganizerRepository(OrganizerRepository):
    def __init__(self):
        self._rows: dict[int, Organizer] = {}

    def save(self, organizer: Organizer) -> None:
        if organizer.id in self._rows:
            raise PersistenceError(f"Organizer already stored: {organizer.id}")
        self._rows[organizer.id] = organizer

    def get(self, id: int) -> Optional[Organizer]:
        return self._rows.get(id)


class MemoryRepository(Repository):
    """In-memory backend implementation."""

    def __init__(self):
        self._participants = MemoryParticipantRepository()
        self._judges = MemoryJudgeRepository()
        self._teams = MemoryTeamRepository()
        self._documents = MemoryDocumentRepository()
        self._votes = MemoryVoteRepository()
        self._organizers = MemoryOrganizerRepository()

    @property
    def participants(self) -> ParticipantRepository:
        return self._participants

    @property
    def judges(self) -> JudgeRepository:
        return self._judges

    @property
    def teams(self) -> TeamRepository:
        return self._teams

    @property
    def documents(self) -> DocumentRepository:
        return self._documents

    @property
    def votes(self) -> VoteRepository:
        return self._votes

    @property
    def organizers(self) -> OrganizerRepository:
        return self._organizers

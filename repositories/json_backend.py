"""
JSON file backend - stores data as JSON/JSONL files.

Directory structure:
    {base}/
        participants.json   - Registered participants
        judges.json         - Judge panel
        organizers.json     - Organizers
        teams.json          - Teams (name + member ids)
        documents.jsonl     - Progress documents (append-only)
        votes.jsonl         - Final votes (append-only)

Any I/O or decoding failure surfaces as PersistenceError.
"""

import json
import threading
from pathlib import Path
from typing import Optional

from config import DATA_DIR
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


class WriteQueue:
    """Thread-safe write serialization."""

    def __init__(self):
        self._lock = threading.Lock()

    def write_json(self, path: Path, data) -> None:
        """Atomic JSON write."""
        with self._lock:
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
                temp = path.with_suffix(".json.tmp")
                with open(temp, "w") as f:
                    json.dump(data, f, indent=2, default=str)
                temp.replace(path)
            except OSError as e:
                raise PersistenceError(f"Write failed for {path.name}: {e}") from e

    def append_jsonl(self, path: Path, data: dict) -> None:
        """Append to JSONL file."""
        with self._lock:
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
                with open(path, "a") as f:
                    f.write(json.dumps(data, default=str) + "\n")
            except OSError as e:
                raise PersistenceError(f"Append failed for {path.name}: {e}") from e


_write_queue = WriteQueue()


def _read_json(path: Path, default):
    if not path.exists():
        return default
    try:
        with open(path) as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise PersistenceError(f"Corrupt or unreadable {path.name}: {e}") from e


def _iter_jsonl(path: Path):
    if not path.exists():
        return
    try:
        with open(path) as f:
            for line_num, line in enumerate(f, 1):
                line = line.strip()
                if not line:
                    continue
                try:
                    yield json.loads(line)
                except json.JSONDecodeError as e:
                    print(f"[WARN] Corrupt line {line_num} in {path.name}: {e}")
    except OSError as e:
        raise PersistenceError(f"Unreadable {path.name}: {e}") from e


class _JsonPersonStore:
    """Participants and judges share one layout: a JSON list of rows."""

    def __init__(self, path: Path, label: str):
        self._path = path
        self._label = label

    def _load(self) -> list[dict]:
        return _read_json(self._path, [])

    def save(self, person: Participant) -> None:
        rows = self._load()
        if any(r["id"] == person.id for r in rows):
            raise PersistenceError(f"{self._label} id already stored: {person.id}")
        if any(r["email"] == person.email for r in rows):
            raise PersistenceError(f"{self._label} email already stored: {person.email}")
        rows.append(person.model_dump(mode="json"))
        _write_queue.write_json(self._path, rows)

    def find_by_email(self, email: str) -> Optional[Participant]:
        for row in self._load():
            if row["email"] == email:
                return Participant.model_validate(row)
        return None

    def list(self) -> list[Participant]:
        people = [Participant.model_validate(r) for r in self._load()]
        return sorted(people, key=lambda p: p.id)

    def delete(self, id: int) -> bool:
        rows = self._load()
        kept = [r for r in rows if r["id"] != id]
        if len(kept) == len(rows):
            return False
        _write_queue.write_json(self._path, kept)
        return True


class JsonParticipantRepository(_JsonPersonStore, ParticipantRepository):
    def __init__(self, base_path: Path):
        super().__init__(base_path / "participants.json", "Participant")


class JsonJudgeRepository(_JsonPersonStore, JudgeRepository):
    def __init__(self, base_path: Path):
        super().__init__(base_path / "judges.json", "Judge")


class JsonTeamRepository(TeamRepository):
    """
    Teams are stored with their members inline so a team can be rebuilt
    without joining the participants file.
    """

    def __init__(self, base_path: Path):
        self._path = base_path / "teams.json"

    def _load(self) -> list[dict]:
        return _read_json(self._path, [])

    def save(self, team: Team) -> None:
        rows = [r for r in self._load() if r["id"] != team.id]
        rows.append({
            "id": team.id,
            "name": team.name,
            "members": [m.model_dump(mode="json") for m in team.members],
        })
        _write_queue.write_json(self._path, sorted(rows, key=lambda r: r["id"]))

    def get(self, id: int) -> Optional[Team]:
        for row in self._load():
            if row["id"] == id:
                return Team.model_validate(row)
        return None

    def list(self) -> list[Team]:
        return [Team.model_validate(r) for r in self._load()]

    def delete(self, id: int) -> bool:
        rows = self._load()
        kept = [r for r in rows if r["id"] != id]
        if len(kept) == len(rows):
            return False
        _write_queue.write_json(self._path, kept)
        return True

    def max_id(self) -> int:
        return max((r["id"] for r in self._load()), default=0)


class JsonDocumentRepository(DocumentRepository):
    def __init__(self, base_path: Path):
        self._path = base_path / "documents.jsonl"

    def save(self, team_id: int, document: ProgressDocument) -> None:
        _write_queue.append_jsonl(self._path, {"team_id": team_id, **document.model_dump(mode="json")})

    def list_for_team(self, team_id: int) -> list[ProgressDocument]:
        docs = [
            ProgressDocument.model_validate(row)
            for row in _iter_jsonl(self._path)
            if row.get("team_id") == team_id
        ]
        return sorted(docs, key=lambda d: d.timestamp)


class JsonVoteRepository(VoteRepository):
    def __init__(self, base_path: Path):
        self._path = base_path / "votes.jsonl"

    def save(self, vote: FinalVote) -> None:
        for row in _iter_jsonl(self._path):
            if row["judge_id"] == vote.judge.id and row["team_id"] == vote.team.id:
                raise PersistenceError(
                    f"Vote already stored for judge {vote.judge.id} and team {vote.team.id}"
                )
        _write_queue.append_jsonl(self._path, {
            "judge_id": vote.judge.id,
            "judge_email": vote.judge.email,
            "team_id": vote.team.id,
            "score": vote.score,
        })

    def list_for_team(self, team_id: int) -> list[int]:
        return [row["score"] for row in _iter_jsonl(self._path) if row["team_id"] == team_id]

    def list_for_judge(self, email: str) -> list[int]:
        return [row["score"] for row in _iter_jsonl(self._path) if row["judge_email"] == email]


class JsonOrganizerRepository(OrganizerRepository):
    def __init__(self, base_path: Path):
        self._path = base_path / "organizers.json"

    def save(self, organizer: Organizer) -> None:
        rows = _read_json(self._path, [])
        if any(r["id"] == organizer.id for r in rows):
            raise PersistenceError(f"Organizer already stored: {organizer.id}")
        rows.append(organizer.model_dump(mode="json"))
        _write_queue.write_json(self._path, rows)

    def get(self, id: int) -> Optional[Organizer]:
        for row in _read_json(self._path, []):
            if row["id"] == id:
                return Organizer.model_validate(row)
        return None


class JsonRepository(Repository):
    """JSON file backend implementation."""

    def __init__(self, base_path: Path = None):
        self._base_path = base_path or DATA_DIR
        self._participants = JsonParticipantRepository(self._base_path)
        self._judges = JsonJudgeRepository(self._base_path)
        self._teams = JsonTeamRepository(self._base_path)
        self._documents = JsonDocumentRepository(self._base_path)
        self._votes = JsonVoteRepository(self._base_path)
        self._organizers = JsonOrganizerRepository(self._base_path)

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

"""
Event - the root aggregate: calendar windows and cross-entity invariants.
"""

from datetime import date, timedelta
from typing import Optional

from pydantic import Field, PrivateAttr, model_validator

from config import (
    EVENT_DURATION_DAYS,
    REGISTRATION_WINDOW_DAYS,
    REGISTRATION_CLOSE_OFFSET_DAYS,
    MAX_TEAMS,
    MAX_DOCUMENTS_PER_DAY,
    JUDGE_PANEL_SIZE,
)
from .base import ValueObject, require_text
from .venue import Venue
from .phase import Phase
from .people import Participant, Organizer
from .team import Team
from .document import ProgressDocument
from .errors import (
    InvalidInput,
    PhaseClosed,
    CapacityReached,
    DuplicateEntry,
    MembershipConflict,
    DailyLimitReached,
    NotFound,
    PreconditionFailed,
)


class Registration:
    """
    Association between a participant and an event.

    Identity is the (participant, event) pair. Immutable.
    """
    __slots__ = ("_participant", "_event")

    def __init__(self, participant: Participant, event: "Event"):
        if participant is None:
            raise InvalidInput("Participant is null")
        if event is None:
            raise InvalidInput("Event is null")
        self._participant = participant
        self._event = event

    @property
    def participant(self) -> Participant:
        return self._participant

    @property
    def event(self) -> "Event":
        return self._event

    def __eq__(self, other) -> bool:
        if not isinstance(other, Registration):
            return NotImplemented
        return self._participant == other._participant and self._event is other._event

    def __hash__(self) -> int:
        return hash((self._participant.id, id(self._event)))

    def __repr__(self) -> str:
        return f"Registration({self._participant} -> {self._event.title})"


class Event(ValueObject):
    """
    A hackathon.

    Scalar fields are frozen after construction. Judges, registrations,
    teams and the problem statement are owned here and only change through
    the methods below, which enforce:

    - registrations only inside the 2-day window ending 3 days before start
    - at most MAX_TEAMS teams, names unique ignoring case and whitespace
    - team members registered and on at most one team
    - documents only during the event, after the problem is published,
      at most MAX_DOCUMENTS_PER_DAY per team per day

    Phase is never stored; it is recomputed from the reference date.
    """
    title: str
    venue: Venue
    start_date: date
    end_date: date
    max_team_size: int = Field(gt=0)
    organizer: Organizer

    _judges: list[Participant] = PrivateAttr(default_factory=list)
    _registrations: list[Registration] = PrivateAttr(default_factory=list)
    _teams: list[Team] = PrivateAttr(default_factory=list)
    _problem_statement: Optional[str] = PrivateAttr(default=None)

    @model_validator(mode="after")
    def _check_calendar(self) -> "Event":
        require_text(self.title, "Title not valid")
        if self.end_date < self.start_date:
            raise ValueError("Dates not valid: end before start")
        duration = (self.end_date - self.start_date).days + 1
        if duration != EVENT_DURATION_DAYS:
            raise ValueError(f"Event duration not valid: must be {EVENT_DURATION_DAYS} days")
        return self

    # ------------------------------------------------------------------ #
    #  Derived values
    # ------------------------------------------------------------------ #

    @property
    def max_participants(self) -> int:
        return MAX_TEAMS * self.max_team_size

    @property
    def max_teams(self) -> int:
        return MAX_TEAMS

    @property
    def duration_days(self) -> int:
        return EVENT_DURATION_DAYS

    @property
    def max_documents_per_day(self) -> int:
        return MAX_DOCUMENTS_PER_DAY

    @property
    def judges(self) -> tuple[Participant, ...]:
        return tuple(self._judges)

    @property
    def registrations(self) -> tuple[Registration, ...]:
        return tuple(self._registrations)

    @property
    def participants(self) -> tuple[Participant, ...]:
        return tuple(r.participant for r in self._registrations)

    @property
    def teams(self) -> tuple[Team, ...]:
        return tuple(self._teams)

    @property
    def problem_statement(self) -> Optional[str]:
        return self._problem_statement

    # ------------------------------------------------------------------ #
    #  Calendar
    # ------------------------------------------------------------------ #

    @property
    def registration_close(self) -> date:
        """Last day registrations are accepted."""
        return self.start_date - timedelta(days=REGISTRATION_CLOSE_OFFSET_DAYS)

    @property
    def registration_open(self) -> date:
        """First day registrations are accepted."""
        return self.registration_close - timedelta(days=REGISTRATION_WINDOW_DAYS - 1)

    def is_registration_open(self, today: date) -> bool:
        _require_date(today)
        return self.registration_open <= today <= self.registration_close

    def is_during_event(self, today: date) -> bool:
        _require_date(today)
        return self.start_date <= today <= self.end_date

    def is_voting_allowed(self, today: date) -> bool:
        _require_date(today)
        return today >= self.end_date

    def phase(self, today: date) -> Phase:
        _require_date(today)
        if today < self.registration_open:
            return Phase.BEFORE_REGISTRATION
        if self.is_registration_open(today):
            return Phase.REGISTRATION_OPEN
        if today < self.start_date:
            return Phase.DEAD_ZONE
        if self.is_during_event(today):
            return Phase.DURING_EVENT
        return Phase.AFTER_EVENT

    # ------------------------------------------------------------------ #
    #  Judges
    # ------------------------------------------------------------------ #

    def add_judge(self, judge: Participant) -> None:
        if judge is None:
            raise InvalidInput("Judge is null")
        if len(self._judges) >= JUDGE_PANEL_SIZE:
            raise CapacityReached(f"Judge panel full ({JUDGE_PANEL_SIZE})")
        if judge in self._judges:
            raise DuplicateEntry(f"Judge already present: {judge}")
        self._judges.append(judge)

    def remove_judge(self, judge: Participant) -> None:
        if judge in self._judges:
            self._judges.remove(judge)

    def find_judge(self, judge_id: int) -> Optional[Participant]:
        return next((j for j in self._judges if j.id == judge_id), None)

    def is_judge(self, participant: Participant) -> bool:
        return participant in self._judges

    # ------------------------------------------------------------------ #
    #  Registrations
    # ------------------------------------------------------------------ #

    def register_participant(self, participant: Participant, today: date) -> Registration:
        if participant is None:
            raise InvalidInput("Participant is null")
        if not self.is_registration_open(today):
            raise PhaseClosed(
                f"Registrations closed. Window: {self.registration_open} -> {self.registration_close}"
            )
        if len(self._registrations) >= self.max_participants:
            raise CapacityReached(f"Event full: max participants reached ({self.max_participants})")
        if self.is_registered(participant):
            raise DuplicateEntry(f"Participant already registered: {participant}")

        registration = Registration(participant, self)
        self._registrations.append(registration)
        return registration

    def remove_registration(self, participant: Participant) -> None:
        if participant is None:
            return
        self._registrations[:] = [r for r in self._registrations if r.participant != participant]

    def is_registered(self, participant: Participant) -> bool:
        if participant is None:
            return False
        return any(r.participant == participant for r in self._registrations)

    def find_participant(self, participant_id: int) -> Optional[Participant]:
        return next((p for p in self.participants if p.id == participant_id), None)

    # ------------------------------------------------------------------ #
    #  Teams
    # ------------------------------------------------------------------ #

    def add_team(self, team: Team, today: date) -> None:
        if team is None:
            raise InvalidInput("Team is null")
        if len(self._teams) >= MAX_TEAMS:
            raise CapacityReached(f"Maximum number of teams reached ({MAX_TEAMS})")
        if any(t.normalized_name == team.normalized_name for t in self._teams):
            raise DuplicateEntry(f"Team name already in use: {team.name}")
        if not self.is_registration_open(today):
            raise PhaseClosed("Teams can't be created after registrations close")
        if team in self._teams:
            raise DuplicateEntry("Team already present")
        if not team.members:
            raise InvalidInput("Team has no members")
        if len(team.members) > self.max_team_size:
            raise CapacityReached(f"Team too large (max {self.max_team_size})")

        for member in team.members:
            if not self.is_registered(member):
                raise MembershipConflict(f"Member not registered to the event: {member}")
            if self.team_of(member) is not None:
                raise MembershipConflict(f"Participant already in a team: {member}")

        self._teams.append(team)

    def remove_team(self, team: Team) -> None:
        if team in self._teams:
            self._teams.remove(team)

    def team_of(self, participant: Participant) -> Optional[Team]:
        if participant is None:
            return None
        return next((t for t in self._teams if t.has_member(participant)), None)

    def find_team(self, team_id: int) -> Optional[Team]:
        return next((t for t in self._teams if t.id == team_id), None)

    def has_team(self, team: Team) -> bool:
        return team in self._teams

    # ------------------------------------------------------------------ #
    #  Problem & documents
    # ------------------------------------------------------------------ #

    def publish_problem(self, text: str, today: date) -> None:
        """Publish (or overwrite) the problem statement, from the start date on."""
        if text is None or not text.strip():
            raise InvalidInput("Problem statement not valid")
        _require_date(today)
        if today < self.start_date:
            raise PhaseClosed("The problem can only be published from the start of the hackathon")
        self._problem_statement = text

    def upload_document(self, team: Team, document: ProgressDocument, today: date) -> None:
        if team is None:
            raise InvalidInput("Team is null")
        if document is None:
            raise InvalidInput("Document is null")
        if not self.has_team(team):
            raise NotFound(f"Team not registered: {team.name}")
        if not self.is_during_event(today):
            raise PhaseClosed("Documents can only be uploaded during the hackathon")
        if self._problem_statement is None:
            raise PreconditionFailed("The problem has not been published yet")
        if team.documents_on(today) >= MAX_DOCUMENTS_PER_DAY:
            raise DailyLimitReached(
                f"Daily limit reached: max {MAX_DOCUMENTS_PER_DAY} documents per day per team"
            )
        team.append_document(document)

    def __str__(self) -> str:
        return f"{self.title} ({self.venue}) {self.start_date} -> {self.end_date}"


def _require_date(today: date) -> None:
    if today is None:
        raise InvalidInput("Reference date is null")

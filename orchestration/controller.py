"""
HackathonController - keeps the in-memory event and the store consistent.

Every write follows the same sequence:

    1. resynchronize the operator flag against `today`
    2. check operator-level preconditions (flag set, full panel, min teams)
    3. mutate the Event aggregate
    4. persist through the injected repository
    5. if persisting fails, apply the exact inverse mutation and re-raise

so the aggregate never shows a write the store doesn't have. Final votes
and per-document grades are applied business state and live here, not on
the Event.
"""

from contextlib import contextmanager
from datetime import date, datetime
from typing import Callable, Optional, Union

from config import JUDGE_PANEL_SIZE, MIN_TEAMS_TO_START
from models import (
    Event,
    Venue,
    Phase,
    Participant,
    Organizer,
    Team,
    ProgressDocument,
    FinalVote,
    Registration,
    InvalidInput,
    EventNotInitialised,
    PhaseClosed,
    CapacityReached,
    DuplicateEntry,
    MinimumNotMet,
    NotFound,
    OperatorGateClosed,
)
from repositories.base import Repository
from . import scoring, reports
from .scoring import Grader, VoteSampler, RandomGrader, RandomVoteSampler
from .projections import DocumentEvaluation, JudgeScore, EventCounts, TeamStanding


@contextmanager
def compensating(undo: Callable[[], None], action: str):
    """
    Wrap a persistence call: on any failure run `undo`, then re-raise.

    Usage:
        event.add_judge(judge)
        with compensating(lambda: event.remove_judge(judge), "add judge"):
            repo.judges.save(judge)
    """
    try:
        yield
    except Exception as e:
        print(f"[ROLLBACK] {action} failed, reverting: {e}")
        undo()
        raise


class HackathonController:
    """
    Application controller for one event.

    Args:
        repository:   persistence collaborator (any Repository backend)
        grader:       per-judge document score, defaults to uniform 1..10
        vote_sampler: final vote for missing (judge, team) pairs, defaults to uniform 0..10
        clock:        wall clock used only for a document's time of day
    """

    def __init__(self, repository: Repository, grader: Grader = None,
                 vote_sampler: VoteSampler = None,
                 clock: Callable[[], datetime] = datetime.now):
        self._repo = repository
        self._grader = grader or RandomGrader()
        self._vote_sampler = vote_sampler or RandomVoteSampler()
        self._clock = clock

        self._event: Optional[Event] = None
        self._registrations_open = False
        self._submissions_enabled = False
        self._final_votes: list[FinalVote] = []
        self._document_grades: dict[int, list[int]] = {}

    # ------------------------------------------------------------------ #
    #  Event
    # ------------------------------------------------------------------ #

    def create_event(self, title: str, venue: Union[Venue, str], start_date: date,
                     end_date: date, max_team_size: int, organizer: Organizer) -> Event:
        """
        Build the event and reset all controller state.

        Saving the organizer is best-effort: a duplicate or an unreachable
        store doesn't stop the event from being created.
        """
        if organizer is None:
            raise InvalidInput("Organizer is null")
        if isinstance(venue, str):
            venue = Venue.from_name(venue)

        self._event = Event(
            title=title,
            venue=venue,
            start_date=start_date,
            end_date=end_date,
            max_team_size=max_team_size,
            organizer=organizer,
        )
        self._registrations_open = False
        self._submissions_enabled = False
        self._final_votes = []
        self._document_grades = {}

        try:
            self._repo.organizers.save(organizer)
        except Exception as e:
            print(f"[WARN] Organizer not stored (continuing): {e}")

        return self._event

    @property
    def event(self) -> Event:
        if self._event is None:
            raise EventNotInitialised()
        return self._event

    def verify_organizer(self, password: str) -> bool:
        return self.event.organizer.check_password(password)

    # ------------------------------------------------------------------ #
    #  Operator flags
    # ------------------------------------------------------------------ #

    def sync_registrations(self, today: date) -> None:
        """Force the registrations flag off outside the registration window."""
        if not self.event.is_registration_open(today):
            self._registrations_open = False

    def sync_submissions(self, today: date) -> None:
        """Force the submissions flag off outside the event days."""
        if not self.event.is_during_event(today):
            self._submissions_enabled = False

    def open_registrations(self, today: date) -> None:
        event = self.event
        self.sync_registrations(today)
        if len(event.judges) < JUDGE_PANEL_SIZE:
            raise MinimumNotMet(
                f"Registrations can't open until {JUDGE_PANEL_SIZE} judges are registered "
                f"(current: {len(event.judges)})"
            )
        if not event.is_registration_open(today):
            raise PhaseClosed(
                f"Registrations can only be opened between "
                f"{event.registration_open} and {event.registration_close}"
            )
        self._registrations_open = True

    def close_registrations(self) -> None:
        self._registrations_open = False

    def registrations_open(self, today: date) -> bool:
        self.sync_registrations(today)
        return self._registrations_open

    def enable_submissions(self, today: date) -> None:
        event = self.event
        self.sync_submissions(today)
        if not event.is_during_event(today):
            raise PhaseClosed(
                f"Submissions can only be enabled during the hackathon "
                f"({event.start_date} -> {event.end_date})"
            )
        self._require_min_judges()
        self._require_min_teams()
        self._submissions_enabled = True

    def disable_submissions(self) -> None:
        self._submissions_enabled = False

    def submissions_enabled(self, today: date) -> bool:
        self.sync_submissions(today)
        return self._submissions_enabled

    # ------------------------------------------------------------------ #
    #  Judges
    # ------------------------------------------------------------------ #

    def can_add_judge(self) -> bool:
        return len(self.event.judges) < JUDGE_PANEL_SIZE

    def add_judge(self, judge: Participant) -> None:
        event = self.event
        if not self.can_add_judge():
            raise CapacityReached(f"Maximum number of judges reached ({JUDGE_PANEL_SIZE})")

        event.add_judge(judge)
        with compensating(lambda: event.remove_judge(judge), "add judge"):
            self._repo.judges.save(judge)

    def delete_judge(self, judge_id: int) -> None:
        """Remove a judge from store and panel, dropping the judge's final votes."""
        event = self.event
        if judge_id is None or judge_id <= 0:
            raise InvalidInput("Judge id not valid")
        judge = event.find_judge(judge_id)
        if judge is None:
            raise NotFound(f"Judge not found (id={judge_id})")

        self._repo.judges.delete(judge_id)
        event.remove_judge(judge)
        self._final_votes = [v for v in self._final_votes if v.judge.id != judge_id]

    # ------------------------------------------------------------------ #
    #  Participants
    # ------------------------------------------------------------------ #

    def register_participant(self, participant: Participant, today: date) -> Registration:
        event = self.event
        self.sync_registrations(today)
        if not self._registrations_open:
            raise OperatorGateClosed("Registrations not opened by the organizer")

        registration = event.register_participant(participant, today)
        with compensating(lambda: event.remove_registration(participant), "register participant"):
            self._repo.participants.save(participant)
        return registration

    def delete_participant(self, participant_id: int) -> None:
        """
        Remove a participant from store and event.

        The participant leaves every team; teams left empty are dropped.
        Each team change reaches the store before the event sees it.
        """
        event = self.event
        if participant_id is None or participant_id <= 0:
            raise InvalidInput("Participant id not valid")
        participant = event.find_participant(participant_id)
        if participant is None:
            raise NotFound(f"Participant not found (id={participant_id})")

        self._repo.participants.delete(participant_id)
        with compensating(lambda: self._repo.participants.save(participant), "delete participant"):
            for team in event.teams:
                if not team.has_member(participant):
                    continue
                remaining = [m for m in team.members if m != participant]
                if remaining:
                    self._repo.teams.save(Team(id=team.id, name=team.name, members=remaining))
                    team.remove_member(participant)
                else:
                    self._repo.teams.delete(team.id)
                    event.remove_team(team)
        event.remove_registration(participant)

    # ------------------------------------------------------------------ #
    #  Teams
    # ------------------------------------------------------------------ #

    def add_team(self, name: str, members: list[Participant], today: date) -> Team:
        """Create a team with a collision-free id and persist it."""
        event = self.event
        self.sync_registrations(today)
        if not self._registrations_open:
            raise OperatorGateClosed("Registrations not opened by the organizer")

        team = Team(id=self._next_team_id(), name=name, members=list(members or []))
        event.add_team(team, today)
        with compensating(lambda: event.remove_team(team), "add team"):
            self._repo.teams.save(team)
        return team

    def _next_team_id(self) -> int:
        """max(in-memory max, stored max) + 1; the store lookup is best-effort."""
        max_memory = max((t.id for t in self.event.teams), default=0)
        try:
            max_stored = self._repo.teams.max_id()
        except Exception as e:
            print(f"[WARN] Could not read max team id from store, using memory only: {e}")
            max_stored = 0
        return max(max_memory, max_stored) + 1

    # ------------------------------------------------------------------ #
    #  Problem & documents
    # ------------------------------------------------------------------ #

    def publish_problem(self, text: str, today: date) -> None:
        event = self.event
        self._require_min_judges()
        self._require_min_teams()
        event.publish_problem(text, today)

    def upload_document(self, team: Team, content: str, today: date) -> DocumentEvaluation:
        """
        Upload a progress document, then have each judge grade it.

        The grade is the rounded mean of the judges' scores and counts
        towards the team's progress score.
        """
        event = self.event
        if team is None:
            raise InvalidInput("Team is null")
        document = ProgressDocument.submitted_on(content, today, now=self._clock())

        self.sync_submissions(today)
        if not self._submissions_enabled:
            raise OperatorGateClosed("Document submissions not enabled by the organizer")
        self._require_min_judges()
        self._require_min_teams()

        # Operate on the event's own instance, callers may hold a copy
        target = event.find_team(team.id) or team
        event.upload_document(target, document, today)
        with compensating(target.pop_last_document, "upload document"):
            scores = [JudgeScore(judge=j.display_name, score=self._grader(j)) for j in event.judges]
            self._repo.documents.save(target.id, document)

        values = [s.score for s in scores]
        grade = scoring.document_grade(values)
        self._document_grades.setdefault(target.id, []).append(grade)

        return DocumentEvaluation(
            team_id=target.id,
            team_name=target.name,
            scores=scores,
            mean=scoring.mean(values),
            grade=grade,
            delivered=self.documents_delivered(target),
            slots=self.document_slots(),
        )

    # ------------------------------------------------------------------ #
    #  Final votes
    # ------------------------------------------------------------------ #

    @property
    def final_votes(self) -> tuple[FinalVote, ...]:
        return tuple(self._final_votes)

    def cast_final_vote(self, judge: Participant, team: Team, score: int, today: date) -> FinalVote:
        event = self.event
        if judge is None:
            raise InvalidInput("Judge is null")
        if team is None:
            raise InvalidInput("Team is null")
        if not event.is_judge(judge):
            raise InvalidInput(f"Judge not on the event panel: {judge}")
        target = event.find_team(team.id)
        if target is None:
            raise InvalidInput(f"Team not registered to the event: {team.name}")
        vote = FinalVote(judge=judge, team=target, score=score)

        if not event.is_voting_allowed(today):
            raise PhaseClosed("Voting not possible yet (hackathon not finished)")
        if self._has_vote(judge, target):
            raise DuplicateEntry("A vote already exists for this judge and team")

        self._final_votes.append(vote)
        with compensating(lambda: self._final_votes.remove(vote), "cast final vote"):
            self._repo.votes.save(vote)
        return vote

    def simulate_missing_votes(self, today: date) -> int:
        """Cast a sampled vote for every (judge, team) pair still missing one."""
        event = self.event
        self._require_min_judges()
        self._require_min_teams()
        if not event.is_voting_allowed(today):
            raise PhaseClosed("Voting not possible yet (hackathon not finished)")

        cast = 0
        for judge in event.judges:
            for team in event.teams:
                if self._has_vote(judge, team):
                    continue
                self.cast_final_vote(judge, team, self._vote_sampler(judge, team), today)
                cast += 1
        return cast

    def final_votes_report(self, today: date) -> str:
        """Fill in missing votes, then report votes and scores per team."""
        self.simulate_missing_votes(today)
        rows = [self._standing(team, position=0) for team in self.event.teams]
        return reports.final_votes_report(today, rows)

    def _has_vote(self, judge: Participant, team: Team) -> bool:
        return any(v.judge == judge and v.team == team for v in self._final_votes)

    # ------------------------------------------------------------------ #
    #  Scores & projections
    # ------------------------------------------------------------------ #

    def phase(self, today: date) -> Phase:
        return self.event.phase(today)

    def phase_label(self, today: date) -> str:
        return self.phase(today).label

    def counts(self) -> EventCounts:
        event = self.event
        return EventCounts(
            judges=len(event.judges),
            judge_panel_size=JUDGE_PANEL_SIZE,
            teams=len(event.teams),
            max_teams=event.max_teams,
            min_teams=MIN_TEAMS_TO_START,
            participants=len(event.registrations),
            max_participants=event.max_participants,
        )

    def document_slots(self) -> int:
        return scoring.document_slots()

    def documents_delivered(self, team: Team) -> int:
        if team is None:
            return 0
        return len(self._document_grades.get(team.id, []))

    def documents_missing(self, team: Team) -> int:
        return max(0, self.document_slots() - self.documents_delivered(team))

    def document_grades(self, team: Team) -> list[int]:
        if team is None:
            return []
        return list(self._document_grades.get(team.id, []))

    def progress_score(self, team: Team) -> float:
        return scoring.progress_score(self.document_grades(team), self.document_slots())

    def votes_for(self, team: Team) -> list[int]:
        return [v.score for v in self._final_votes if v.team == team]

    def final_vote_average(self, team: Team) -> float:
        return scoring.final_vote_average(self.votes_for(team), len(self.event.judges))

    def composite_score(self, team: Team) -> float:
        return scoring.composite_score(self.final_vote_average(team), self.progress_score(team))

    def standings(self, today: date) -> list[TeamStanding]:
        """Teams by composite score, highest first; ties keep registration order."""
        event = self.event
        if not event.is_voting_allowed(today):
            raise PhaseClosed("Ranking not available: hackathon not finished")
        self._require_min_judges()
        self._require_min_teams()

        ranked = scoring.rank(list(event.teams), self.composite_score)
        return [self._standing(team, position=i) for i, team in enumerate(ranked, 1)]

    def ranking_report(self, today: date) -> str:
        return reports.ranking_report(self.event, self.standings(today), MIN_TEAMS_TO_START)

    def team_summary(self, team: Team) -> str:
        if team is None:
            raise InvalidInput("Team is null")
        return reports.team_summary(self.event.find_team(team.id) or team)

    def _standing(self, team: Team, position: int) -> TeamStanding:
        return TeamStanding(
            position=position,
            team_id=team.id,
            team_name=team.name,
            votes=self.votes_for(team),
            final_vote_average=self.final_vote_average(team),
            progress_score=self.progress_score(team),
            composite_score=self.composite_score(team),
            documents_delivered=self.documents_delivered(team),
            document_slots=self.document_slots(),
        )

    # ------------------------------------------------------------------ #
    #  Guards
    # ------------------------------------------------------------------ #

    def _require_min_judges(self) -> None:
        n = len(self.event.judges)
        if n < JUDGE_PANEL_SIZE:
            raise MinimumNotMet(
                f"At least {JUDGE_PANEL_SIZE} judges are needed to start the competition (current: {n})"
            )

    def _require_min_teams(self) -> None:
        n = len(self.event.teams)
        if n < MIN_TEAMS_TO_START:
            raise MinimumNotMet(
                f"At least {MIN_TEAMS_TO_START} teams are needed to start the competition (current: {n})"
            )

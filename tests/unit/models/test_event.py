"""Unit tests for the Event aggregate: calendar, capacity and membership rules."""

import pytest
from datetime import date, datetime, timedelta
from pydantic import ValidationError

from config import MAX_TEAMS, MAX_DOCUMENTS_PER_DAY
from models import (
    Event,
    Phase,
    Team,
    ProgressDocument,
    Registration,
    InvalidInput,
    PreconditionFailed,
    PhaseClosed,
    CapacityReached,
    DuplicateEntry,
    MembershipConflict,
    DailyLimitReached,
    NotFound,
)
from support.builders import START, make_event, make_participant, make_people


def _doc(day: date, text: str = "progress") -> ProgressDocument:
    return ProgressDocument(content=text, timestamp=datetime.combine(day, datetime.min.time()))


class TestEventCreation:
    """Construction-time validation."""

    def test_create(self, event):
        assert event.duration_days == 5
        assert event.max_participants == MAX_TEAMS * 4
        assert event.max_teams == MAX_TEAMS
        assert event.max_documents_per_day == MAX_DOCUMENTS_PER_DAY
        assert event.problem_statement is None

    def test_end_before_start_rejected(self):
        with pytest.raises(ValidationError, match="end before start"):
            make_event(end_date=START - timedelta(days=1))

    def test_duration_must_be_five_days(self):
        with pytest.raises(ValidationError, match="must be 5 days"):
            make_event(end_date=START + timedelta(days=5))

    def test_blank_title_rejected(self):
        with pytest.raises(ValidationError):
            make_event(title="  ")

    def test_team_size_must_be_positive(self):
        with pytest.raises(ValidationError):
            make_event(max_team_size=0)

    def test_scalar_fields_frozen(self, event):
        with pytest.raises(ValidationError):
            event.title = "Other"


class TestCalendar:
    """Registration window and phases for an event starting 2025-05-15."""

    def test_registration_window(self, event):
        assert event.registration_open == date(2025, 5, 11)
        assert event.registration_close == date(2025, 5, 12)

    @pytest.mark.parametrize("day,expected", [
        (date(2025, 5, 10), Phase.BEFORE_REGISTRATION),
        (date(2025, 5, 11), Phase.REGISTRATION_OPEN),
        (date(2025, 5, 12), Phase.REGISTRATION_OPEN),
        (date(2025, 5, 13), Phase.DEAD_ZONE),
        (date(2025, 5, 14), Phase.DEAD_ZONE),
        (date(2025, 5, 15), Phase.DURING_EVENT),
        (date(2025, 5, 19), Phase.DURING_EVENT),
        (date(2025, 5, 20), Phase.AFTER_EVENT),
    ])
    def test_phase(self, event, day, expected):
        assert event.phase(day) == expected

    def test_voting_allowed_from_last_day(self, event):
        assert not event.is_voting_allowed(date(2025, 5, 18))
        assert event.is_voting_allowed(date(2025, 5, 19))
        assert event.is_voting_allowed(date(2025, 6, 1))

    def test_missing_date_is_invalid_input(self, event):
        with pytest.raises(InvalidInput, match="Reference date is null"):
            event.phase(None)

    def test_phase_labels(self):
        assert Phase.DURING_EVENT.label == "Hackathon in progress"


class TestJudges:

    def test_add_judges_up_to_panel_size(self, event, judges):
        for j in judges:
            event.add_judge(j)
        assert event.judges == tuple(judges)

        with pytest.raises(CapacityReached):
            event.add_judge(make_participant(999))

    def test_duplicate_judge(self, event, judges):
        event.add_judge(judges[0])
        with pytest.raises(DuplicateEntry):
            event.add_judge(judges[0])

    def test_find_and_remove(self, event, judges):
        event.add_judge(judges[0])
        assert event.find_judge(judges[0].id) == judges[0]
        assert event.is_judge(judges[0])

        event.remove_judge(judges[0])
        assert event.find_judge(judges[0].id) is None
        event.remove_judge(judges[0])  # absent: no-op


class TestRegistrations:

    def test_register_in_window(self, event, people, reg_day):
        reg = event.register_participant(people[0], reg_day)
        assert isinstance(reg, Registration)
        assert reg.participant == people[0]
        assert reg.event is event
        assert event.is_registered(people[0])
        assert event.participants == (people[0],)

    @pytest.mark.parametrize("day", [date(2025, 5, 10), date(2025, 5, 13), date(2025, 5, 15)])
    def test_register_outside_window(self, event, people, day):
        with pytest.raises(PhaseClosed):
            event.register_participant(people[0], day)
        assert event.registrations == ()

    def test_duplicate_registration(self, event, people, reg_day):
        event.register_participant(people[0], reg_day)
        with pytest.raises(DuplicateEntry):
            event.register_participant(people[0], reg_day)

    def test_capacity(self, reg_day):
        event = make_event(max_team_size=1)
        for p in make_people(event.max_participants):
            event.register_participant(p, reg_day)

        with pytest.raises(CapacityReached):
            event.register_participant(make_participant(9999), reg_day)
        assert len(event.registrations) == event.max_participants

    def test_null_participant(self, event, reg_day):
        with pytest.raises(InvalidInput):
            event.register_participant(None, reg_day)

    def test_remove_registration(self, event, people, reg_day):
        event.register_participant(people[0], reg_day)
        event.remove_registration(people[0])
        assert not event.is_registered(people[0])
        event.remove_registration(people[0])  # absent: no-op

    def test_registration_identity(self, event, people, reg_day):
        reg = event.register_participant(people[0], reg_day)
        assert reg == Registration(people[0], event)
        assert reg != Registration(people[0], make_event())


class TestTeams:

    @pytest.fixture
    def registered(self, event, people, reg_day):
        for p in people:
            event.register_participant(p, reg_day)
        return event

    def test_add_team(self, registered, people, reg_day):
        team = Team(id=1, name="Rocket", members=people[:3])
        registered.add_team(team, reg_day)
        assert registered.teams == (team,)
        assert registered.team_of(people[0]) == team
        assert registered.find_team(1) is team

    def test_duplicate_name_ignores_case_and_whitespace(self, registered, people, reg_day):
        registered.add_team(Team(id=1, name="Rocket", members=people[:2]), reg_day)
        with pytest.raises(DuplicateEntry, match="name already in use"):
            registered.add_team(Team(id=2, name="rocket ", members=people[2:4]), reg_day)
        assert len(registered.teams) == 1

    def test_team_after_registration_close(self, registered, people):
        with pytest.raises(PhaseClosed):
            registered.add_team(Team(id=1, name="Rocket", members=people[:2]), date(2025, 5, 13))

    def test_same_team_twice(self, registered, people, reg_day):
        team = Team(id=1, name="Rocket", members=people[:2])
        registered.add_team(team, reg_day)
        clone = Team(id=1, name="Other", members=people[2:4])
        with pytest.raises(DuplicateEntry, match="already present"):
            registered.add_team(clone, reg_day)

    def test_empty_team(self, registered, reg_day):
        with pytest.raises(InvalidInput):
            registered.add_team(Team(id=1, name="Rocket"), reg_day)

    def test_team_too_large(self, registered, people, reg_day):
        with pytest.raises(CapacityReached):
            registered.add_team(Team(id=1, name="Rocket", members=people[:5]), reg_day)

    def test_unregistered_member(self, registered, people, reg_day):
        outsider = make_participant(500)
        with pytest.raises(MembershipConflict, match="not registered"):
            registered.add_team(Team(id=1, name="Rocket", members=[people[0], outsider]), reg_day)

    def test_member_on_two_teams(self, registered, people, reg_day):
        registered.add_team(Team(id=1, name="Rocket", members=people[:2]), reg_day)
        with pytest.raises(MembershipConflict, match="already in a team"):
            registered.add_team(Team(id=2, name="Nebula", members=[people[1], people[2]]), reg_day)

    def test_team_cap(self, reg_day):
        event = make_event(max_team_size=2)
        people = make_people(MAX_TEAMS + 1)
        for p in people:
            event.register_participant(p, reg_day)
        for i, p in enumerate(people[:MAX_TEAMS], 1):
            event.add_team(Team(id=i, name=f"Team {i}", members=[p]), reg_day)

        with pytest.raises(CapacityReached):
            event.add_team(Team(id=99, name="Late", members=[people[-1]]), reg_day)

    def test_remove_team(self, registered, people, reg_day):
        team = Team(id=1, name="Rocket", members=people[:2])
        registered.add_team(team, reg_day)
        registered.remove_team(team)
        assert registered.teams == ()
        assert registered.team_of(people[0]) is None


class TestProblemAndDocuments:

    @pytest.fixture
    def team(self, event, people, reg_day):
        for p in people[:3]:
            event.register_participant(p, reg_day)
        team = Team(id=1, name="Rocket", members=people[:3])
        event.add_team(team, reg_day)
        return team

    def test_publish_before_start(self, event):
        with pytest.raises(PhaseClosed):
            event.publish_problem("Build it", START - timedelta(days=1))
        assert event.problem_statement is None

    def test_publish_and_overwrite(self, event):
        event.publish_problem("First", START)
        event.publish_problem("Second", START + timedelta(days=1))
        assert event.problem_statement == "Second"

    def test_publish_blank(self, event):
        with pytest.raises(InvalidInput):
            event.publish_problem("   ", START)

    def test_upload_requires_published_problem(self, event, team):
        with pytest.raises(PreconditionFailed, match="not been published"):
            event.upload_document(team, _doc(START), START)

    def test_upload_outside_event(self, event, team):
        event.publish_problem("Build it", START)
        after = START + timedelta(days=5)
        with pytest.raises(PhaseClosed):
            event.upload_document(team, _doc(after), after)

    def test_upload_unknown_team(self, event):
        event.publish_problem("Build it", START)
        with pytest.raises(NotFound):
            event.upload_document(Team(id=42, name="Ghost"), _doc(START), START)

    def test_daily_cap(self, event, team):
        event.publish_problem("Build it", START)
        for i in range(MAX_DOCUMENTS_PER_DAY):
            event.upload_document(team, _doc(START, f"doc {i}"), START)

        with pytest.raises(DailyLimitReached):
            event.upload_document(team, _doc(START, "one too many"), START)
        assert len(team.documents) == MAX_DOCUMENTS_PER_DAY

        # Next day the cap resets
        tomorrow = START + timedelta(days=1)
        event.upload_document(team, _doc(tomorrow), tomorrow)
        assert team.documents_on(tomorrow) == 1

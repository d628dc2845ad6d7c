"""
Unit test fixtures.

All unit tests should be:
- Fast (< 100ms)
- Isolated (in-memory backend, no files)
- Deterministic (stubbed graders, fixed clock, fixed dates)
"""

import pytest
from datetime import datetime, timedelta

from support.builders import START, FixedGrader, make_event, make_organizer, make_people
from orchestration import HackathonController
from repositories import MemoryRepository


@pytest.fixture
def start():
    """Event start date: 2025-05-15 (registrations 05-11 -> 05-12)."""
    return START


@pytest.fixture
def reg_day(start):
    """A day inside the registration window."""
    return start - timedelta(days=3)


@pytest.fixture
def fixed_clock():
    """Fixed wall clock for document timestamps."""
    return lambda: datetime(2024, 1, 15, 12, 0, 0)


@pytest.fixture
def organizer():
    return make_organizer()


@pytest.fixture
def event():
    return make_event()


@pytest.fixture
def people():
    """Twelve distinct participants, ids 1..12."""
    return make_people(12)


@pytest.fixture
def judges():
    """Three judges, ids 101..103."""
    return make_people(3, first_id=101)


@pytest.fixture
def grader():
    return FixedGrader(6)


@pytest.fixture
def repo():
    return MemoryRepository()


@pytest.fixture
def controller(repo, grader, fixed_clock, organizer, start):
    """Controller with an event created, nothing else."""
    c = HackathonController(repo, grader=grader, vote_sampler=lambda j, t: 5, clock=fixed_clock)
    c.create_event(
        title="Spring Hack",
        venue="ROMA",
        start_date=start,
        end_date=start + timedelta(days=4),
        max_team_size=4,
        organizer=organizer,
    )
    return c


@pytest.fixture
def staffed(controller, judges):
    """Controller with a full judge panel."""
    for j in judges:
        controller.add_judge(j)
    return controller


@pytest.fixture
def with_teams(staffed, people, reg_day):
    """
    Full panel, twelve registered participants, three teams of three.

    Team names: Rocket, Nebula, Quasar. Participants 10..12 stay teamless.
    """
    staffed.open_registrations(reg_day)
    for p in people:
        staffed.register_participant(p, reg_day)
    for i, name in enumerate(["Rocket", "Nebula", "Quasar"]):
        staffed.add_team(name, people[i * 3:(i + 1) * 3], reg_day)
    return staffed


@pytest.fixture
def running(with_teams, start):
    """Event day 1: problem published, submissions enabled."""
    with_teams.publish_problem("Reduce food waste", start)
    with_teams.enable_submissions(start)
    return with_teams

#!/usr/bin/env python3
"""
Hackathon Manager - Main CLI Entry Point

Walks an event through its calendar: judges, registrations, teams,
progress documents, final votes and the ranking.
"""

import random
import shutil
import sys
from datetime import date, timedelta

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich import box

from config import (
    DATA_DIR,
    EVENT_DURATION_DAYS,
    MAX_DOCUMENTS_PER_DAY,
    STORAGE_BACKEND,
    load_event_settings,
)
from models import HackathonError, Organizer, Participant, Phase
from orchestration import HackathonController, RandomGrader, RandomVoteSampler
from repositories import get_repository, configure_backend

console = Console()

PHASE_STYLES = {
    Phase.BEFORE_REGISTRATION: "dim",
    Phase.REGISTRATION_OPEN: "green",
    Phase.DEAD_ZONE: "yellow",
    Phase.DURING_EVENT: "cyan",
    Phase.AFTER_EVENT: "magenta",
}

FIRST_NAMES = ["Alice", "Bruno", "Chiara", "Dario", "Elena", "Fabio", "Giulia", "Hugo",
               "Irene", "Jonas", "Katia", "Luca", "Marta", "Nadia", "Oscar", "Paola"]
LAST_NAMES = ["Rossi", "Bianchi", "Verdi", "Neri", "Gallo", "Costa", "Fontana", "Moretti"]
TEAM_NAMES = ["Rocket", "Nebula", "Quasar", "Pulsar", "Comet", "Orbit"]


def show_calendar(start: date):
    """Print the phase of every day around an event starting on `start`."""
    settings = load_event_settings()
    controller = _build_controller(settings, start, backend="memory")
    event = controller.event

    table = Table(title=f"{event.title} ({event.venue})", box=box.ROUNDED)
    table.add_column("Date")
    table.add_column("Phase")
    table.add_column("Registrations", justify="center")
    table.add_column("Submissions", justify="center")
    table.add_column("Voting", justify="center")

    day = event.registration_open - timedelta(days=2)
    last = event.end_date + timedelta(days=2)
    while day <= last:
        phase = event.phase(day)
        style = PHASE_STYLES[phase]
        table.add_row(
            day.isoformat(),
            f"[{style}]{phase.label}[/{style}]",
            _tick(event.is_registration_open(day)),
            _tick(event.is_during_event(day)),
            _tick(event.is_voting_allowed(day)),
        )
        day += timedelta(days=1)

    console.print(table)


def run_simulation(start: date, seed: int = None, teams: int = 4, team_size: int = 3,
                   backend: str = STORAGE_BACKEND):
    """
    Drive a whole event on the simulated calendar and print the ranking.

    On the json backend each run writes to its own directory under DATA_DIR,
    emptied first, so people ids 1..N never collide with an earlier run.
    """
    if backend == "json":
        configure_backend("json", base_path=_simulation_dir(start, seed))
    else:
        configure_backend(backend)
    rng = random.Random(seed)
    settings = load_event_settings()
    controller = _build_controller(settings, start, rng=rng)
    event = controller.event

    console.print(Panel.fit(
        f"[bold]{event.title}[/bold]\n"
        f"{event.venue} | {event.start_date} -> {event.end_date}\n"
        f"[dim]Registrations {event.registration_open} -> {event.registration_close}[/dim]",
        title="Hackathon",
    ))

    people = _make_people(teams * team_size + 3)
    judges, people = people[:3], people[3:]

    # Before registrations: judge panel
    for judge in judges:
        controller.add_judge(judge)
        console.print(f"[dim]Judge added:[/dim] {judge}")

    # Registration window
    today = event.registration_open
    controller.open_registrations(today)
    for p in people:
        controller.register_participant(p, today)
    console.print(f"[green]{len(people)} participants registered on {today}[/green]")

    today = event.registration_close
    for i in range(teams):
        members = people[i * team_size:(i + 1) * team_size]
        team = controller.add_team(_team_name(i), members, today)
        console.print(f"[dim]Team created:[/dim] {team.name} ({len(team.members)} members)")

    # Event days
    today = event.start_date
    controller.publish_problem("Build a tool that helps a city reduce food waste.", today)
    console.print(f"[cyan]Problem published on {today}[/cyan]")

    while today <= event.end_date:
        controller.enable_submissions(today)
        for team in event.teams:
            for n in range(rng.randint(0, MAX_DOCUMENTS_PER_DAY)):
                result = controller.upload_document(team, f"{team.name} progress {today} #{n + 1}", today)
                console.print(
                    f"[dim]{today}[/dim] {team.name}: document graded {result.grade} "
                    f"({result.delivered}/{result.slots})"
                )
        today += timedelta(days=1)

    # After the event
    console.print()
    console.print(controller.final_votes_report(today))
    show_standings(controller, today)


def show_standings(controller: HackathonController, today: date):
    standings = controller.standings(today)

    table = Table(title="Final Ranking", box=box.ROUNDED)
    table.add_column("#", justify="right")
    table.add_column("Team", style="bold")
    table.add_column("Score", justify="right")
    table.add_column("Final votes", justify="right")
    table.add_column("Progress", justify="right")
    table.add_column("Documents", justify="center")

    for s in standings:
        table.add_row(
            str(s.position),
            s.team_name,
            f"{s.composite_score:.2f}",
            f"{s.final_vote_average:.2f}",
            f"{s.progress_score:.2f}",
            f"{s.documents_delivered}/{s.document_slots}",
        )

    console.print(table)


def _build_controller(settings, start: date, backend: str = None, rng: random.Random = None):
    if backend:
        configure_backend(backend)
    rng = rng or random.Random()
    controller = HackathonController(
        get_repository(),
        grader=RandomGrader(rng),
        vote_sampler=RandomVoteSampler(rng),
    )
    organizer = Organizer(
        id=settings.organizer.id,
        first_name=settings.organizer.first_name,
        last_name=settings.organizer.last_name,
        password=settings.organizer.password,
    )
    controller.create_event(
        title=settings.title,
        venue=settings.venue,
        start_date=start,
        end_date=start + timedelta(days=EVENT_DURATION_DAYS - 1),
        max_team_size=settings.max_team_size,
        organizer=organizer,
    )
    return controller


def _simulation_dir(start: date, seed: int = None):
    run = f"seed{seed}" if seed is not None else "unseeded"
    path = DATA_DIR / f"sim-{start.isoformat()}-{run}"
    shutil.rmtree(path, ignore_errors=True)
    return path


def _make_people(count: int) -> list[Participant]:
    people = []
    for i in range(count):
        first = FIRST_NAMES[i % len(FIRST_NAMES)]
        last = LAST_NAMES[i % len(LAST_NAMES)]
        people.append(Participant(
            id=i + 1,
            first_name=first,
            last_name=last,
            email=f"{first.lower()}.{last.lower()}{i + 1}@example.org",
        ))
    return people


def _team_name(i: int) -> str:
    name = TEAM_NAMES[i % len(TEAM_NAMES)]
    return name if i < len(TEAM_NAMES) else f"{name} {i // len(TEAM_NAMES) + 1}"


def _tick(flag: bool) -> str:
    return "[green]yes[/green]" if flag else "[dim]-[/dim]"


def cli():
    """Main CLI entry point"""
    import argparse

    parser = argparse.ArgumentParser(
        description="Hackathon Manager - run an event from registrations to ranking",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  hackathon --calendar 2025-05-15           Show each day's phase
  hackathon --simulate 2025-05-15           Run a full simulated event
  hackathon --simulate 2025-05-15 --seed 7  Reproducible run
        """
    )
    parser.add_argument("--calendar", metavar="START", type=date.fromisoformat,
                        help="Show the phase calendar for an event starting on START")
    parser.add_argument("--simulate", metavar="START", type=date.fromisoformat,
                        help="Simulate a full event starting on START")
    parser.add_argument("--seed", type=int, help="Random seed for grades and votes")
    parser.add_argument("--teams", type=int, default=4, help="Teams in the simulation")
    parser.add_argument("--backend", choices=["json", "memory"], default=STORAGE_BACKEND,
                        help="Storage backend")

    args = parser.parse_args()

    try:
        if args.calendar:
            show_calendar(args.calendar)
        elif args.simulate:
            run_simulation(args.simulate, seed=args.seed, teams=args.teams, backend=args.backend)
        else:
            parser.print_help()
    except (HackathonError, ValueError) as e:
        # Model validation errors are ValueErrors too
        console.print(f"[red]{e}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    cli()

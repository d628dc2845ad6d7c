"""
Plain-text reports. The presentation layer shows these verbatim.
"""

from datetime import date

from models import Event, Team
from .projections import TeamStanding


def final_votes_report(today: date, rows: list[TeamStanding]) -> str:
    """Per-team final votes, in team registration order."""
    lines = ["FINAL VOTES", f"Date: {today}", ""]
    for row in rows:
        lines.append(f"TEAM: {row.team_name}")
        lines.append(f"- Votes: {row.votes}")
        lines.append(f"- Final vote average (0 for missing votes): {row.final_vote_average:.2f}")
        lines.append(f"- Progress average (0 for missing documents): {row.progress_score:.2f}")
        lines.append(f"- SCORE (0..10) = 70% votes + 30% progress: {row.composite_score:.2f}")
        lines.append("")
    return "\n".join(lines)


def ranking_report(event: Event, standings: list[TeamStanding], min_teams: int) -> str:
    lines = [
        "FINAL RANKING",
        f"Hackathon: {event.title} ({event.venue})",
        f"Period: {event.start_date} -> {event.end_date}",
        f"Min teams to start: {min_teams} | Current teams: {len(event.teams)}",
        "",
        "Legend:",
        "- Final vote average: mean of 0..10 votes (a missing vote counts as 0)",
        "- Progress average: mean of 0..10 document points (missing documents count as 0)",
        "- Total SCORE (0..10) = 70% final votes + 30% progress",
        "",
    ]
    for s in standings:
        lines.append(f"{s.position}) {s.team_name}")
        lines.append(f"   - Total SCORE: {s.composite_score:.2f}")
        lines.append(f"   - Final vote average: {s.final_vote_average:.2f}")
        lines.append(f"   - Progress average: {s.progress_score:.2f}")
        lines.append(
            f"   - Documents: {s.documents_delivered}/{s.document_slots} (missing: {s.documents_missing})"
        )
        lines.append("")
    return "\n".join(lines)


def team_summary(team: Team) -> str:
    lines = [f"Team: {team.name}", f"Id: {team.id}", "", f"Members ({len(team.members)}):"]
    lines.extend(f"- {m}" for m in team.members)
    lines.append("")
    lines.append(f"Progress ({len(team.documents)}):")
    lines.extend(f"- {d}" for d in team.documents)
    return "\n".join(lines)

"""Unit tests for plain-text reports and projections."""

from datetime import date

from orchestration import reports
from orchestration.projections import DocumentEvaluation, JudgeScore, TeamStanding
from support.builders import make_event


def _standing(**overrides) -> TeamStanding:
    data = {
        "position": 1,
        "team_id": 1,
        "team_name": "Rocket",
        "votes": [8, 7],
        "final_vote_average": 5.0,
        "progress_score": 1.2,
        "composite_score": 3.86,
        "documents_delivered": 3,
        "document_slots": 15,
    }
    data.update(overrides)
    return TeamStanding(**data)


class TestFinalVotesReport:

    def test_rows(self):
        report = reports.final_votes_report(date(2025, 5, 19), [_standing()])
        assert "Date: 2025-05-19" in report
        assert "- Votes: [8, 7]" in report
        assert "70% votes + 30% progress: 3.86" in report


class TestRankingReport:

    def test_header_and_rows(self):
        event = make_event()
        standings = [_standing(), _standing(position=2, team_id=2, team_name="Nebula", composite_score=1.0)]

        report = reports.ranking_report(event, standings, min_teams=3)

        assert "Hackathon: Spring Hack (ROMA (ITALIA))" in report
        assert "Period: 2025-05-15 -> 2025-05-19" in report
        assert "1) Rocket" in report
        assert "2) Nebula" in report
        assert "Documents: 3/15 (missing: 12)" in report


class TestDocumentEvaluation:

    def test_summary(self):
        ev = DocumentEvaluation(
            team_id=1,
            team_name="Rocket",
            scores=[JudgeScore(judge="Mario Rossi", score=6), JudgeScore(judge="Anna Verdi", score=7)],
            mean=6.5,
            grade=7,
            delivered=2,
            slots=15,
        )
        summary = ev.summary()
        assert "- Mario Rossi: 6" in summary
        assert "Mean: 6.50  -> Document points: 7" in summary
        assert "Documents delivered so far: 2/15" in summary

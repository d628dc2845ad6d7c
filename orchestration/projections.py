"""
Read-only projections handed to the presentation layer.
"""

from pydantic import BaseModel, Field


class JudgeScore(BaseModel):
    judge: str
    score: int


class DocumentEvaluation(BaseModel):
    """Result of uploading one document: the panel's scores and the grade."""
    team_id: int
    team_name: str
    scores: list[JudgeScore] = Field(default_factory=list)
    mean: float = 0.0
    grade: int = 0
    delivered: int = 0
    slots: int = 0

    def summary(self) -> str:
        lines = ["Judge scores (1..10):"]
        for s in self.scores:
            lines.append(f"- {s.judge}: {s.score}")
        lines.append("")
        lines.append(f"Mean: {self.mean:.2f}  -> Document points: {self.grade}")
        lines.append(f"Documents delivered so far: {self.delivered}/{self.slots}")
        return "\n".join(lines)


class EventCounts(BaseModel):
    """Counters against their limits, for status displays."""
    judges: int
    judge_panel_size: int
    teams: int
    max_teams: int
    min_teams: int
    participants: int
    max_participants: int

    @property
    def panel_complete(self) -> bool:
        return self.judges >= self.judge_panel_size

    @property
    def enough_teams(self) -> bool:
        return self.teams >= self.min_teams


class TeamStanding(BaseModel):
    """One row of the final ranking."""
    position: int
    team_id: int
    team_name: str
    votes: list[int] = Field(default_factory=list)
    final_vote_average: float = 0.0
    progress_score: float = 0.0
    composite_score: float = 0.0
    documents_delivered: int = 0
    document_slots: int = 0

    @property
    def documents_missing(self) -> int:
        return max(0, self.document_slots - self.documents_delivered)

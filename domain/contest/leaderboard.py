"""Leaderboard projector and contest statistics - read-only aggregations."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.settings import ACTIVE_WINDOW_MINUTES
from domain.models import SolvedProblem, Submission, Team


@dataclass
class Standing:
    team_id: int
    team_name: str
    score: int
    problems_solved: int
    last_submission_at: Optional[datetime]  # None when the team never submitted


@dataclass
class ContestStats:
    total_teams: int
    registered_teams: int
    active_teams: int
    total_submissions: int


def rank(db: Session) -> List[Standing]:
    """Registered teams by score, then problems solved (both descending).

    Team id is the last sort key only so equal teams come back in a stable
    order; it carries no meaning.
    """
    # Aggregate in subqueries so the two joins cannot multiply each other's rows.
    solved_sq = (
        db.query(SolvedProblem.team_id.label("team_id"), func.count(SolvedProblem.problem_id).label("solved"))
        .group_by(SolvedProblem.team_id)
        .subquery()
    )
    last_sq = (
        db.query(Submission.team_id.label("team_id"), func.max(Submission.submitted_at).label("last_at"))
        .group_by(Submission.team_id)
        .subquery()
    )
    solved = func.coalesce(solved_sq.c.solved, 0)

    rows = (
        db.query(Team.id, Team.team_name, Team.total_score, solved.label("problems_solved"), last_sq.c.last_at)
        .outerjoin(solved_sq, Team.id == solved_sq.c.team_id)
        .outerjoin(last_sq, Team.id == last_sq.c.team_id)
        .filter(Team.registered.is_(True))
        .order_by(Team.total_score.desc(), solved.desc(), Team.id.asc())
        .all()
    )
    return [
        Standing(
            team_id=team_id,
            team_name=team_name,
            score=int(score or 0),
            problems_solved=int(problems_solved or 0),
            last_submission_at=last_at,
        )
        for (team_id, team_name, score, problems_solved, last_at) in rows
    ]


def contest_stats(db: Session, now: Optional[datetime] = None) -> ContestStats:
    now = now or datetime.utcnow()
    window_start = now - timedelta(minutes=ACTIVE_WINDOW_MINUTES)

    active = (
        db.query(func.count(func.distinct(Submission.team_id)))
        .filter(Submission.submitted_at >= window_start)
        .scalar()
    )
    return ContestStats(
        total_teams=db.query(Team).count(),
        registered_teams=db.query(Team).filter(Team.registered.is_(True)).count(),
        active_teams=int(active or 0),
        total_submissions=db.query(Submission).count(),
    )


__all__ = ["Standing", "ContestStats", "rank", "contest_stats"]

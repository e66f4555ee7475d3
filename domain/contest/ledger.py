"""Submission ledger - every judged attempt, stored once and never changed."""

from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from domain.models import Problem, Submission
from .errors import NotFoundError
from .evaluator import EvaluationResult


def append(
    db: Session,
    team_id: int,
    problem_id: int,
    code: str,
    language: str,
    result: EvaluationResult,
) -> Submission:
    """Stage a submission row and flush it so it has an id. The caller commits."""
    submission = Submission(
        team_id=team_id,
        problem_id=problem_id,
        code=code,
        language=language or "",
        status=result.status.value,
        score=result.tests_passed,
        test_results=result.test_results(),
    )
    db.add(submission)
    db.flush()
    return submission


def list_by_team(
    db: Session,
    team_id: int,
    problem_id: Optional[int] = None,
    status: Optional[str] = None,
    skip: int = 0,
    limit: int = 50,
) -> Tuple[int, List[Tuple[Submission, str]]]:
    """Newest first. Returns (total, [(submission, problem_title), ...])."""
    query = (
        db.query(Submission)
        .join(Problem, Submission.problem_id == Problem.id)
        .filter(Submission.team_id == team_id)
    )
    if problem_id is not None:
        query = query.filter(Submission.problem_id == problem_id)
    if status:
        query = query.filter(Submission.status == status)

    total = query.count()
    rows = (
        query.add_columns(Problem.title)
        .order_by(Submission.submitted_at.desc(), Submission.id.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )
    return total, [(sub, title) for (sub, title) in rows]


def get_for_team(db: Session, team_id: int, submission_id: int) -> Tuple[Submission, str]:
    row = (
        db.query(Submission, Problem.title)
        .join(Problem, Submission.problem_id == Problem.id)
        .filter(Submission.id == submission_id, Submission.team_id == team_id)
        .first()
    )
    if not row:
        raise NotFoundError("Submission not found")
    return row[0], row[1]


__all__ = ["append", "list_by_team", "get_for_team"]

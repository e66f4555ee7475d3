"""Problem catalog - read access to the seeded problems."""

from typing import Any, List, Tuple

from sqlalchemy.orm import Session

from domain.models import Problem
from .errors import NotFoundError


def get_problem(db: Session, problem_id: int) -> Problem:
    problem = db.query(Problem).filter(Problem.id == problem_id).first()
    if problem is None:
        raise NotFoundError("Problem not found")
    return problem


def list_problems(db: Session) -> List[Problem]:
    return db.query(Problem).order_by(Problem.id).all()


def problem_test_cases(problem: Problem) -> List[Tuple[Any, Any]]:
    """Ordered (input, expected_output) pairs, the shape the evaluator takes."""
    return [(tc.input, tc.expected_output) for tc in problem.testcases]


__all__ = ["get_problem", "list_problems", "problem_test_cases"]

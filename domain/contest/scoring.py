"""Scoring engine - credits a problem's points to a team exactly once.

The solved_problems primary key (team_id, problem_id) is the only record of
"already credited". The engine inserts first and lets the key reject
duplicates: the transaction that gets the row in adds the points. Everything
runs inside the caller's transaction.
"""

import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from domain.models import SolvedProblem
from . import activity, catalog, teams
from .evaluator import EvaluationResult, Verdict

logger = logging.getLogger(__name__)

_UPSERT_INSERTS = {
    "sqlite": sqlite_insert,
    "postgresql": pg_insert,
}


@dataclass
class ScoringOutcome:
    credited_now: bool
    points_awarded: int = 0


def claim_first_solve(db: Session, team_id: int, problem_id: int) -> bool:
    """Insert the solved record unless it exists. True if this call inserted it."""
    values = {"team_id": team_id, "problem_id": problem_id, "solved_at": datetime.utcnow()}

    insert = _UPSERT_INSERTS.get(db.get_bind().dialect.name)
    if insert is not None:
        stmt = insert(SolvedProblem).values(**values).on_conflict_do_nothing(
            index_elements=["team_id", "problem_id"]
        )
        return db.execute(stmt).rowcount == 1

    # Other backends: let the key violation roll back a savepoint.
    try:
        with db.begin_nested():
            db.add(SolvedProblem(**values))
        return True
    except IntegrityError:
        return False


def apply_result(db: Session, team_id: int, problem_id: int, result: EvaluationResult) -> ScoringOutcome:
    problem = catalog.get_problem(db, problem_id)

    if result.status != Verdict.ACCEPTED:
        activity.log_activity(db, team_id, activity.FAILED, problem.title)
        return ScoringOutcome(credited_now=False)

    if claim_first_solve(db, team_id, problem_id):
        teams.increment_score(db, team_id, problem.points)
        activity.log_activity(db, team_id, activity.SOLVED, f"{problem.title} (+{problem.points} points)")
        logger.info(f"Team {team_id} solved problem {problem_id} (+{problem.points})")
        return ScoringOutcome(credited_now=True, points_awarded=problem.points)

    activity.log_activity(db, team_id, activity.RESUBMITTED, f"{problem.title} (already solved)")
    return ScoringOutcome(credited_now=False)


__all__ = ["ScoringOutcome", "claim_first_solve", "apply_result"]

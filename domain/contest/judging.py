"""Submission pipeline: evaluate, record, score, log - then build the response."""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from infra.utils.normalize_code import normalize_code
from . import catalog, checkers, ledger, scoring, teams
from .errors import StorageFailure, ValidationError
from .evaluator import EvaluationResult, Evaluator
from .storage import write_transaction

logger = logging.getLogger(__name__)


@dataclass
class JudgeOutcome:
    submission_id: int
    result: EvaluationResult
    credited: bool


def judge_submission(
    db: Session,
    evaluator: Evaluator,
    team_id: Optional[int],
    problem_id: Optional[int],
    code: Optional[str],
    language: Optional[str],
) -> JudgeOutcome:
    """Evaluate, record and score one submission.

    The session's read transaction is ended before the code runs, so no
    connection sits idle in a transaction while the runner works.
    """
    if not team_id or not problem_id or not code:
        raise ValidationError("Missing required fields")

    problem = catalog.get_problem(db, problem_id)
    teams.get_team(db, team_id)
    test_cases = catalog.problem_test_cases(problem)
    checker = checkers.get_checker(problem.checker)
    db.rollback()

    code = normalize_code(code)
    result = evaluator.evaluate(code, language, test_cases, checker)

    # Ledger row, solved record, score and activity land together or not at all.
    try:
        with write_transaction(db, "recording submission"):
            submission = ledger.append(db, team_id, problem_id, code, language, result)
            submission_id = submission.id
            scored = scoring.apply_result(db, team_id, problem_id, result)
    except StorageFailure as e:
        if isinstance(e.__cause__, IntegrityError):
            # The team was deleted while the code was running.
            teams.get_team(db, team_id)
        raise

    logger.info(
        f"Submission {submission_id}: team={team_id} problem={problem_id} "
        f"status={result.status.value} passed={result.tests_passed}/{result.total_tests} "
        f"credited={scored.credited_now}"
    )
    return JudgeOutcome(submission_id=submission_id, result=result, credited=scored.credited_now)


def submission_response(outcome: JudgeOutcome) -> Dict[str, Any]:
    result = outcome.result
    return {
        "success": result.all_passed,
        "status": result.status.value,
        "message": result.message,
        "score": result.tests_passed,
        "total_tests": result.total_tests,
        "all_passed": result.all_passed,
        "test_results": result.test_results(),
        "credited": outcome.credited,
        "submission_id": outcome.submission_id,
    }


__all__ = ["JudgeOutcome", "judge_submission", "submission_response"]

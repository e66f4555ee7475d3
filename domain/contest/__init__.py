"""Contest domain: evaluation, submission ledger, scoring and standings.

Modules:
- evaluator: grades code against a problem's test cases
- checkers: per-problem output comparison
- ledger: append-only submission records
- scoring: exactly-once crediting of solved problems
- leaderboard: ranked standings and admin statistics
- teams / catalog / activity: the stores the pipeline reads and writes
- judging: the submit pipeline tying them together
"""

from .errors import ConflictError, ContestError, NotFoundError, StorageFailure, ValidationError
from .evaluator import CaseVerdict, EvaluationResult, Evaluator, Verdict

__all__ = [
    "ContestError",
    "NotFoundError",
    "ConflictError",
    "ValidationError",
    "StorageFailure",
    "Verdict",
    "CaseVerdict",
    "EvaluationResult",
    "Evaluator",
]

"""Evaluator - grades a submission against a problem's ordered test cases.

`Evaluator.evaluate` is deterministic and side-effect free from the caller's
point of view: the only thing it does is hand the code to a runner (see
`infra.services`) once per test case. It never raises for well-formed input;
unsupported languages, malformed code and crashing solutions are all normal
`EvaluationResult` values.
"""

from __future__ import annotations

import ast
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple

from app.settings import MIN_CODE_LENGTH, SUPPORTED_LANGUAGES
from .checkers import Checker, exact, results_match

logger = logging.getLogger(__name__)


class Verdict(str, Enum):
    ACCEPTED = "accepted"
    WRONG_ANSWER = "wrong_answer"
    ERROR = "error"


@dataclass
class CaseVerdict:
    index: int
    passed: bool
    input: Any
    expected: Any
    actual: Any = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "test_num": self.index + 1,
            "passed": self.passed,
            "input": self.input,
            "expected": self.expected,
            "actual": self.actual,
            "error": self.error,
        }


@dataclass
class EvaluationResult:
    status: Verdict
    tests_passed: int
    total_tests: int
    per_test: List[CaseVerdict] = field(default_factory=list)
    message: str = ""

    @property
    def all_passed(self) -> bool:
        return self.status == Verdict.ACCEPTED

    def test_results(self) -> List[Dict[str, Any]]:
        return [v.to_dict() for v in self.per_test]


def _callable_names(body: List[ast.stmt]) -> List[str]:
    """Names a block binds to a def or a lambda, in source order."""
    names: List[str] = []
    for node in body:
        if isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef)):
            names.append(node.name)
        elif isinstance(node, ast.Assign) and isinstance(node.value, ast.Lambda):
            names.extend(t.id for t in node.targets if isinstance(t, ast.Name))
    return names


def _assigns_solve(node: ast.stmt) -> bool:
    if isinstance(node, ast.Assign):
        return any(isinstance(t, ast.Name) and t.id == "solve" for t in node.targets)
    if isinstance(node, ast.AnnAssign):
        return node.value is not None and isinstance(node.target, ast.Name) and node.target.id == "solve"
    return False


def find_entry_point(tree: ast.Module) -> Optional[str]:
    """Name of the callable the runner harness will invoke, or None.

    Same rule as `find_entry` in `sandbox/run_code.py`: a top-level `solve`
    (def or assignment), then the first public def or lambda of
    `class Solution` (static and class methods included), then the last
    top-level def or lambda.
    """
    functions = _callable_names(tree.body)
    if "solve" in functions or any(_assigns_solve(node) for node in tree.body):
        return "solve"
    for node in tree.body:
        if isinstance(node, ast.ClassDef) and node.name == "Solution":
            public = [name for name in _callable_names(node.body) if not name.startswith("_")]
            if public:
                return f"Solution.{public[0]}"
    return functions[-1] if functions else None


class Evaluator:

    def __init__(
        self,
        runner,
        supported_languages: Sequence[str] = tuple(SUPPORTED_LANGUAGES),
        min_code_length: int = MIN_CODE_LENGTH,
    ):
        self.runner = runner
        self.supported_languages = {lang.lower() for lang in supported_languages}
        self.min_code_length = min_code_length

    def evaluate(
        self,
        code: str,
        language: Optional[str],
        test_cases: Sequence[Tuple[Any, Any]],
        checker: Checker = exact,
    ) -> EvaluationResult:
        total = len(test_cases)

        lang = (language or "").strip().lower()
        if lang not in self.supported_languages:
            return EvaluationResult(
                status=Verdict.ERROR,
                tests_passed=0,
                total_tests=total,
                message="Only Python is currently supported for auto-grading",
            )

        source_error = self._check_source(code)
        if source_error:
            return EvaluationResult(status=Verdict.ERROR, tests_passed=0, total_tests=total, message=source_error)

        verdicts: List[CaseVerdict] = []
        for index, (test_input, expected) in enumerate(test_cases):
            outcome = self.runner.run(code, test_input)
            if not outcome.ok:
                verdicts.append(CaseVerdict(index, False, test_input, expected, error=outcome.error))
                continue
            passed = bool(checker(test_input, outcome.output, expected))
            verdicts.append(CaseVerdict(index, passed, test_input, expected, actual=outcome.output))

        passed_count = sum(1 for v in verdicts if v.passed)
        logger.debug(f"Evaluated {lang} submission: {passed_count}/{total} passed")
        if passed_count == total:
            return EvaluationResult(Verdict.ACCEPTED, passed_count, total, verdicts, "All test cases passed")
        return EvaluationResult(
            Verdict.WRONG_ANSWER,
            passed_count,
            total,
            verdicts,
            f"{passed_count}/{total} test cases passed",
        )

    def _check_source(self, code: Optional[str]) -> Optional[str]:
        """Cheap well-formedness checks. Returns an error message or None."""
        if not code or not code.strip():
            return "No code submitted"
        if len(code.strip()) < self.min_code_length:
            return "Code appears incomplete"
        try:
            tree = ast.parse(code)
        except (SyntaxError, ValueError) as e:
            return f"Syntax error: {e}"
        if find_entry_point(tree) is None:
            return "No function found to call"
        return None


__all__ = [
    "Verdict",
    "CaseVerdict",
    "EvaluationResult",
    "Evaluator",
    "results_match",
    "find_entry_point",
]

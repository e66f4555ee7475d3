"""Problems Router - read-only problem catalog.

Endpoints:
- GET /problems - All problems (id, title, difficulty, points)
- GET /problems/{id} - One problem with a preview of its first test cases
"""

from typing import Any, List

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.db import get_db
from app.settings import PROBLEM_PREVIEW_TESTCASES
from domain.contest import catalog

router = APIRouter(prefix="/problems", tags=["problems"])


class ProblemOut(BaseModel):
	id: int
	title: str
	difficulty: str
	points: int


class SampleTestCase(BaseModel):
	input: Any
	output: Any


class ProblemDetail(ProblemOut):
	testCases: List[SampleTestCase]


@router.get("", response_model=List[ProblemOut])
def list_problems(db: Session = Depends(get_db)):
	return [
		ProblemOut(id=p.id, title=p.title, difficulty=p.difficulty.value, points=p.points)
		for p in catalog.list_problems(db)
	]


@router.get("/{problem_id}", response_model=ProblemDetail)
def get_problem(problem_id: int, db: Session = Depends(get_db)):
	problem = catalog.get_problem(db, problem_id)

	# The rest of the test cases stay hidden.
	samples = [
		SampleTestCase(input=tc_input, output=expected)
		for (tc_input, expected) in catalog.problem_test_cases(problem)[:PROBLEM_PREVIEW_TESTCASES]
	]

	return ProblemDetail(
		id=problem.id,
		title=problem.title,
		difficulty=problem.difficulty.value,
		points=problem.points,
		testCases=samples,
	)


__all__ = ["router"]

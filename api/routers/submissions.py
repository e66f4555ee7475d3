"""
Submissions Router - judge a solution and browse your own submissions.

Endpoints:
- POST /submit - Grade code against a problem, record it and update the score
- GET /submissions - The team's submissions, newest first (paginated, filterable)
- GET /submissions/{id} - One submission with code and per-test results
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.auth import get_current_team
from app.db import get_db
from domain.contest import Evaluator, judging, ledger
from domain.models import Team

router = APIRouter(tags=["submissions"])


def get_evaluator(request: Request) -> Evaluator:
    return request.app.state.evaluator


class SubmitRequest(BaseModel):
    teamId: Optional[int] = None
    problemId: Optional[int] = None
    code: Optional[str] = None
    language: Optional[str] = None


class TeamSubmissionItem(BaseModel):
    id: int
    problem_id: int
    problem_title: Optional[str]
    language: str
    status: str
    score: int
    submitted_at: Optional[str]


class TeamSubmissionsResponse(BaseModel):
    total: int
    skip: int
    limit: int
    items: List[TeamSubmissionItem]


class TeamSubmissionDetail(TeamSubmissionItem):
    code: str
    test_results: Optional[Any] = None


def _item(sub, problem_title: Optional[str]) -> Dict[str, Any]:
    return dict(
        id=sub.id,
        problem_id=sub.problem_id,
        problem_title=problem_title,
        language=sub.language,
        status=sub.status,
        score=sub.score,
        submitted_at=sub.submitted_at.isoformat() if sub.submitted_at else None,
    )


@router.post("/submit", response_model=Dict[str, Any])
def submit_solution(
    req: SubmitRequest,
    db: Session = Depends(get_db),
    team: Team = Depends(get_current_team),
    evaluator: Evaluator = Depends(get_evaluator),
):
    if req.teamId is not None and req.teamId != team.id:
        raise HTTPException(status_code=403, detail="Cannot submit on behalf of another team")

    outcome = judging.judge_submission(
        db,
        evaluator,
        team_id=req.teamId if req.teamId is not None else team.id,
        problem_id=req.problemId,
        code=req.code,
        language=req.language,
    )
    return judging.submission_response(outcome)


@router.get("/submissions", response_model=TeamSubmissionsResponse)
def list_my_submissions(
    skip: int = 0,
    limit: int = 50,
    problem_id: Optional[int] = None,
    status: Optional[str] = None,
    db: Session = Depends(get_db),
    team: Team = Depends(get_current_team),
):
    skip = max(skip, 0)
    limit = max(min(limit, 200), 1)

    total, rows = ledger.list_by_team(db, team.id, problem_id=problem_id, status=status, skip=skip, limit=limit)
    items = [TeamSubmissionItem(**_item(sub, title)) for (sub, title) in rows]
    return TeamSubmissionsResponse(total=total, skip=skip, limit=limit, items=items)


@router.get("/submissions/{submission_id}", response_model=TeamSubmissionDetail)
def get_my_submission(
    submission_id: int,
    db: Session = Depends(get_db),
    team: Team = Depends(get_current_team),
):
    sub, problem_title = ledger.get_for_team(db, team.id, submission_id)
    return TeamSubmissionDetail(**_item(sub, problem_title), code=sub.code, test_results=sub.test_results)


__all__ = ["router", "get_evaluator"]

"""Teams Router - team login and progress.

Endpoints:
- POST /team/login - Exchange team name + access code for a bearer token
- GET /team/{id}/progress - Score and solved problems of a team
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.auth import create_team_token
from app.db import get_db
from domain.contest import teams

router = APIRouter(prefix="/team", tags=["teams"])


class TeamLoginRequest(BaseModel):
    teamName: Optional[str] = None
    accessCode: Optional[str] = None


class TeamRef(BaseModel):
    id: int
    teamName: str


class TeamLoginResponse(BaseModel):
    success: bool
    team: TeamRef
    access_token: str
    token_type: str = "bearer"


class ProgressResponse(BaseModel):
    teamName: str
    totalScore: int
    problemsSolved: int
    solvedProblemIds: List[int]


@router.post("/login", response_model=TeamLoginResponse)
def team_login(req: TeamLoginRequest, db: Session = Depends(get_db)):
    team = teams.login(db, req.teamName, req.accessCode)
    if team is None:
        raise HTTPException(status_code=401, detail="Invalid team name or access code")

    return TeamLoginResponse(
        success=True,
        team=TeamRef(id=team.id, teamName=team.team_name),
        access_token=create_team_token(team),
    )


@router.get("/{team_id}/progress", response_model=ProgressResponse)
def team_progress(team_id: int, db: Session = Depends(get_db)):
    progress = teams.team_progress(db, team_id)
    return ProgressResponse(
        teamName=progress.team_name,
        totalScore=progress.total_score,
        problemsSolved=progress.problems_solved,
        solvedProblemIds=progress.solved_problem_ids,
    )


__all__ = ["router"]

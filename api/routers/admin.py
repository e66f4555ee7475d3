"""Admin Router - contest administration.

Features:
- Admin login (argon2-hashed password, bearer token)
- Team management (list with access codes, create, delete)
- Leaderboard, activity feed and contest statistics
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.orm import Session
import logging

from app.auth import create_admin_token, get_current_admin, verify_admin_password
from app.db import get_db
from domain.contest import activity, leaderboard, teams

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])

NO_SUBMISSIONS = "No submissions"


# ==================== Request/Response Models ====================

class AdminLoginRequest(BaseModel):
	password: Optional[str] = None


class AdminLoginResponse(BaseModel):
	success: bool
	message: str
	access_token: str
	token_type: str = "bearer"


class TeamResponse(BaseModel):
	id: int
	teamName: str
	accessCode: str
	registered: bool
	totalScore: int
	createdAt: Optional[str]


class TeamCreateRequest(BaseModel):
	teamName: Optional[str] = None


class TeamCreateResponse(BaseModel):
	success: bool
	team: TeamResponse


class StandingResponse(BaseModel):
	teamName: str
	score: int
	solved: int
	lastSubmit: str


class ActivityResponse(BaseModel):
	team: str
	action: str
	details: Optional[str]
	timestamp: str


class StatsResponse(BaseModel):
	totalTeams: int
	registeredTeams: int
	activeTeams: int
	totalSubmissions: int


def _iso(value: Optional[datetime]) -> Optional[str]:
	return value.isoformat() if value else None


def _team_response(team) -> TeamResponse:
	return TeamResponse(
		id=team.id,
		teamName=team.team_name,
		accessCode=team.access_code,
		registered=bool(team.registered),
		totalScore=team.total_score,
		createdAt=_iso(team.created_at),
	)


def standings_response(standings: List[leaderboard.Standing]) -> List[StandingResponse]:
	return [
		StandingResponse(
			teamName=s.team_name,
			score=s.score,
			solved=s.problems_solved,
			lastSubmit=_iso(s.last_submission_at) or NO_SUBMISSIONS,
		)
		for s in standings
	]


# ==================== Auth ====================

@router.post("/login", response_model=AdminLoginResponse)
def admin_login(req: AdminLoginRequest):
	if not verify_admin_password(req.password):
		logger.warning("Rejected admin login")
		raise HTTPException(status_code=401, detail="Invalid password")

	return AdminLoginResponse(success=True, message="Login successful", access_token=create_admin_token())


# ==================== Team Management ====================

@router.get("/teams", response_model=List[TeamResponse])
def list_teams(
	db: Session = Depends(get_db),
	current_admin: Dict[str, Any] = Depends(get_current_admin)
):
	"""All teams, newest first, including their access codes"""
	return [_team_response(t) for t in teams.list_teams(db)]


@router.post("/teams/create", response_model=TeamCreateResponse)
def create_team(
	req: TeamCreateRequest,
	db: Session = Depends(get_db),
	current_admin: Dict[str, Any] = Depends(get_current_admin)
):
	"""Create a team with a freshly generated access code"""
	team = teams.create_team(db, req.teamName)
	return TeamCreateResponse(success=True, team=_team_response(team))


@router.delete("/teams/{team_id}")
def delete_team(
	team_id: int,
	db: Session = Depends(get_db),
	current_admin: Dict[str, Any] = Depends(get_current_admin)
):
	"""Delete a team and all of its submissions, solves and activity"""
	teams.delete_team(db, team_id)
	return {"success": True}


# ==================== Contest Views ====================

@router.get("/leaderboard", response_model=List[StandingResponse])
def admin_leaderboard(
	db: Session = Depends(get_db),
	current_admin: Dict[str, Any] = Depends(get_current_admin)
):
	return standings_response(leaderboard.rank(db))


@router.get("/activities", response_model=List[ActivityResponse])
def recent_activities(
	db: Session = Depends(get_db),
	current_admin: Dict[str, Any] = Depends(get_current_admin)
):
	return [
		ActivityResponse(team=a.team, action=a.action, details=a.details, timestamp=_iso(a.timestamp))
		for a in activity.recent_activity(db)
	]


@router.get("/stats", response_model=StatsResponse)
def contest_stats(
	db: Session = Depends(get_db),
	current_admin: Dict[str, Any] = Depends(get_current_admin)
):
	stats = leaderboard.contest_stats(db)
	return StatsResponse(
		totalTeams=stats.total_teams,
		registeredTeams=stats.registered_teams,
		activeTeams=stats.active_teams,
		totalSubmissions=stats.total_submissions,
	)


__all__ = ["router", "standings_response"]

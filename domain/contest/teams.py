"""Team store - creation, login, score updates and the progress view."""

import hmac
import logging
import secrets
from dataclasses import dataclass, field
from typing import List, Optional

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from domain.models import SolvedProblem, Team
from . import activity
from .errors import ConflictError, NotFoundError, StorageFailure, ValidationError
from .storage import write_transaction

logger = logging.getLogger(__name__)


@dataclass
class TeamProgress:
    team_name: str = ""
    total_score: int = 0
    problems_solved: int = 0
    solved_problem_ids: List[int] = field(default_factory=list)


def generate_access_code() -> str:
    return secrets.token_hex(4).upper()


def get_team(db: Session, team_id: int) -> Team:
    team = db.query(Team).filter(Team.id == team_id).first()
    if team is None:
        raise NotFoundError("Team not found")
    return team


def list_teams(db: Session) -> List[Team]:
    return db.query(Team).order_by(Team.created_at.desc(), Team.id.desc()).all()


def create_team(db: Session, team_name: Optional[str]) -> Team:
    name = (team_name or "").strip()
    if not name:
        raise ValidationError("Team name is required")
    if db.query(Team.id).filter(Team.team_name == name).first():
        raise ConflictError("Team name already exists")

    code = generate_access_code()
    while db.query(Team.id).filter(Team.access_code == code).first():
        code = generate_access_code()

    team = Team(team_name=name, access_code=code, registered=False, total_score=0)
    db.add(team)
    try:
        db.commit()
    except IntegrityError as e:
        # Lost a race with a concurrent create of the same name.
        db.rollback()
        raise ConflictError("Team name already exists") from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Storage failure while creating team")
        raise StorageFailure("Storage failure while creating team") from e

    db.refresh(team)
    logger.info(f"Created team {team.team_name!r} (id={team.id})")
    return team


def delete_team(db: Session, team_id: int) -> None:
    """Delete a team together with its submissions, solves and activity."""
    team = get_team(db, team_id)
    name = team.team_name
    with write_transaction(db, "deleting team"):
        db.delete(team)
    logger.info(f"Deleted team {name!r} (id={team_id})")


def authenticate(db: Session, team_name: str, access_code: str) -> Optional[Team]:
    team = db.query(Team).filter(Team.team_name == team_name).first()
    if team is None:
        return None
    if not hmac.compare_digest(team.access_code.encode("utf-8"), access_code.encode("utf-8")):
        return None
    return team


def mark_registered(db: Session, team_id: int) -> bool:
    """Flip the registration flag. Returns True only for the call that flipped it."""
    result = db.execute(
        update(Team)
        .where(Team.id == team_id, Team.registered.is_(False))
        .values(registered=True)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount == 1


def increment_score(db: Session, team_id: int, delta: int) -> None:
    # Single UPDATE so concurrent increments never overwrite each other.
    db.execute(
        update(Team)
        .where(Team.id == team_id)
        .values(total_score=Team.total_score + delta)
        .execution_options(synchronize_session=False)
    )


def login(db: Session, team_name: Optional[str], access_code: Optional[str]) -> Optional[Team]:
    """Check credentials, register the team on first login and log the event."""
    if not team_name or not access_code:
        raise ValidationError("Team name and access code are required")

    team = authenticate(db, team_name, access_code)
    if team is None:
        logger.info(f"Rejected login for team {team_name!r}")
        return None

    with write_transaction(db, "recording login"):
        if mark_registered(db, team.id):
            activity.log_activity(db, team.id, activity.REGISTERED, "Team registered for competition")
        activity.log_activity(db, team.id, activity.LOGGED_IN, "Team logged into the platform")

    db.refresh(team)
    logger.info(f"Team {team.team_name!r} logged in")
    return team


def team_progress(db: Session, team_id: int) -> TeamProgress:
    """Unknown teams get an empty progress record rather than an error."""
    team = db.query(Team).filter(Team.id == team_id).first()
    if team is None:
        return TeamProgress()

    solved_ids = [
        row[0]
        for row in db.query(SolvedProblem.problem_id)
        .filter(SolvedProblem.team_id == team_id)
        .order_by(SolvedProblem.problem_id)
        .all()
    ]
    return TeamProgress(
        team_name=team.team_name,
        total_score=team.total_score,
        problems_solved=len(solved_ids),
        solved_problem_ids=solved_ids,
    )


__all__ = [
    "TeamProgress",
    "generate_access_code",
    "get_team",
    "list_teams",
    "create_team",
    "delete_team",
    "authenticate",
    "mark_registered",
    "increment_score",
    "login",
    "team_progress",
]

"""Auth - bearer tokens for teams and the contest admin."""

from datetime import datetime, timedelta
from functools import lru_cache
from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from .db import get_db
from .settings import (
    ACCESS_TOKEN_EXPIRE_MINUTES,
    ADMIN_PASSWORD,
    ADMIN_PASSWORD_HASH,
    JWT_ALGORITHM,
    SECRET_KEY,
)
from domain.models import Team

ROLE_TEAM = "team"
ROLE_ADMIN = "admin"

pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/team/login")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


@lru_cache(maxsize=1)
def _admin_password_hash() -> str:
    return ADMIN_PASSWORD_HASH or get_password_hash(ADMIN_PASSWORD)


def verify_admin_password(password: Optional[str]) -> bool:
    if not password:
        return False
    return verify_password(password, _admin_password_hash())


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.utcnow() + expires_delta
    else:
        expire = datetime.utcnow() + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(to_encode, SECRET_KEY, algorithm=JWT_ALGORITHM)
    return encoded_jwt


def create_team_token(team: Team) -> str:
    return create_access_token({"sub": str(team.id), "role": ROLE_TEAM, "team_name": team.team_name})


def create_admin_token() -> str:
    return create_access_token({"sub": "admin", "role": ROLE_ADMIN})


def _credentials_exception() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )


def decode_token(token: str) -> Dict[str, Any]:
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[JWT_ALGORITHM])
    except JWTError:
        raise _credentials_exception()
    if payload.get("sub") is None or payload.get("role") not in (ROLE_TEAM, ROLE_ADMIN):
        raise _credentials_exception()
    return payload


def get_current_team(token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)) -> Team:
    """Resolve the bearer token to a team that still exists"""
    payload = decode_token(token)
    if payload["role"] != ROLE_TEAM:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Team access required")

    try:
        team_id = int(payload["sub"])
    except (TypeError, ValueError):
        raise _credentials_exception()

    team = db.query(Team).filter(Team.id == team_id).first()
    if team is None:
        raise _credentials_exception()
    return team


def get_current_admin(token: str = Depends(oauth2_scheme)) -> Dict[str, Any]:
    payload = decode_token(token)
    if payload["role"] != ROLE_ADMIN:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return payload


__all__ = [
    "get_current_team",
    "get_current_admin",
    "create_team_token",
    "create_admin_token",
    "verify_admin_password",
    "verify_password",
    "get_password_hash",
]

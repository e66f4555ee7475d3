"""Activity log - append-only audit trail of team actions."""

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from app.settings import ACTIVITY_FEED_LIMIT
from domain.models import ActivityEntry, Team

REGISTERED = "registered"
LOGGED_IN = "logged in"
SOLVED = "solved problem"
FAILED = "failed submission"
RESUBMITTED = "resubmitted"


@dataclass
class ActivityItem:
    team: str
    action: str
    details: Optional[str]
    timestamp: datetime


def log_activity(db: Session, team_id: int, action: str, details: str = "") -> ActivityEntry:
    """Stage an entry in the caller's transaction. The caller commits."""
    entry = ActivityEntry(team_id=team_id, action=action, details=details)
    db.add(entry)
    return entry


def recent_activity(db: Session, limit: int = ACTIVITY_FEED_LIMIT) -> List[ActivityItem]:
    rows = (
        db.query(ActivityEntry, Team.team_name)
        .join(Team, ActivityEntry.team_id == Team.id)
        .order_by(ActivityEntry.timestamp.desc(), ActivityEntry.id.desc())
        .limit(limit)
        .all()
    )
    return [
        ActivityItem(team=team_name, action=entry.action, details=entry.details, timestamp=entry.timestamp)
        for (entry, team_name) in rows
    ]


__all__ = [
    "REGISTERED",
    "LOGGED_IN",
    "SOLVED",
    "FAILED",
    "RESUBMITTED",
    "ActivityItem",
    "log_activity",
    "recent_activity",
]

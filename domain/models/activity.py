"""
Activity log database models.
Contains: ActivityEntry
"""
from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from app.db import Base


class ActivityEntry(Base):
    """Audit trail of team actions (login, solve, fail, resubmit)"""
    __tablename__ = "activity_log"

    id = Column(Integer, primary_key=True, index=True)
    team_id = Column(Integer, ForeignKey("teams.id", ondelete="CASCADE"), nullable=False, index=True)
    action = Column(String(64), nullable=False)
    details = Column(Text, nullable=True)
    timestamp = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    team = relationship("Team", back_populates="activities")

"""
Submission database models.
Contains: Submission, SolvedProblem
"""
from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, JSON, String, Text
from sqlalchemy.orm import relationship

from app.db import Base


class Submission(Base):
    """Every judged attempt, including repeats. Never updated."""
    __tablename__ = "submissions"

    id = Column(Integer, primary_key=True, index=True)
    team_id = Column(Integer, ForeignKey("teams.id", ondelete="CASCADE"), nullable=False, index=True)
    problem_id = Column(Integer, ForeignKey("problems.id", ondelete="CASCADE"), nullable=False)

    # Code submitted
    code = Column(Text, nullable=False)
    language = Column(String(32), nullable=False)

    # Results
    status = Column(String(32), nullable=False)  # accepted | wrong_answer | error
    score = Column(Integer, default=0, nullable=False)  # tests passed in this attempt
    test_results = Column(JSON, nullable=True)

    # Metadata
    submitted_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    # Relationships
    team = relationship("Team", back_populates="submissions")
    problem = relationship("Problem", back_populates="submissions")


class SolvedProblem(Base):
    """First accepted solve of a problem by a team.

    The composite primary key is what guarantees a problem is credited once.
    """
    __tablename__ = "solved_problems"

    team_id = Column(Integer, ForeignKey("teams.id", ondelete="CASCADE"), primary_key=True)
    problem_id = Column(Integer, ForeignKey("problems.id", ondelete="CASCADE"), primary_key=True)
    solved_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    team = relationship("Team", back_populates="solved")

"""
Core database models.
Contains: Team, Problem, Difficulty, TestCase
"""
import enum
from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, Enum, ForeignKey, Integer, JSON, String
from sqlalchemy.orm import relationship

from app.db import Base


class Difficulty(str, enum.Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


class Team(Base):
    """Contest team - authenticates with team name + access code"""
    __tablename__ = "teams"

    id = Column(Integer, primary_key=True, index=True)
    team_name = Column(String(150), unique=True, index=True, nullable=False)
    access_code = Column(String(64), unique=True, nullable=False)
    registered = Column(Boolean, default=False, nullable=False)  # flipped on first login
    total_score = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Deleting a team removes everything it produced.
    submissions = relationship("Submission", back_populates="team", cascade="all, delete-orphan", passive_deletes=True)
    solved = relationship("SolvedProblem", back_populates="team", cascade="all, delete-orphan", passive_deletes=True)
    activities = relationship("ActivityEntry", back_populates="team", cascade="all, delete-orphan", passive_deletes=True)


class Problem(Base):
    """Problem model - read-only once seeded"""
    __tablename__ = "problems"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    difficulty = Column(Enum(Difficulty, native_enum=False, values_callable=lambda e: [m.value for m in e]), nullable=False)
    points = Column(Integer, nullable=False)
    checker = Column(String(32), nullable=False, default="exact")  # see domain/contest/checkers.py

    # Relationships
    testcases = relationship(
        "TestCase",
        back_populates="problem",
        order_by="TestCase.position",
        cascade="all, delete-orphan",
    )
    submissions = relationship("Submission", back_populates="problem")


class TestCase(Base):
    """Test case - arbitrary JSON input and the expected JSON output"""
    __tablename__ = "test_cases"

    id = Column(Integer, primary_key=True, index=True)
    problem_id = Column(Integer, ForeignKey("problems.id", ondelete="CASCADE"), nullable=False)
    position = Column(Integer, nullable=False, default=0)
    input = Column(JSON, nullable=True)
    expected_output = Column(JSON, nullable=True)

    # Relationships
    problem = relationship("Problem", back_populates="testcases")

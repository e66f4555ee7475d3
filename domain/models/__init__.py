"""Models package - SQLAlchemy ORM models for the contest database."""

from .core import (
    Team,
    Problem,
    Difficulty,
    TestCase,
)
from .submission import Submission, SolvedProblem
from .activity import ActivityEntry

__all__ = [
    "Team",
    "Problem",
    "Difficulty",
    "TestCase",
    "Submission",
    "SolvedProblem",
    "ActivityEntry",
]

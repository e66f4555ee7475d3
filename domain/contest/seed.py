"""Initial problem set. Inserted once, when the problems table is empty."""

import logging
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from domain.models import Difficulty, Problem, TestCase
from .storage import write_transaction

logger = logging.getLogger(__name__)


SEED_PROBLEMS: List[Dict[str, Any]] = [
    {
        "title": "Two Sum",
        "difficulty": Difficulty.EASY,
        "points": 100,
        "checker": "two_sum",
        "test_cases": [
            ({"nums": [2, 7, 11, 15], "target": 9}, [0, 1]),
            ({"nums": [3, 2, 4], "target": 6}, [1, 2]),
            ({"nums": [3, 3], "target": 6}, [0, 1]),
            ({"nums": [1, 5, 3, 7, 9], "target": 12}, [2, 4]),
            ({"nums": [0, 4, 3, 0], "target": 0}, [0, 3]),
        ],
    },
    {
        "title": "Valid Parentheses",
        "difficulty": Difficulty.EASY,
        "points": 100,
        "test_cases": [
            ("()", True),
            ("()[]{}", True),
            ("(]", False),
            ("([)]", False),
            ("{[]}", True),
        ],
    },
    {
        "title": "Binary Search",
        "difficulty": Difficulty.MEDIUM,
        "points": 200,
        "test_cases": [
            ({"nums": [-1, 0, 3, 5, 9, 12], "target": 9}, 4),
            ({"nums": [-1, 0, 3, 5, 9, 12], "target": 2}, -1),
            ({"nums": [5], "target": 5}, 0),
            ({"nums": [1, 3, 5, 7, 9, 11], "target": 7}, 3),
            ({"nums": [2, 4, 6, 8, 10], "target": 1}, -1),
        ],
    },
    {
        "title": "Coin Change",
        "difficulty": Difficulty.MEDIUM,
        "points": 200,
        "test_cases": [
            ({"coins": [1, 2, 5], "amount": 11}, 3),
            ({"coins": [2], "amount": 3}, -1),
            ({"coins": [1], "amount": 0}, 0),
            ({"coins": [1, 3, 4], "amount": 6}, 2),
            ({"coins": [2, 5, 10], "amount": 27}, 4),
        ],
    },
    {
        "title": "Merge Intervals",
        "difficulty": Difficulty.MEDIUM,
        "points": 200,
        "test_cases": [
            ([[1, 3], [2, 6], [8, 10], [15, 18]], [[1, 6], [8, 10], [15, 18]]),
            ([[1, 4], [4, 5]], [[1, 5]]),
            ([[1, 4], [0, 4]], [[0, 4]]),
            ([[1, 3]], [[1, 3]]),
            ([[1, 4], [2, 3]], [[1, 4]]),
        ],
    },
    {
        "title": "Word Ladder",
        "difficulty": Difficulty.HARD,
        "points": 350,
        "test_cases": [
            ({"beginWord": "hit", "endWord": "cog", "wordList": ["hot", "dot", "dog", "lot", "log", "cog"]}, 5),
            ({"beginWord": "hit", "endWord": "cog", "wordList": ["hot", "dot", "dog", "lot", "log"]}, 0),
            ({"beginWord": "a", "endWord": "c", "wordList": ["a", "b", "c"]}, 2),
        ],
    },
    {
        "title": "Longest Increasing Path in Matrix",
        "difficulty": Difficulty.HARD,
        "points": 350,
        "test_cases": [
            ([[9, 9, 4], [6, 6, 8], [2, 1, 1]], 4),
            ([[3, 4, 5], [3, 2, 6], [2, 2, 1]], 4),
            ([[1]], 1),
        ],
    },
]


def seed_problems(db: Session, problems: List[Dict[str, Any]] = SEED_PROBLEMS) -> int:
    """Insert the problem set if the catalog is empty. Returns how many were added."""
    if db.query(Problem.id).first() is not None:
        return 0

    with write_transaction(db, "seeding problems"):
        for data in problems:
            problem = Problem(
                title=data["title"],
                difficulty=data["difficulty"],
                points=data["points"],
                checker=data.get("checker", "exact"),
            )
            problem.testcases = [
                TestCase(position=i, input=test_input, expected_output=expected)
                for i, (test_input, expected) in enumerate(data["test_cases"])
            ]
            db.add(problem)

    logger.info(f"Seeded {len(problems)} problems")
    return len(problems)


__all__ = ["SEED_PROBLEMS", "seed_problems"]

from __future__ import annotations

from typing import Any, Callable, Dict

import pytest
from fastapi.testclient import TestClient

from app.db import Database
from app.main import create_app
from domain.contest import Evaluator, teams
from domain.contest.seed import seed_problems
from domain.models import Problem
from infra.services import CodeRunner, RunOutcome

TWO_SUM = """
def two_sum(nums, target):
    seen = {}
    for i, n in enumerate(nums):
        if target - n in seen:
            return [seen[target - n], i]
        seen[n] = i
    return []
"""

WRONG_TWO_SUM = """
def two_sum(nums, target):
    # always answers with the first two indices
    return [0, 1]
"""


class FakeRunner(CodeRunner):
    """Deterministic stand-in for a sandbox.

    The answer is picked by a marker in the submitted code: `solve_with`
    maps a marker to a function of the test input.
    """

    def __init__(self, solve_with: Dict[str, Callable[[Any], Any]]):
        self.solve_with = solve_with
        self.calls = 0

    def run(self, code: str, test_input: Any) -> RunOutcome:
        self.calls += 1
        for marker, fn in self.solve_with.items():
            if marker in code:
                try:
                    return RunOutcome(ok=True, output=fn(test_input))
                except Exception as e:
                    return RunOutcome(ok=False, error=repr(e))
        return RunOutcome(ok=False, error="NameError: no solution")


def _two_sum(test_input):
    nums, target = test_input["nums"], test_input["target"]
    seen = {}
    for i, n in enumerate(nums):
        if target - n in seen:
            return [seen[target - n], i]
        seen[n] = i
    return []


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner({
        "seen[target - n]": _two_sum,
        "first two indices": lambda _: [0, 1],
    })


@pytest.fixture
def evaluator(runner) -> Evaluator:
    return Evaluator(runner, supported_languages=["python"], min_code_length=50)


@pytest.fixture
def database():
    database = Database("sqlite://").init()
    yield database
    database.close()


@pytest.fixture
def db(database):
    session = database.session()
    seed_problems(session)
    yield session
    session.close()


@pytest.fixture
def two_sum(db) -> Problem:
    return db.query(Problem).filter(Problem.title == "Two Sum").one()


@pytest.fixture
def make_team(db):
    def _make(name: str, registered: bool = True):
        team = teams.create_team(db, name)
        if registered:
            teams.login(db, team.team_name, team.access_code)
        return team
    return _make


@pytest.fixture
def client(database, evaluator):
    app = create_app(database=database, evaluator=evaluator, seed=True)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def admin_headers(client) -> Dict[str, str]:
    res = client.post("/admin/login", json={"password": "admin123"})
    assert res.status_code == 200
    return {"Authorization": f"Bearer {res.json()['access_token']}"}

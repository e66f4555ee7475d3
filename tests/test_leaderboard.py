from datetime import datetime, timedelta

import pytest

from domain.contest import ConflictError, NotFoundError, ValidationError, activity, catalog, judging, leaderboard, scoring, teams
from domain.contest.evaluator import EvaluationResult, Verdict
from domain.models import ActivityEntry, SolvedProblem, Submission, Team

from .conftest import TWO_SUM, WRONG_TWO_SUM


def _solve(db, team, problem):
    scoring.apply_result(db, team.id, problem.id, EvaluationResult(Verdict.ACCEPTED, 1, 1))
    db.commit()


def test_rank_orders_by_score_then_solved(db, make_team):
    problems = {p.title: p for p in catalog.list_problems(db)}
    a = make_team("a")
    b = make_team("b")
    c = make_team("c")
    d = make_team("d")

    _solve(db, a, problems["Word Ladder"])          # 350, 1 solved
    _solve(db, b, problems["Two Sum"])              # 100
    _solve(db, b, problems["Valid Parentheses"])    # +100
    _solve(db, b, problems["Binary Search"])        # +200 -> 400, 3 solved
    _solve(db, c, problems["Coin Change"])          # 200
    _solve(db, c, problems["Merge Intervals"])      # +200 -> 400, 2 solved

    standings = leaderboard.rank(db)

    assert [s.team_name for s in standings] == ["b", "c", "a", "d"]
    assert [(s.score, s.problems_solved) for s in standings] == [(400, 3), (400, 2), (350, 1), (0, 0)]
    for higher, lower in zip(standings, standings[1:]):
        assert (higher.score, higher.problems_solved) >= (lower.score, lower.problems_solved)


def test_rank_only_includes_registered_teams(db, make_team):
    make_team("registered")
    make_team("never-logged-in", registered=False)

    assert [s.team_name for s in leaderboard.rank(db)] == ["registered"]


def test_last_submission_time(db, evaluator, make_team, two_sum):
    active = make_team("active")
    idle = make_team("idle")

    judging.judge_submission(db, evaluator, active.id, two_sum.id, WRONG_TWO_SUM, "python")
    judging.judge_submission(db, evaluator, active.id, two_sum.id, TWO_SUM, "python")
    latest = db.query(Submission).order_by(Submission.id.desc()).first().submitted_at

    by_name = {s.team_name: s for s in leaderboard.rank(db)}
    assert by_name["active"].last_submission_at == latest
    assert by_name["idle"].last_submission_at is None


def test_submissions_do_not_inflate_solved_count(db, evaluator, make_team, two_sum):
    team = make_team("alpha")
    for _ in range(3):
        judging.judge_submission(db, evaluator, team.id, two_sum.id, TWO_SUM, "python")

    (standing,) = leaderboard.rank(db)
    assert standing.problems_solved == 1
    assert standing.score == 100


def test_deleting_team_removes_it_and_its_records(db, evaluator, make_team, two_sum):
    keep = make_team("keep")
    gone = make_team("gone")
    judging.judge_submission(db, evaluator, gone.id, two_sum.id, TWO_SUM, "python")
    gone_id = gone.id

    teams.delete_team(db, gone_id)

    assert [t.team_name for t in teams.list_teams(db)] == ["keep"]
    assert [s.team_name for s in leaderboard.rank(db)] == ["keep"]
    assert db.query(Submission).filter_by(team_id=gone_id).count() == 0
    assert db.query(SolvedProblem).filter_by(team_id=gone_id).count() == 0
    assert db.query(ActivityEntry).filter_by(team_id=gone_id).count() == 0
    assert leaderboard.contest_stats(db).total_teams == 1
    assert keep.id != gone_id


def test_delete_unknown_team(db):
    with pytest.raises(NotFoundError):
        teams.delete_team(db, 31337)


def test_contest_stats(db, evaluator, make_team, two_sum):
    a = make_team("a")
    b = make_team("b")
    make_team("c", registered=False)
    judging.judge_submission(db, evaluator, a.id, two_sum.id, TWO_SUM, "python")
    judging.judge_submission(db, evaluator, a.id, two_sum.id, TWO_SUM, "python")
    judging.judge_submission(db, evaluator, b.id, two_sum.id, WRONG_TWO_SUM, "python")

    # push b's submission out of the activity window
    db.query(Submission).filter(Submission.team_id == b.id).update(
        {Submission.submitted_at: datetime.utcnow() - timedelta(hours=1)}
    )
    db.commit()

    stats = leaderboard.contest_stats(db)
    assert stats.total_teams == 3
    assert stats.registered_teams == 2
    assert stats.active_teams == 1
    assert stats.total_submissions == 3


def test_create_team_generates_code(db):
    team = teams.create_team(db, "  spaced  ")

    assert team.team_name == "spaced"
    assert len(team.access_code) == 8
    assert team.access_code == team.access_code.upper()
    assert team.registered is False
    assert team.total_score == 0


def test_create_team_validation_and_conflict(db):
    teams.create_team(db, "alpha")

    with pytest.raises(ConflictError):
        teams.create_team(db, "alpha")
    with pytest.raises(ValidationError):
        teams.create_team(db, "   ")
    with pytest.raises(ValidationError):
        teams.create_team(db, None)


def test_login_registers_once(db):
    team = teams.create_team(db, "alpha")

    assert teams.login(db, "alpha", "WRONG") is None
    assert teams.login(db, "nobody", team.access_code) is None

    first = teams.login(db, "alpha", team.access_code)
    second = teams.login(db, "alpha", team.access_code)

    assert first.registered is True and second.registered is True
    actions = [
        e.action for e in db.query(ActivityEntry).filter_by(team_id=team.id).order_by(ActivityEntry.id)
    ]
    assert actions == [activity.REGISTERED, activity.LOGGED_IN, activity.LOGGED_IN]


def test_login_requires_both_fields(db):
    with pytest.raises(ValidationError):
        teams.login(db, "alpha", "")
    with pytest.raises(ValidationError):
        teams.login(db, None, "CODE")


def test_recent_activity_is_newest_first(db, make_team, two_sum):
    team = make_team("alpha")
    _solve(db, team, two_sum)

    feed = activity.recent_activity(db)
    assert feed[0].team == "alpha"
    assert feed[0].action == activity.SOLVED
    assert feed[0].details == "Two Sum (+100 points)"
    assert [a.action for a in feed[1:]] == [activity.LOGGED_IN, activity.REGISTERED]
    assert len(activity.recent_activity(db, limit=1)) == 1


def test_increment_score_is_cumulative(db, make_team):
    team = make_team("alpha")
    teams.increment_score(db, team.id, 100)
    teams.increment_score(db, team.id, 250)
    db.commit()
    db.expire_all()
    assert db.get(Team, team.id).total_score == 350

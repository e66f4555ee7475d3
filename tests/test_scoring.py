import pytest
from sqlalchemy.exc import OperationalError

from domain.contest import (
    NotFoundError,
    StorageFailure,
    ValidationError,
    Verdict,
    activity,
    catalog,
    judging,
    ledger,
    scoring,
    teams,
)
from domain.contest.evaluator import EvaluationResult
from domain.models import ActivityEntry, SolvedProblem, Submission, Team

from .conftest import TWO_SUM, WRONG_TWO_SUM


def _accepted(total=5):
    return EvaluationResult(Verdict.ACCEPTED, total, total)


def _score(db, team_id):
    db.expire_all()
    return db.query(Team).filter(Team.id == team_id).one().total_score


def _actions(db, team_id):
    rows = db.query(ActivityEntry).filter(ActivityEntry.team_id == team_id).order_by(ActivityEntry.id).all()
    return [r.action for r in rows]


def test_first_accepted_submission_credits_points(db, evaluator, make_team, two_sum):
    team = make_team("alpha")

    outcome = judging.judge_submission(db, evaluator, team.id, two_sum.id, TWO_SUM, "python")

    assert outcome.credited is True
    assert outcome.result.status == Verdict.ACCEPTED
    assert outcome.result.tests_passed == 5
    assert outcome.result.total_tests == 5
    assert _score(db, team.id) == 100
    assert db.query(SolvedProblem).filter_by(team_id=team.id, problem_id=two_sum.id).count() == 1
    assert _actions(db, team.id)[-1] == activity.SOLVED


def test_resubmission_is_not_credited_again(db, evaluator, make_team, two_sum):
    team = make_team("alpha")

    first = judging.judge_submission(db, evaluator, team.id, two_sum.id, TWO_SUM, "python")
    second = judging.judge_submission(db, evaluator, team.id, two_sum.id, TWO_SUM, "python")
    third = judging.judge_submission(db, evaluator, team.id, two_sum.id, TWO_SUM, "python")

    assert first.credited is True
    assert second.credited is False and third.credited is False
    # same evaluation every time
    assert second.result == first.result
    assert _score(db, team.id) == 100
    assert db.query(SolvedProblem).filter_by(team_id=team.id).count() == 1
    # every attempt is still in the ledger
    assert db.query(Submission).filter_by(team_id=team.id).count() == 3
    assert _actions(db, team.id)[-2:] == [activity.RESUBMITTED, activity.RESUBMITTED]


def test_rejected_submission_leaves_score_unchanged(db, evaluator, make_team, two_sum):
    team = make_team("alpha")

    wrong = judging.judge_submission(db, evaluator, team.id, two_sum.id, WRONG_TWO_SUM, "python")
    error = judging.judge_submission(db, evaluator, team.id, two_sum.id, TWO_SUM, "cpp")

    assert wrong.result.status == Verdict.WRONG_ANSWER
    assert error.result.status == Verdict.ERROR
    assert not wrong.credited and not error.credited
    assert _score(db, team.id) == 0
    assert db.query(SolvedProblem).count() == 0
    assert _actions(db, team.id)[-2:] == [activity.FAILED, activity.FAILED]


def test_failed_attempts_do_not_block_later_credit(db, evaluator, make_team, two_sum):
    team = make_team("alpha")

    judging.judge_submission(db, evaluator, team.id, two_sum.id, WRONG_TWO_SUM, "python")
    outcome = judging.judge_submission(db, evaluator, team.id, two_sum.id, TWO_SUM, "python")

    assert outcome.credited is True
    assert _score(db, team.id) == 100


def test_score_is_sum_of_solved_problem_points(db, make_team):
    team = make_team("alpha")

    solved_points = 0
    for problem in catalog.list_problems(db)[:3]:
        for _ in range(2):
            scoring.apply_result(db, team.id, problem.id, _accepted(len(problem.testcases)))
        db.commit()
        solved_points += problem.points

    assert _score(db, team.id) == solved_points == 100 + 100 + 200


def test_apply_result_reports_points(db, make_team, two_sum):
    team = make_team("alpha")

    first = scoring.apply_result(db, team.id, two_sum.id, _accepted())
    second = scoring.apply_result(db, team.id, two_sum.id, _accepted())
    db.commit()

    assert first.credited_now is True and first.points_awarded == 100
    assert second.credited_now is False and second.points_awarded == 0


def test_claim_first_solve_savepoint_path(db, make_team, two_sum, monkeypatch):
    # Dialects without ON CONFLICT fall back to a savepoint.
    monkeypatch.setattr(scoring, "_UPSERT_INSERTS", {})
    team = make_team("alpha")

    assert scoring.claim_first_solve(db, team.id, two_sum.id) is True
    assert scoring.claim_first_solve(db, team.id, two_sum.id) is False
    db.commit()
    assert db.query(SolvedProblem).count() == 1


def test_unknown_problem_or_team(db, evaluator, make_team):
    team = make_team("alpha")

    with pytest.raises(NotFoundError):
        judging.judge_submission(db, evaluator, team.id, 9999, TWO_SUM, "python")
    with pytest.raises(NotFoundError):
        judging.judge_submission(db, evaluator, 9999, 1, TWO_SUM, "python")
    assert db.query(Submission).count() == 0


@pytest.mark.parametrize("team_id, problem_id, code", [
    (None, 1, TWO_SUM),
    (1, None, TWO_SUM),
    (1, 1, ""),
])
def test_missing_fields(db, evaluator, team_id, problem_id, code):
    with pytest.raises(ValidationError):
        judging.judge_submission(db, evaluator, team_id, problem_id, code, "python")


def test_ledger_lists_newest_first(db, evaluator, make_team, two_sum):
    team = make_team("alpha")
    other = make_team("beta")

    ids = [
        judging.judge_submission(db, evaluator, team.id, two_sum.id, code, "python").submission_id
        for code in (WRONG_TWO_SUM, TWO_SUM, TWO_SUM)
    ]
    judging.judge_submission(db, evaluator, other.id, two_sum.id, TWO_SUM, "python")

    total, rows = ledger.list_by_team(db, team.id)
    assert total == 3
    assert [sub.id for (sub, _) in rows] == list(reversed(ids))
    assert {title for (_, title) in rows} == {"Two Sum"}

    total, rows = ledger.list_by_team(db, team.id, status="wrong_answer")
    assert total == 1
    assert rows[0][0].score == 2


def test_submission_response_shape(db, evaluator, make_team, two_sum):
    team = make_team("alpha")
    outcome = judging.judge_submission(db, evaluator, team.id, two_sum.id, TWO_SUM, "python")

    body = judging.submission_response(outcome)

    assert body["success"] is True
    assert body["status"] == "accepted"
    assert body["score"] == 5
    assert body["total_tests"] == 5
    assert body["all_passed"] is True
    assert len(body["test_results"]) == 5
    assert body["credited"] is True
    assert body["submission_id"] == outcome.submission_id


def test_progress_view(db, evaluator, make_team, two_sum):
    team = make_team("alpha")
    judging.judge_submission(db, evaluator, team.id, two_sum.id, TWO_SUM, "python")

    progress = teams.team_progress(db, team.id)
    assert progress.team_name == "alpha"
    assert progress.total_score == 100
    assert progress.problems_solved == 1
    assert progress.solved_problem_ids == [two_sum.id]


def test_progress_of_unknown_team_is_empty(db):
    progress = teams.team_progress(db, 424242)
    assert progress == teams.TeamProgress()
    assert progress.team_name == "" and progress.total_score == 0 and progress.solved_problem_ids == []


def test_storage_failure_leaves_no_partial_state(db, evaluator, make_team, two_sum, monkeypatch):
    team = make_team("alpha")
    activity_before = db.query(ActivityEntry).count()

    def failing_increment(*args, **kwargs):
        raise OperationalError("UPDATE teams", {}, Exception("disk I/O error"))

    monkeypatch.setattr(teams, "increment_score", failing_increment)

    with pytest.raises(StorageFailure):
        judging.judge_submission(db, evaluator, team.id, two_sum.id, TWO_SUM, "python")

    assert db.query(Submission).count() == 0
    assert db.query(SolvedProblem).count() == 0
    assert db.query(ActivityEntry).count() == activity_before
    assert _score(db, team.id) == 0

    # nothing was claimed, so the next attempt is credited
    monkeypatch.undo()
    assert judging.judge_submission(db, evaluator, team.id, two_sum.id, TWO_SUM, "python").credited is True
    assert _score(db, team.id) == 100


def test_no_transaction_is_open_while_code_runs(db, evaluator, make_team, two_sum, monkeypatch):
    team = make_team("alpha")
    in_transaction = []
    evaluate = evaluator.evaluate

    def recording_evaluate(*args, **kwargs):
        in_transaction.append(db.in_transaction())
        return evaluate(*args, **kwargs)

    monkeypatch.setattr(evaluator, "evaluate", recording_evaluate)
    judging.judge_submission(db, evaluator, team.id, two_sum.id, TWO_SUM, "python")

    assert in_transaction == [False]


def test_team_deleted_while_code_runs(database, db, evaluator, make_team, two_sum, monkeypatch):
    team_id = make_team("alpha").id
    evaluate = evaluator.evaluate

    def evaluate_then_delete_team(*args, **kwargs):
        result = evaluate(*args, **kwargs)
        other = database.session()
        try:
            teams.delete_team(other, team_id)
        finally:
            other.close()
        return result

    monkeypatch.setattr(evaluator, "evaluate", evaluate_then_delete_team)

    with pytest.raises(NotFoundError):
        judging.judge_submission(db, evaluator, team_id, two_sum.id, TWO_SUM, "python")
    assert db.query(Submission).count() == 0

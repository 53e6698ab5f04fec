import uuid

import pytest

from grading.exceptions import JudgeTimeout, JudgeUnavailable, ProblemNotFound, UnsupportedLanguage
from grading.managers.submission_manager import SubmissionManager
from grading.models.database import Submission
from grading.models.results import SubmissionStatus
from grading.repositories.user_repository import UserRepository


@pytest.fixture
def manager(session, judge_client):
    return SubmissionManager(session, judge_client)


def solved_ids(session, user):
    return [p.id for p in UserRepository(session).get_solved_problems(user.id)]


def test_accepted_submission_is_recorded_and_credited(manager, session, fake_judge, user, problem):
    fake_judge.memory["add"] = 2048

    result = manager.submit(user, problem.id, "add", "cpp")

    assert result.accepted is True
    assert result.status == SubmissionStatus.ACCEPTED
    assert (result.passed_test_cases, result.total_test_cases) == (3, 3)
    assert result.runtime == pytest.approx(0.3)
    assert result.memory == 2048

    stored = session.get(Submission, result.submission_id)
    assert stored.status == "accepted"
    assert stored.test_cases_passed == 3
    assert stored.judged_at is not None
    assert solved_ids(session, user) == [problem.id]


def test_only_hidden_tests_are_judged(manager, fake_judge, user, problem):
    manager.submit(user, problem.id, "add", "java")

    assert [entry["stdin"] for entry in fake_judge.received] == ["3 4", "10 5", "0 0"]
    assert {entry["language_id"] for entry in fake_judge.received} == {62}


def test_resubmitting_a_solved_problem_credits_once(manager, session, user, problem):
    manager.submit(user, problem.id, "add", "cpp")
    second = manager.submit(user, problem.id, "add", "javascript")

    assert second.accepted is True
    assert session.query(Submission).count() == 2
    assert solved_ids(session, user) == [problem.id]


def test_wrong_answer_is_not_credited(manager, session, user, problem):
    result = manager.submit(user, problem.id, "three", "cpp")

    assert result.accepted is False
    assert result.status == SubmissionStatus.WRONG_ANSWER
    assert result.passed_test_cases == 0
    assert result.runtime == 0.0
    assert result.error_message == "Test case failed"
    assert solved_ids(session, user) == []


def test_runtime_error_keeps_stderr(manager, session, user, problem):
    result = manager.submit(user, problem.id, "crash", "cpp")

    assert result.status == SubmissionStatus.RUNTIME_ERROR
    assert "Segmentation fault" in result.error_message
    assert session.get(Submission, result.submission_id).status == "runtime_error"


def test_language_is_stored_normalized(manager, session, user, problem):
    result = manager.submit(user, problem.id, "add", "cpp")

    assert session.get(Submission, result.submission_id).language == "c++"


def test_unsupported_language_stores_nothing(manager, session, fake_judge, user, problem):
    with pytest.raises(UnsupportedLanguage):
        manager.submit(user, problem.id, "print(1)", "python")

    assert session.query(Submission).count() == 0
    assert fake_judge.post_count == 0


def test_missing_problem(manager, session, user):
    with pytest.raises(ProblemNotFound):
        manager.submit(user, uuid.uuid4(), "add", "cpp")
    assert session.query(Submission).count() == 0


def test_judge_timeout_marks_submission_failed_infrastructure(manager, session, fake_judge, user, problem):
    fake_judge.processing_polls = 100

    with pytest.raises(JudgeTimeout):
        manager.submit(user, problem.id, "add", "cpp")

    stored = session.query(Submission).one()
    assert stored.status == SubmissionStatus.FAILED_INFRASTRUCTURE.value
    assert stored.error_message.startswith("judge_timeout")
    assert solved_ids(session, user) == []


def test_unreachable_judge_marks_submission_failed_infrastructure(manager, session, fake_judge, user, problem):
    fake_judge.fail_with_status = 503

    with pytest.raises(JudgeUnavailable):
        manager.submit(user, problem.id, "add", "cpp")

    assert session.query(Submission).one().status == "failed_infrastructure"


def test_malformed_judge_reply_marks_submission_failed_infrastructure(manager, session, fake_judge, user, problem):
    fake_judge.result_body = [{"token": "token-1"}]

    with pytest.raises(JudgeUnavailable):
        manager.submit(user, problem.id, "add", "cpp")

    stored = session.query(Submission).one()
    assert stored.status == SubmissionStatus.FAILED_INFRASTRUCTURE.value
    assert solved_ids(session, user) == []

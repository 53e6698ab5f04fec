import copy
import uuid

import pytest

from grading.exceptions import ProblemNotFound, ReferenceSolutionFailed
from grading.managers.problem_manager import ProblemManager
from grading.managers.submission_manager import SubmissionManager
from grading.managers.validation_manager import ValidationManager
from grading.models.database import Problem, Submission, UserSolvedProblem


@pytest.fixture
def manager(session, judge_client):
    return ProblemManager(session, ValidationManager(judge_client))


def test_create_problem_persists_validated_draft(manager, session, admin, problem_draft):
    problem = manager.create_problem(problem_draft, creator_id=admin.id)

    stored = session.get(Problem, problem.id)
    assert stored.title == "Sum of Two Numbers"
    assert stored.creator_id == admin.id
    assert len(stored.hidden_test_cases) == 3


def test_failed_validation_creates_nothing(manager, session, problem_draft):
    draft = copy.deepcopy(problem_draft)
    draft["reference_solution"][0]["complete_code"] = "three"

    with pytest.raises(ReferenceSolutionFailed):
        manager.create_problem(draft)
    assert session.query(Problem).count() == 0


def test_failed_validation_leaves_problem_unchanged(manager, session, problem, problem_draft):
    draft = copy.deepcopy(problem_draft)
    draft["title"] = "Renamed"
    draft["reference_solution"][1]["complete_code"] = "three"

    with pytest.raises(ReferenceSolutionFailed):
        manager.update_problem(problem.id, draft)

    session.expire_all()
    assert session.get(Problem, problem.id).title == "Sum of Two Numbers"


def test_update_replaces_document(manager, session, problem, problem_draft):
    draft = copy.deepcopy(problem_draft)
    draft["title"] = "A plus B"
    draft["hidden_test_cases"] = [{"input": "5 5", "output": "10"}]

    updated = manager.update_problem(problem.id, draft)

    assert updated.title == "A plus B"
    assert updated.hidden_test_cases == [{"input": "5 5", "output": "10"}]
    assert updated.updated_at is not None


def test_update_missing_problem(manager, problem_draft, fake_judge):
    with pytest.raises(ProblemNotFound):
        manager.update_problem(uuid.uuid4(), problem_draft)
    assert fake_judge.post_count == 0


def test_delete_cascades_to_submissions_and_solved_entries(manager, session, judge_client, problem, user):
    SubmissionManager(session, judge_client).submit(user, problem.id, "add", "cpp")
    assert session.query(Submission).count() == 1
    assert session.query(UserSolvedProblem).count() == 1

    manager.delete_problem(problem.id)

    assert session.query(Problem).count() == 0
    assert session.query(Submission).count() == 0
    assert session.query(UserSolvedProblem).count() == 0


def test_delete_missing_problem(manager):
    with pytest.raises(ProblemNotFound):
        manager.delete_problem(uuid.uuid4())


def test_list_problems_filters(manager, problem):
    assert [p.id for p in manager.list_problems()] == [problem.id]
    assert manager.list_problems(difficulty="hard") == []
    assert [p.id for p in manager.list_problems(tag="array")] == [problem.id]


def test_delete_failure_rolls_back_every_step(manager, session, judge_client, problem, user, monkeypatch):
    SubmissionManager(session, judge_client).submit(user, problem.id, "add", "cpp")

    def failing_delete(problem_id, commit=True):
        raise RuntimeError("lost connection")

    monkeypatch.setattr(manager.problems, "delete", failing_delete)
    with pytest.raises(RuntimeError):
        manager.delete_problem(problem.id)

    assert session.query(Problem).count() == 1
    assert session.query(Submission).count() == 1
    assert session.query(UserSolvedProblem).count() == 1


def test_update_loads_the_problem_once(manager, session, problem, problem_draft, monkeypatch):
    calls = []
    original = manager.problems.get_by_id

    def counting_get_by_id(problem_id):
        calls.append(problem_id)
        return original(problem_id)

    monkeypatch.setattr(manager.problems, "get_by_id", counting_get_by_id)
    manager.update_problem(problem.id, dict(problem_draft, title="A plus B"))

    assert calls == [problem.id]

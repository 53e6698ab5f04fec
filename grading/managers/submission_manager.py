from typing import Optional
from uuid import UUID

from loguru import logger
from sqlalchemy.orm import Session

from grading import languages
from grading.exceptions import JudgeError
from grading.managers.judge_client import JudgeClient, build_batch
from grading.managers.verdict_aggregator import VerdictAggregator
from grading.models.database import Submission, User
from grading.models.results import SubmissionResult, SubmissionStatus
from grading.repositories.problem_repository import ProblemRepository
from grading.repositories.submission_repository import SubmissionRepository
from grading.repositories.user_repository import UserRepository


class SubmissionManager:
    """
    Grades a user's submission against a problem's hidden test cases.

    The pending Submission row is committed before the judge is contacted, so
    every attempt stays auditable even when the judge fails. The row then
    receives exactly one result update: the verdict, or
    "failed_infrastructure" when the judge times out or is unreachable.
    """

    def __init__(
        self,
        session: Session,
        judge_client: JudgeClient,
        aggregator: Optional[VerdictAggregator] = None,
    ):
        self.problems = ProblemRepository(session)
        self.submissions = SubmissionRepository(session)
        self.users = UserRepository(session)
        self.judge_client = judge_client
        self.aggregator = aggregator or VerdictAggregator()

    def submit(self, user: User, problem_id: UUID, source_code: str, language: str) -> SubmissionResult:
        problem = self.problems.get_by_id(problem_id)
        language = languages.normalize_language(language)
        language_id = languages.resolve(language)
        hidden = problem.hidden_test_cases

        submission = self.submissions.create(Submission(
            user_id=user.id,
            problem_id=problem.id,
            code=source_code,
            language=language,
            status=SubmissionStatus.PENDING.value,
            test_cases_total=len(hidden),
        ))

        try:
            results = self.judge_client.execute(build_batch(source_code, language_id, hidden))
        except JudgeError as e:
            self.submissions.update_result(
                submission.id,
                SubmissionStatus.FAILED_INFRASTRUCTURE,
                error_message=str(e),
            )
            logger.error("submission_judge_failed", submission_id=str(submission.id), error=str(e))
            raise

        verdict = self.aggregator.aggregate(results)
        status = SubmissionStatus(verdict.status.value)
        self.submissions.update_result(
            submission.id,
            status,
            test_cases_passed=verdict.passed,
            runtime=verdict.runtime,
            memory=verdict.memory,
            error_message=verdict.error_message,
        )

        # Resubmitting a solved problem is re-judged but never credited twice
        if verdict.accepted:
            self.users.add_solved_problem(user.id, problem.id)

        return SubmissionResult(
            submission_id=submission.id,
            accepted=verdict.accepted,
            total_test_cases=len(hidden),
            passed_test_cases=verdict.passed,
            runtime=verdict.runtime,
            memory=verdict.memory,
            status=status,
            error_message=verdict.error_message,
        )

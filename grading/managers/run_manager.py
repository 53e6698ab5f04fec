from typing import Optional
from uuid import UUID

from loguru import logger
from sqlalchemy.orm import Session

from grading import languages
from grading.managers.judge_client import JudgeClient, build_batch
from grading.managers.verdict_aggregator import VerdictAggregator
from grading.models.database import User
from grading.models.results import CaseOutcome, RunResult
from grading.repositories.problem_repository import ProblemRepository


class RunManager:
    """Dry run against the visible test cases. Reads the problem, writes nothing."""

    def __init__(
        self,
        session: Session,
        judge_client: JudgeClient,
        aggregator: Optional[VerdictAggregator] = None,
    ):
        self.problems = ProblemRepository(session)
        self.judge_client = judge_client
        self.aggregator = aggregator or VerdictAggregator()

    def run(self, user: User, problem_id: UUID, source_code: str, language: str) -> RunResult:
        problem = self.problems.get_by_id(problem_id)
        language_id = languages.resolve(language)
        visible = problem.visible_test_cases

        results = self.judge_client.execute(build_batch(source_code, language_id, visible))
        verdict = self.aggregator.aggregate(results)
        logger.debug(
            "run_finished",
            user_id=str(user.id),
            problem_id=str(problem.id),
            passed=verdict.passed,
            total=verdict.total,
        )

        return RunResult(
            success=verdict.accepted,
            runtime=verdict.runtime,
            memory=verdict.memory,
            passed_test_cases=verdict.passed,
            total_test_cases=verdict.total,
            test_cases=[
                CaseOutcome(input=test_case["input"], expected_output=test_case["output"], result=result)
                for test_case, result in zip(visible, results)
            ],
            error_message=verdict.error_message,
        )

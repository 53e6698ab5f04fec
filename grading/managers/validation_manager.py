"""
Reference-solution validation for problem create/update.

Every reference solution is run against the problem's visible test cases and
must be accepted on all of them. This runs synchronously inside the admin
request: expect it to block for roughly one judge round trip per reference
language, each bounded by the judge client's poll budget
(config.judge_poll_budget_seconds). A JudgeTimeout surfaces to the caller as
an infrastructure failure, never as a failed reference solution.
"""
from typing import Any, Dict, Optional

from loguru import logger

from config import config
from grading import languages
from grading.exceptions import InvalidProblem, ReferenceSolutionFailed, UnsupportedLanguage
from grading.managers.judge_client import JudgeClient, build_batch
from grading.managers.verdict_aggregator import VerdictAggregator
from grading.models.database import DIFFICULTIES, TAGS


class ValidationManager:
    def __init__(self, judge_client: JudgeClient, aggregator: Optional[VerdictAggregator] = None):
        self.judge_client = judge_client
        self.aggregator = aggregator or VerdictAggregator()

    def check_draft(self, draft: Dict[str, Any]) -> None:
        """Structural checks that need no judge round trip."""
        if draft.get("difficulty") not in DIFFICULTIES:
            raise InvalidProblem(f"difficulty must be one of {', '.join(DIFFICULTIES)}")
        if draft.get("tag") not in TAGS:
            raise InvalidProblem(f"tag must be one of {', '.join(TAGS)}")
        if not draft.get("visible_test_cases") or not draft.get("hidden_test_cases"):
            raise InvalidProblem("at least one visible and one hidden test case is required")
        if not draft.get("reference_solution"):
            raise InvalidProblem("at least one reference solution is required")

        for entry in list(draft.get("start_code") or []) + list(draft["reference_solution"]):
            if not languages.is_supported(entry["language"]):
                raise UnsupportedLanguage(entry["language"])

    def validate(self, draft: Dict[str, Any]) -> None:
        """
        Raise unless every reference solution passes every visible test case.

        Raises:
            InvalidProblem / UnsupportedLanguage: before any judge call.
            ReferenceSolutionFailed: first language whose verdict is not accepted.
            JudgeError: the judge failed; nothing can be concluded.
        """
        self.check_draft(draft)
        visible = draft["visible_test_cases"]

        logger.info(
            "validation_started",
            title=draft.get("title"),
            languages=len(draft["reference_solution"]),
            poll_budget_seconds=config.judge_poll_budget_seconds,
        )
        for solution in draft["reference_solution"]:
            language = solution["language"]
            language_id = languages.resolve(language)
            batch = build_batch(solution["complete_code"], language_id, visible)
            verdict = self.aggregator.aggregate(self.judge_client.execute(batch))

            if not verdict.accepted:
                logger.warning(
                    "reference_solution_failed",
                    language=language,
                    passed=verdict.passed,
                    total=verdict.total,
                )
                raise ReferenceSolutionFailed(
                    language,
                    diagnostic=verdict.error_message,
                    passed=verdict.passed,
                    total=verdict.total,
                )
            logger.info("reference_solution_passed", language=language, runtime=verdict.runtime)

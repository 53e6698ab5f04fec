from grading.managers.judge_client import JudgeClient
from grading.managers.problem_manager import ProblemManager
from grading.managers.run_manager import RunManager
from grading.managers.submission_manager import SubmissionManager
from grading.managers.validation_manager import ValidationManager
from grading.managers.verdict_aggregator import VerdictAggregator

__all__ = [
    "JudgeClient",
    "ProblemManager",
    "RunManager",
    "SubmissionManager",
    "ValidationManager",
    "VerdictAggregator",
]

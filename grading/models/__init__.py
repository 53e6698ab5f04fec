from grading.models.database import (
    Base,
    Problem,
    Submission,
    User,
    UserSolvedProblem,
)
from grading.models.results import (
    BatchEntry,
    CaseOutcome,
    JudgeStatus,
    RawResult,
    RunResult,
    SubmissionResult,
    SubmissionStatus,
    Verdict,
    VerdictStatus,
)

__all__ = [
    "Base",
    "BatchEntry",
    "CaseOutcome",
    "JudgeStatus",
    "Problem",
    "RawResult",
    "RunResult",
    "Submission",
    "SubmissionResult",
    "SubmissionStatus",
    "User",
    "UserSolvedProblem",
    "Verdict",
    "VerdictStatus",
]

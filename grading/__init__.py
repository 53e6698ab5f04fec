from grading.managers import (
    JudgeClient,
    ProblemManager,
    RunManager,
    SubmissionManager,
    ValidationManager,
    VerdictAggregator,
)

from grading.models.database import (
    Problem,
    Submission,
    User,
    UserSolvedProblem,
)

from grading.models.results import (
    RunResult,
    SubmissionResult,
    Verdict,
)

__all__ = [
    # Models
    "Problem",
    "Submission",
    "User",
    "UserSolvedProblem",
    # Results
    "RunResult",
    "SubmissionResult",
    "Verdict",
    # Managers
    "JudgeClient",
    "ProblemManager",
    "RunManager",
    "SubmissionManager",
    "ValidationManager",
    "VerdictAggregator",
]

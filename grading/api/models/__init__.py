from grading.api.models.requests import (
    CodeRequest,
    ProblemDraftRequest,
    ReferenceSolutionRequest,
    StartCodeRequest,
    TestCaseRequest,
    VisibleTestCaseRequest,
)
from grading.api.models.responses import (
    ErrorResponse,
    ProblemDetailResponse,
    ProblemMutationResponse,
    ProblemSummaryResponse,
    RunResultResponse,
    SubmissionResponse,
    SubmitResultResponse,
    TestCaseResultResponse,
)


__all__ = [
    # Requests
    "CodeRequest",
    "ProblemDraftRequest",
    "ReferenceSolutionRequest",
    "StartCodeRequest",
    "TestCaseRequest",
    "VisibleTestCaseRequest",

    # Responses
    "ErrorResponse",
    "ProblemDetailResponse",
    "ProblemMutationResponse",
    "ProblemSummaryResponse",
    "RunResultResponse",
    "SubmissionResponse",
    "SubmitResultResponse",
    "TestCaseResultResponse",
]

"""
Submission router endpoints.

API prefix: /api/v1/submissions/
"""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from grading.api.dependencies import get_current_user, get_db, get_judge_client
from grading.api.models.requests import CodeRequest
from grading.api.models.responses import (
    ErrorResponse,
    RunResultResponse,
    SubmitResultResponse,
    TestCaseResultResponse,
)
from grading.managers.judge_client import JudgeClient
from grading.managers.run_manager import RunManager
from grading.managers.submission_manager import SubmissionManager
from grading.models.database import User


router = APIRouter(prefix="/api/v1/submissions", tags=["Submissions"])

JUDGE_ERRORS = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
    504: {"model": ErrorResponse},
}


@router.post(
    "/{problem_id}/submit",
    status_code=201,
    response_model=SubmitResultResponse,
    summary="Submit Code",
    description="""
Grade code against the problem's hidden test cases.

A failing verdict is a normal 201 response with `accepted=false`. A 504/502
means the judge itself failed; the stored submission is then marked
`failed_infrastructure` and the request can be retried.
    """,
    responses=JUDGE_ERRORS,
)
def submit_code(
    problem_id: UUID,
    body: CodeRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    judge_client: JudgeClient = Depends(get_judge_client),
):
    result = SubmissionManager(db, judge_client).submit(user, problem_id, body.code, body.language)
    return SubmitResultResponse(
        submission_id=str(result.submission_id),
        accepted=result.accepted,
        status=result.status.value,
        total_test_cases=result.total_test_cases,
        passed_test_cases=result.passed_test_cases,
        runtime=result.runtime,
        memory=result.memory,
        error_message=result.error_message,
    )


@router.post(
    "/{problem_id}/run",
    response_model=RunResultResponse,
    summary="Run Code",
    description="Run code against the visible test cases only. Nothing is stored.",
    responses=JUDGE_ERRORS,
)
def run_code(
    problem_id: UUID,
    body: CodeRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    judge_client: JudgeClient = Depends(get_judge_client),
):
    result = RunManager(db, judge_client).run(user, problem_id, body.code, body.language)
    return RunResultResponse(
        success=result.success,
        passed_test_cases=result.passed_test_cases,
        total_test_cases=result.total_test_cases,
        runtime=result.runtime,
        memory=result.memory,
        error_message=result.error_message,
        test_cases=[
            TestCaseResultResponse(
                input=outcome.input,
                expected_output=outcome.expected_output,
                status=outcome.result.status.value,
                time=outcome.result.time,
                memory=outcome.result.memory,
                stderr=outcome.result.stderr,
            )
            for outcome in result.test_cases
        ],
    )

"""
Problem router endpoints.

Create and update block while every reference solution is judged against the
visible test cases; see ValidationManager for the latency bound.

API prefix: /api/v1/problems/
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from grading.api.dependencies import get_current_user, get_db, get_judge_client, require_admin
from grading.api.models.requests import ProblemDraftRequest
from grading.api.models.responses import (
    ErrorResponse,
    ProblemDetailResponse,
    ProblemMutationResponse,
    ProblemSummaryResponse,
    SubmissionResponse,
)
from grading.managers.judge_client import JudgeClient
from grading.managers.problem_manager import ProblemManager
from grading.managers.validation_manager import ValidationManager
from grading.models.database import Problem, Submission, User


router = APIRouter(prefix="/api/v1", tags=["Problems"])


def get_problem_manager(
    db: Session = Depends(get_db),
    judge_client: JudgeClient = Depends(get_judge_client),
) -> ProblemManager:
    return ProblemManager(db, ValidationManager(judge_client))


def to_summary(problem: Problem) -> ProblemSummaryResponse:
    return ProblemSummaryResponse(
        id=str(problem.id),
        title=problem.title,
        difficulty=problem.difficulty,
        tag=problem.tag,
    )


def to_detail(problem: Problem) -> ProblemDetailResponse:
    return ProblemDetailResponse(
        id=str(problem.id),
        title=problem.title,
        difficulty=problem.difficulty,
        tag=problem.tag,
        description=problem.description,
        visible_test_cases=problem.visible_test_cases,
        start_code=problem.start_code,
        reference_solution=problem.reference_solution,
    )


def to_submission(submission: Submission) -> SubmissionResponse:
    return SubmissionResponse(
        id=str(submission.id),
        problem_id=str(submission.problem_id),
        language=submission.language,
        code=submission.code,
        status=submission.status,
        test_cases_passed=submission.test_cases_passed,
        test_cases_total=submission.test_cases_total,
        runtime=submission.runtime,
        memory=submission.memory,
        error_message=submission.error_message,
        created_at=submission.created_at,
    )


@router.post(
    "/problems",
    status_code=201,
    response_model=ProblemMutationResponse,
    summary="Create Problem",
    responses={422: {"model": ErrorResponse}, 504: {"model": ErrorResponse}},
)
def create_problem(
    draft: ProblemDraftRequest,
    admin: User = Depends(require_admin),
    manager: ProblemManager = Depends(get_problem_manager),
):
    problem = manager.create_problem(draft.model_dump(), creator_id=admin.id)
    return ProblemMutationResponse(message="Problem created successfully", problem=to_detail(problem))


@router.put(
    "/problems/{problem_id}",
    response_model=ProblemMutationResponse,
    summary="Update Problem",
    responses={404: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
def update_problem(
    problem_id: UUID,
    draft: ProblemDraftRequest,
    admin: User = Depends(require_admin),
    manager: ProblemManager = Depends(get_problem_manager),
):
    problem = manager.update_problem(problem_id, draft.model_dump())
    return ProblemMutationResponse(message="Problem updated successfully", problem=to_detail(problem))


@router.delete(
    "/problems/{problem_id}",
    summary="Delete Problem",
    description="Deletes the problem together with its submissions and solved-set entries.",
    responses={404: {"model": ErrorResponse}},
)
def delete_problem(
    problem_id: UUID,
    admin: User = Depends(require_admin),
    manager: ProblemManager = Depends(get_problem_manager),
):
    manager.delete_problem(problem_id)
    return {"message": "Problem deleted successfully"}


@router.get("/problems", response_model=list[ProblemSummaryResponse], summary="List Problems")
def list_problems(
    difficulty: Optional[str] = Query(None, description="Filter by difficulty"),
    tag: Optional[str] = Query(None, description="Filter by tag"),
    user: User = Depends(get_current_user),
    manager: ProblemManager = Depends(get_problem_manager),
):
    return [to_summary(p) for p in manager.list_problems(difficulty=difficulty, tag=tag)]


@router.get(
    "/problems/solved",
    response_model=list[ProblemSummaryResponse],
    summary="Problems Solved By Current User",
)
def list_solved_problems(
    user: User = Depends(get_current_user),
    manager: ProblemManager = Depends(get_problem_manager),
):
    return [to_summary(p) for p in manager.list_solved(user.id)]


@router.get(
    "/problems/{problem_id}",
    response_model=ProblemDetailResponse,
    summary="Get Problem",
    responses={404: {"model": ErrorResponse}},
)
def get_problem(
    problem_id: UUID,
    user: User = Depends(get_current_user),
    manager: ProblemManager = Depends(get_problem_manager),
):
    return to_detail(manager.get_problem(problem_id))


@router.get(
    "/problems/{problem_id}/submissions",
    response_model=list[SubmissionResponse],
    summary="Current User's Submissions For A Problem",
)
def list_problem_submissions(
    problem_id: UUID,
    user: User = Depends(get_current_user),
    manager: ProblemManager = Depends(get_problem_manager),
):
    return [to_submission(s) for s in manager.list_submissions(user.id, problem_id)]

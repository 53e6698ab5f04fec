"""
Pydantic response models for the grading API.

Hidden test cases never leave the service: problem responses only carry the
visible ones.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# PROBLEM RESPONSE MODELS
# =============================================================================

class ProblemSummaryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str = Field(..., description="Problem identifier (UUID)")
    title: str
    difficulty: str = Field(..., examples=["easy"])
    tag: str = Field(..., examples=["array"])


class ProblemDetailResponse(ProblemSummaryResponse):
    description: str
    visible_test_cases: list[dict] = Field(
        ...,
        description="Visible test cases with input, output and explanation",
    )
    start_code: list[dict]
    reference_solution: list[dict]


class ProblemMutationResponse(BaseModel):
    message: str
    problem: ProblemDetailResponse


# =============================================================================
# SUBMISSION RESPONSE MODELS
# =============================================================================

class SubmissionResponse(BaseModel):
    """Stored submission record."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    problem_id: str
    language: str = Field(..., examples=["c++"])
    code: str
    status: str = Field(
        ...,
        description="pending, accepted, wrong_answer, runtime_error or failed_infrastructure",
        examples=["accepted"],
    )
    test_cases_passed: int = Field(..., ge=0)
    test_cases_total: int = Field(..., ge=0)
    runtime: float = Field(..., description="Seconds summed over passing test cases")
    memory: int = Field(..., description="Peak memory in KB")
    error_message: Optional[str] = None
    created_at: Optional[datetime] = None


class SubmitResultResponse(BaseModel):
    submission_id: str
    accepted: bool
    status: str
    total_test_cases: int = Field(..., ge=0)
    passed_test_cases: int = Field(..., ge=0)
    runtime: float
    memory: int
    error_message: Optional[str] = None


class TestCaseResultResponse(BaseModel):
    input: str
    expected_output: str
    status: str = Field(..., examples=["wrong_output"])
    time: float
    memory: int
    stderr: Optional[str] = None


class RunResultResponse(BaseModel):
    success: bool
    passed_test_cases: int
    total_test_cases: int
    runtime: float
    memory: int
    error_message: Optional[str] = None
    test_cases: list[TestCaseResultResponse]


class ErrorResponse(BaseModel):
    error: bool = True
    code: str = Field(..., examples=["unsupported_language"])
    message: str
    language: Optional[str] = None
    diagnostic: Optional[str] = None

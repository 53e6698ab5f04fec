"""
Pydantic request models for the grading API.

Problem drafts use the editor language vocabulary ("cpp", "java",
"javascript"); submissions accept either "cpp" or "c++".
"""

from typing import Literal

from pydantic import BaseModel, Field


class TestCaseRequest(BaseModel):
    input: str = Field(..., min_length=1, description="Program stdin")
    output: str = Field(..., min_length=1, description="Expected stdout")


class VisibleTestCaseRequest(TestCaseRequest):
    explanation: str = Field(..., min_length=1, description="Explanation shown to users")


class StartCodeRequest(BaseModel):
    language: str = Field(..., examples=["cpp"])
    initial_code: str = Field(..., min_length=1)


class ReferenceSolutionRequest(BaseModel):
    language: str = Field(..., examples=["cpp"])
    complete_code: str = Field(..., min_length=1)


class ProblemDraftRequest(BaseModel):
    """Full problem document, used for both create and update."""

    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    difficulty: Literal["easy", "medium", "hard"]
    tag: Literal["array", "linkedList", "graph", "dp"]
    visible_test_cases: list[VisibleTestCaseRequest] = Field(..., min_length=1)
    hidden_test_cases: list[TestCaseRequest] = Field(..., min_length=1)
    start_code: list[StartCodeRequest] = Field(..., min_length=1)
    reference_solution: list[ReferenceSolutionRequest] = Field(..., min_length=1)


class CodeRequest(BaseModel):
    code: str = Field(..., min_length=1, description="Complete source code")
    language: str = Field(..., description="Language name", examples=["c++"])

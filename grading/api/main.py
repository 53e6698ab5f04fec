"""
Grading API.

Problem administration, submissions and dry runs for the coding judge.
Execution is delegated to an external Judge0-compatible engine.
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import config
from grading.api.routers import problems_router, submissions_router
from grading.exceptions import (
    GradingError,
    InvalidProblem,
    JudgeTimeout,
    JudgeUnavailable,
    ProblemNotFound,
    ReferenceSolutionFailed,
    UnsupportedLanguage,
    UserNotFound,
)


# OpenAPI tags for grouping endpoints
tags_metadata = [
    {
        "name": "Problems",
        "description": """
**Problem administration and browsing.**

Creating or updating a problem judges every reference solution against the
visible test cases before anything is stored. These calls block for one judge
round trip per reference language.
        """,
    },
    {
        "name": "Submissions",
        "description": """
**Submit and run code.**

Submissions are graded against hidden test cases and recorded; runs use the
visible test cases and are not recorded.
        """,
    },
    {
        "name": "Health",
        "description": "Service health check endpoints.",
    },
]

ERROR_STATUS_CODES = {
    UnsupportedLanguage: 400,
    InvalidProblem: 400,
    ProblemNotFound: 404,
    UserNotFound: 404,
    ReferenceSolutionFailed: 422,
    JudgeUnavailable: 502,
    JudgeTimeout: 504,
}


app = FastAPI(
    title="Grading API",
    description="Coding judge grading service",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    openapi_tags=tags_metadata,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(problems_router)
app.include_router(submissions_router)


@app.exception_handler(GradingError)
async def grading_error_handler(request: Request, exc: GradingError):
    status_code = 500
    for error_type, code in ERROR_STATUS_CODES.items():
        if isinstance(exc, error_type):
            status_code = code
            break

    body = {"error": True, "code": exc.code, "message": str(exc)}
    if isinstance(exc, ReferenceSolutionFailed):
        body["language"] = exc.language
        body["diagnostic"] = exc.diagnostic
    return JSONResponse(status_code=status_code, content=body)


@app.get(
    "/health",
    tags=["Health"],
    summary="Health Check",
    description="Check if the API service is healthy and responding.",
)
async def health_check():
    return {
        "status": "healthy",
        "service": "grading-api",
        "version": "1.0.0",
    }

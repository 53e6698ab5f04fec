"""
API Routers for the grading service.

- Problems: /api/v1/problems/... - administration and browsing
- Submissions: /api/v1/submissions/... - submit and dry-run
"""

from grading.api.routers.problems import router as problems_router
from grading.api.routers.submissions import router as submissions_router


__all__ = [
    "problems_router",
    "submissions_router",
]

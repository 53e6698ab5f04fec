from grading.repositories.problem_repository import ProblemRepository
from grading.repositories.submission_repository import SubmissionRepository
from grading.repositories.user_repository import UserRepository

__all__ = [
    "ProblemRepository",
    "SubmissionRepository",
    "UserRepository",
]

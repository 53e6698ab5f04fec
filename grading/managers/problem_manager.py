from typing import Any, Dict, List, Optional
from uuid import UUID

from loguru import logger
from sqlalchemy.orm import Session

from grading.managers.validation_manager import ValidationManager
from grading.models.database import Problem, Submission
from grading.repositories.problem_repository import ProblemRepository
from grading.repositories.submission_repository import SubmissionRepository
from grading.repositories.user_repository import UserRepository

PROBLEM_FIELDS = (
    "title",
    "description",
    "difficulty",
    "tag",
    "visible_test_cases",
    "hidden_test_cases",
    "start_code",
    "reference_solution",
)


class ProblemManager:
    """
    Administrator operations on problems.

    Create and update go through ValidationManager first; the store is only
    written once every reference solution has been accepted, so a failed
    validation leaves it untouched.
    """

    def __init__(self, session: Session, validation_manager: ValidationManager):
        self.session = session
        self.problems = ProblemRepository(session)
        self.submissions = SubmissionRepository(session)
        self.users = UserRepository(session)
        self.validation_manager = validation_manager

    @staticmethod
    def _fields(draft: Dict[str, Any]) -> Dict[str, Any]:
        return {key: draft[key] for key in PROBLEM_FIELDS}

    def create_problem(self, draft: Dict[str, Any], creator_id: Optional[UUID] = None) -> Problem:
        self.validation_manager.validate(draft)
        return self.problems.create(Problem(creator_id=creator_id, **self._fields(draft)))

    def update_problem(self, problem_id: UUID, draft: Dict[str, Any]) -> Problem:
        problem = self.problems.get_by_id(problem_id)
        self.validation_manager.validate(draft)
        return self.problems.update(problem, self._fields(draft))

    def delete_problem(self, problem_id: UUID) -> None:
        """Remove the problem, its submissions and solved entries in one transaction."""
        self.problems.get_by_id(problem_id)
        try:
            removed_submissions = self.submissions.delete_by_problem(problem_id, commit=False)
            removed_solved = self.users.remove_solved_for_problem(problem_id, commit=False)
            self.problems.delete(problem_id, commit=False)
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        logger.info(
            "problem_cascade_deleted",
            problem_id=str(problem_id),
            submissions=removed_submissions,
            solved_entries=removed_solved,
        )

    def get_problem(self, problem_id: UUID) -> Problem:
        return self.problems.get_by_id(problem_id)

    def list_problems(self, difficulty: Optional[str] = None, tag: Optional[str] = None) -> List[Problem]:
        return self.problems.find(difficulty=difficulty, tag=tag)

    def list_solved(self, user_id: UUID) -> List[Problem]:
        return self.users.get_solved_problems(user_id)

    def list_submissions(self, user_id: UUID, problem_id: UUID) -> List[Submission]:
        return self.submissions.find_by_user_and_problem(user_id, problem_id)

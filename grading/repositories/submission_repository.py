from datetime import datetime, timezone
from typing import List, Optional
from uuid import UUID

from loguru import logger
from sqlalchemy.orm import Session

from grading.models.database import Submission
from grading.models.results import SubmissionStatus


class SubmissionRepository:
    def __init__(self, session: Session):
        self.session = session

    def create(self, submission: Submission) -> Submission:
        self.session.add(submission)
        self.session.commit()
        self.session.refresh(submission)
        logger.info(
            "submission_created",
            submission_id=str(submission.id),
            problem_id=str(submission.problem_id),
            language=submission.language,
        )
        return submission

    def get_by_id(self, submission_id: UUID) -> Optional[Submission]:
        return self.session.query(Submission).filter(Submission.id == submission_id).first()

    def find_by_user_and_problem(self, user_id: UUID, problem_id: UUID) -> List[Submission]:
        return self.session.query(Submission).filter(
            Submission.user_id == user_id,
            Submission.problem_id == problem_id,
        ).order_by(Submission.created_at).all()

    def update_result(
        self,
        submission_id: UUID,
        status: SubmissionStatus,
        test_cases_passed: Optional[int] = None,
        runtime: Optional[float] = None,
        memory: Optional[int] = None,
        error_message: Optional[str] = None,
    ) -> Submission:
        submission = self.get_by_id(submission_id)
        if not submission:
            raise ValueError(f"submission_not_found: {submission_id}")
        if submission.status != SubmissionStatus.PENDING.value:
            raise ValueError(f"submission_already_judged: {submission_id}")
        submission.status = status.value
        if test_cases_passed is not None:
            submission.test_cases_passed = test_cases_passed
        if runtime is not None:
            submission.runtime = runtime
        if memory is not None:
            submission.memory = memory
        if error_message is not None:
            submission.error_message = error_message
        submission.judged_at = datetime.now(timezone.utc)
        self.session.commit()
        logger.info("submission_judged", submission_id=str(submission_id), status=status.value)
        return submission

    def delete_by_problem(self, problem_id: UUID, commit: bool = True) -> int:
        count = self.session.query(Submission).filter(
            Submission.problem_id == problem_id
        ).delete()
        if commit:
            self.session.commit()
        return count

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import UUID

from loguru import logger
from sqlalchemy.orm import Session

from grading.exceptions import ProblemNotFound
from grading.models.database import Problem


class ProblemRepository:
    def __init__(self, session: Session):
        self.session = session

    def create(self, problem: Problem) -> Problem:
        self.session.add(problem)
        self.session.commit()
        self.session.refresh(problem)
        logger.info("problem_created", problem_id=str(problem.id), title=problem.title)
        return problem

    def find_by_id(self, problem_id: UUID) -> Optional[Problem]:
        return self.session.query(Problem).filter(Problem.id == problem_id).first()

    def get_by_id(self, problem_id: UUID) -> Problem:
        problem = self.find_by_id(problem_id)
        if not problem:
            raise ProblemNotFound(problem_id)
        return problem

    def find(self, difficulty: Optional[str] = None, tag: Optional[str] = None) -> List[Problem]:
        query = self.session.query(Problem)
        if difficulty:
            query = query.filter(Problem.difficulty == difficulty)
        if tag:
            query = query.filter(Problem.tag == tag)
        return query.order_by(Problem.created_at).all()

    def update(self, problem: Problem, fields: Dict[str, Any]) -> Problem:
        for key, value in fields.items():
            setattr(problem, key, value)
        problem.updated_at = datetime.now(timezone.utc)
        self.session.commit()
        self.session.refresh(problem)
        logger.info("problem_updated", problem_id=str(problem.id))
        return problem

    def delete(self, problem_id: UUID, commit: bool = True) -> None:
        count = self.session.query(Problem).filter(Problem.id == problem_id).delete()
        if not count:
            raise ProblemNotFound(problem_id)
        if commit:
            self.session.commit()
        logger.info("problem_deleted", problem_id=str(problem_id))

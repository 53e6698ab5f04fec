from typing import List, Optional
from uuid import UUID

from loguru import logger
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from grading.exceptions import UserNotFound
from grading.models.database import Problem, User, UserSolvedProblem


class UserRepository:
    def __init__(self, session: Session):
        self.session = session

    def create(self, user: User) -> User:
        self.session.add(user)
        self.session.commit()
        self.session.refresh(user)
        logger.info("user_created", user_id=str(user.id), role=user.role)
        return user

    def find_by_id(self, user_id: UUID) -> Optional[User]:
        return self.session.query(User).filter(User.id == user_id).first()

    def get_by_id(self, user_id: UUID) -> User:
        user = self.find_by_id(user_id)
        if not user:
            raise UserNotFound(user_id)
        return user

    def _insert(self, table):
        dialect = self.session.get_bind().dialect.name
        if dialect == "postgresql":
            return postgresql.insert(table)
        if dialect == "sqlite":
            return sqlite.insert(table)
        raise NotImplementedError(f"unsupported_dialect: {dialect}")

    def add_solved_problem(self, user_id: UUID, problem_id: UUID) -> bool:
        """
        Add a problem to the user's solved-set if it is not already there.

        Runs as a single INSERT ... ON CONFLICT DO NOTHING against the
        (user_id, problem_id) key. Returns True when a new entry was added.
        """
        stmt = self._insert(UserSolvedProblem).values(
            user_id=user_id,
            problem_id=problem_id,
        ).on_conflict_do_nothing(index_elements=["user_id", "problem_id"])
        result = self.session.execute(stmt)
        self.session.commit()
        added = result.rowcount == 1
        if added:
            logger.info("problem_solved", user_id=str(user_id), problem_id=str(problem_id))
        return added

    def get_solved_problems(self, user_id: UUID) -> List[Problem]:
        return self.session.query(Problem).join(
            UserSolvedProblem, UserSolvedProblem.problem_id == Problem.id
        ).filter(
            UserSolvedProblem.user_id == user_id
        ).order_by(UserSolvedProblem.solved_at).all()

    def remove_solved_for_problem(self, problem_id: UUID, commit: bool = True) -> int:
        count = self.session.query(UserSolvedProblem).filter(
            UserSolvedProblem.problem_id == problem_id
        ).delete()
        if commit:
            self.session.commit()
        return count

"""
Database models for the grading service.

Problems keep their test cases, starter code and reference solutions as JSON
documents (JSONB on PostgreSQL). The solved-set of a user is a separate table
keyed by (user_id, problem_id), so crediting a problem is a single
insert-if-absent rather than a read-modify-write of an array.
"""
import uuid

from sqlalchemy import (
    Column, String, Integer, Float, DateTime,
    ForeignKey, Text, JSON, Uuid
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()

JSONDocument = JSON().with_variant(JSONB(), "postgresql")

DIFFICULTIES = ("easy", "medium", "hard")
TAGS = ("array", "linkedList", "graph", "dp")


class User(Base):
    """
    Account record as seen by the grading core.

    Authentication lives upstream; only identity, role and solved-set matter here.
    """
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    first_name = Column(String(50), nullable=False)
    email = Column(String(255), nullable=False, unique=True)
    role = Column(String(20), nullable=False, server_default="user")
    # Role values: user, admin

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    solved = relationship("UserSolvedProblem", back_populates="user")


class Problem(Base):
    __tablename__ = "problems"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    difficulty = Column(String(20), nullable=False)
    tag = Column(String(50), nullable=False)

    # [{"input", "output", "explanation"}]
    visible_test_cases = Column(JSONDocument, nullable=False)
    # [{"input", "output"}]
    hidden_test_cases = Column(JSONDocument, nullable=False)
    # [{"language", "initial_code"}]
    start_code = Column(JSONDocument, nullable=False)
    # [{"language", "complete_code"}]
    reference_solution = Column(JSONDocument, nullable=False)

    creator_id = Column(Uuid, ForeignKey("users.id"), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=True)

    submissions = relationship("Submission", back_populates="problem")


class Submission(Base):
    """
    A graded code submission.

    Created as "pending" before the judge is contacted and updated exactly once
    with the verdict (or with "failed_infrastructure" when the judge fails).
    """
    __tablename__ = "submissions"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    problem_id = Column(Uuid, ForeignKey("problems.id", ondelete="CASCADE"), nullable=False, index=True)

    code = Column(Text, nullable=False)
    language = Column(String(20), nullable=False)

    status = Column(String(50), nullable=False, server_default="pending")
    # Status values: pending, accepted, wrong_answer, runtime_error, failed_infrastructure
    test_cases_passed = Column(Integer, nullable=False, server_default="0")
    test_cases_total = Column(Integer, nullable=False, server_default="0")
    runtime = Column(Float, nullable=False, server_default="0")   # seconds, passing tests only
    memory = Column(Integer, nullable=False, server_default="0")  # peak KB
    error_message = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    judged_at = Column(DateTime(timezone=True), nullable=True)

    problem = relationship("Problem", back_populates="submissions")


class UserSolvedProblem(Base):
    __tablename__ = "user_solved_problems"

    user_id = Column(Uuid, ForeignKey("users.id"), primary_key=True)
    problem_id = Column(Uuid, ForeignKey("problems.id", ondelete="CASCADE"), primary_key=True)
    solved_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    user = relationship("User", back_populates="solved")
    problem = relationship("Problem")

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional
from uuid import UUID


class JudgeStatus(str, Enum):
    """Execution engine status, decoded once at the judge client boundary."""

    QUEUED = "queued"
    PROCESSING = "processing"
    ACCEPTED = "accepted"
    WRONG_OUTPUT = "wrong_output"
    RUNTIME_ERROR = "runtime_error"
    OTHER = "other"

    @classmethod
    def from_code(cls, status_id: Optional[int]) -> "JudgeStatus":
        if status_id == 1:
            return cls.QUEUED
        if status_id == 2:
            return cls.PROCESSING
        if status_id == 3:
            return cls.ACCEPTED
        if status_id == 4:
            return cls.WRONG_OUTPUT
        # 5 time limit, 6 compilation error, 7-12 runtime signals / NZEC
        if status_id is not None and 5 <= status_id <= 12:
            return cls.RUNTIME_ERROR
        return cls.OTHER

    @property
    def is_terminal(self) -> bool:
        return self not in (JudgeStatus.QUEUED, JudgeStatus.PROCESSING)


class VerdictStatus(str, Enum):
    ACCEPTED = "accepted"
    WRONG_ANSWER = "wrong_answer"
    RUNTIME_ERROR = "runtime_error"


class SubmissionStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    WRONG_ANSWER = "wrong_answer"
    RUNTIME_ERROR = "runtime_error"
    # The judge did not answer in time or was unreachable
    FAILED_INFRASTRUCTURE = "failed_infrastructure"


@dataclass
class BatchEntry:
    """One test execution inside a batch submission request."""

    source_code: str
    language_id: int
    stdin: str
    expected_output: str

    def to_payload(self) -> dict:
        return {
            "source_code": self.source_code,
            "language_id": self.language_id,
            "stdin": self.stdin,
            "expected_output": self.expected_output,
        }


@dataclass
class RawResult:
    token: str
    status: JudgeStatus
    time: float  # seconds
    memory: int  # kilobytes
    stderr: Optional[str] = None
    description: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "token": self.token,
            "status": self.status.value,
            "time": self.time,
            "memory": self.memory,
            "stderr": self.stderr,
            "description": self.description,
        }


@dataclass
class Verdict:
    passed: int
    total: int
    runtime: float
    memory: int
    status: VerdictStatus
    error_message: Optional[str] = None

    @property
    def accepted(self) -> bool:
        return self.status == VerdictStatus.ACCEPTED


@dataclass
class SubmissionResult:
    submission_id: UUID
    accepted: bool
    total_test_cases: int
    passed_test_cases: int
    runtime: float
    memory: int
    status: SubmissionStatus
    error_message: Optional[str] = None


@dataclass
class CaseOutcome:
    input: str
    expected_output: str
    result: RawResult


@dataclass
class RunResult:
    success: bool
    runtime: float
    memory: int
    passed_test_cases: int
    total_test_cases: int
    test_cases: List[CaseOutcome] = field(default_factory=list)
    error_message: Optional[str] = None

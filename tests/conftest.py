import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JUDGE_URL"] = "http://judge.test"

import itertools
import json
from typing import Callable, Dict, List

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from grading.managers.judge_client import JudgeClient
from grading.models.database import Base, Problem, User
from grading.repositories.problem_repository import ProblemRepository
from grading.repositories.user_repository import UserRepository


def add_numbers(stdin: str) -> str:
    return str(sum(int(x) for x in stdin.split()))


def always_three(stdin: str) -> str:
    return "3"


def crash(stdin: str) -> str:
    raise RuntimeError("Segmentation fault (core dumped)")


class FakeJudge:
    """
    In-memory Judge0 batch API.

    Source code is looked up in `programs`; unknown sources behave like a
    compilation error. Every token reports "processing" for `processing_polls`
    result requests before its final status.
    """

    def __init__(self):
        self.programs: Dict[str, Callable[[str], str]] = {
            "add": add_numbers,
            "three": always_three,
            "crash": crash,
        }
        self.memory: Dict[str, int] = {}
        self.processing_polls = 0
        self.reverse_results = False
        self.fail_with_status = None
        # Replaces the JSON body of every result request when set
        self.result_body = None
        self.received: List[dict] = []
        self.post_count = 0
        self.get_count = 0
        self._tokens = itertools.count(1)
        self._submissions: Dict[str, dict] = {}

    def _execute(self, entry: dict) -> dict:
        source = entry["source_code"]
        program = self.programs.get(source)
        memory = self.memory.get(source, 1024)
        if program is None:
            return {"status_id": 6, "time": None, "memory": None,
                    "stderr": None, "compile_output": f"error: '{source}' was not declared"}
        try:
            stdout = program(entry["stdin"])
        except RuntimeError as e:
            return {"status_id": 11, "time": "0.002", "memory": memory,
                    "stderr": str(e), "compile_output": None}
        status_id = 3 if stdout.strip() == entry["expected_output"].strip() else 4
        return {"status_id": status_id, "time": "0.1", "memory": memory,
                "stderr": None, "compile_output": None}

    def handler(self, request: httpx.Request) -> httpx.Response:
        if self.fail_with_status:
            return httpx.Response(self.fail_with_status, json={"error": "unavailable"})
        if request.url.path != "/submissions/batch":
            return httpx.Response(404)

        if request.method == "POST":
            self.post_count += 1
            entries = json.loads(request.content)["submissions"]
            tokens = []
            for entry in entries:
                token = f"token-{next(self._tokens)}"
                self.received.append(entry)
                self._submissions[token] = {"result": self._execute(entry), "polls": 0}
                tokens.append({"token": token})
            return httpx.Response(201, json=tokens)

        self.get_count += 1
        if self.result_body is not None:
            return httpx.Response(200, json=self.result_body)
        items = []
        for token in request.url.params["tokens"].split(","):
            submission = self._submissions[token]
            submission["polls"] += 1
            if submission["polls"] <= self.processing_polls:
                items.append({"token": token, "status": {"id": 2, "description": "Processing"},
                              "time": None, "memory": None, "stderr": None})
            else:
                items.append({"token": token, **submission["result"]})
        if self.reverse_results:
            items.reverse()
        return httpx.Response(200, json={"submissions": items})


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def fake_judge():
    return FakeJudge()


@pytest.fixture
def judge_client(fake_judge):
    http_client = httpx.Client(
        transport=httpx.MockTransport(fake_judge.handler),
        base_url="http://judge.test",
    )
    client = JudgeClient(
        http_client=http_client,
        poll_interval_seconds=0,
        max_poll_attempts=5,
        max_batch_size=20,
    )
    yield client
    client.close()


@pytest.fixture
def user(session):
    return UserRepository(session).create(User(first_name="Ada", email="ada@example.com", role="user"))


@pytest.fixture
def admin(session):
    return UserRepository(session).create(User(first_name="Root", email="root@example.com", role="admin"))


@pytest.fixture
def problem_draft():
    return {
        "title": "Sum of Two Numbers",
        "description": "Print a + b.",
        "difficulty": "easy",
        "tag": "array",
        "visible_test_cases": [
            {"input": "1 2", "output": "3", "explanation": "1 + 2 = 3"},
            {"input": "2 2", "output": "4", "explanation": "2 + 2 = 4"},
        ],
        "hidden_test_cases": [
            {"input": "3 4", "output": "7"},
            {"input": "10 5", "output": "15"},
            {"input": "0 0", "output": "0"},
        ],
        "start_code": [
            {"language": "cpp", "initial_code": "int main() {}"},
            {"language": "java", "initial_code": "class Main {}"},
            {"language": "javascript", "initial_code": "// read stdin"},
        ],
        "reference_solution": [
            {"language": "cpp", "complete_code": "add"},
            {"language": "java", "complete_code": "add"},
            {"language": "javascript", "complete_code": "add"},
        ],
    }


@pytest.fixture
def problem(session, admin, problem_draft):
    return ProblemRepository(session).create(Problem(creator_id=admin.id, **problem_draft))


@pytest.fixture
def api_client(session_factory, judge_client):
    from grading.api.dependencies import get_db, get_judge_client
    from grading.api.main import app

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_judge_client] = lambda: judge_client
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()

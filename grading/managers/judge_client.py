"""
Client for a Judge0-compatible execution engine.

The engine evaluates submissions asynchronously: a batch submit returns one
token per test, and results have to be polled until every token reaches a
terminal status. fetch_results is therefore the only place where a pipeline
blocks on the judge, and it is bounded by max_poll_attempts * poll_interval.
"""
import time
from typing import Any, Dict, Iterator, List, Optional, Sequence

import httpx
from loguru import logger

from config import config
from grading.exceptions import JudgeTimeout, JudgeUnavailable
from grading.models.results import BatchEntry, JudgeStatus, RawResult


def build_batch(source_code: str, language_id: int, test_cases: Sequence[dict]) -> List[BatchEntry]:
    """Pair one source with every test case, keeping test case order."""
    return [
        BatchEntry(
            source_code=source_code,
            language_id=language_id,
            stdin=test_case["input"],
            expected_output=test_case["output"],
        )
        for test_case in test_cases
    ]


class JudgeClient:
    RESULT_FIELDS = "token,status_id,status,time,memory,stderr,compile_output"

    def __init__(
        self,
        http_client: Optional[httpx.Client] = None,
        base_url: Optional[str] = None,
        poll_interval_seconds: Optional[float] = None,
        max_poll_attempts: Optional[int] = None,
        max_batch_size: Optional[int] = None,
    ):
        self.base_url = (base_url or config.judge_url).rstrip("/")
        self.http_client = http_client or httpx.Client(
            base_url=self.base_url,
            timeout=config.judge_request_timeout_seconds,
        )
        self.poll_interval_seconds = (
            config.judge_poll_interval_seconds if poll_interval_seconds is None else poll_interval_seconds
        )
        self.max_poll_attempts = (
            config.judge_max_poll_attempts if max_poll_attempts is None else max_poll_attempts
        )
        self.max_batch_size = config.judge_max_batch_size if max_batch_size is None else max_batch_size
        if self.max_poll_attempts < 1 or self.max_batch_size < 1:
            raise ValueError("max_poll_attempts and max_batch_size must be at least 1")
        self.headers = {"Content-Type": "application/json"}
        if config.judge_auth_token:
            self.headers["X-Auth-Token"] = config.judge_auth_token
        if config.judge_rapidapi_key and config.judge_rapidapi_host:
            self.headers["X-RapidAPI-Key"] = config.judge_rapidapi_key
            self.headers["X-RapidAPI-Host"] = config.judge_rapidapi_host

    def close(self) -> None:
        self.http_client.close()

    def _chunks(self, items: Sequence) -> Iterator[Sequence]:
        for start in range(0, len(items), self.max_batch_size):
            yield items[start:start + self.max_batch_size]

    def _request(self, method: str, path: str, **kwargs) -> Any:
        try:
            response = self.http_client.request(method, path, headers=self.headers, **kwargs)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            logger.error("judge_http_error", path=path, status_code=e.response.status_code)
            raise JudgeUnavailable(f"{method} {path} returned {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.error("judge_request_failed", path=path, error=str(e))
            raise JudgeUnavailable(f"{method} {path} failed: {e}") from e
        except ValueError as e:
            raise JudgeUnavailable(f"{method} {path} returned invalid JSON") from e

    def submit_batch(self, entries: Sequence[BatchEntry]) -> List[str]:
        """Enqueue every entry on the engine; returns tokens in entry order."""
        tokens: List[str] = []
        for chunk in self._chunks(entries):
            data = self._request(
                "POST",
                "/submissions/batch",
                params={"base64_encoded": "false"},
                json={"submissions": [entry.to_payload() for entry in chunk]},
            )
            if not isinstance(data, list) or len(data) != len(chunk):
                raise JudgeUnavailable("batch response does not match submitted entries")
            for item in data:
                token = item.get("token") if isinstance(item, dict) else None
                if not token:
                    # Engine rejected this entry, the body holds the field errors
                    raise JudgeUnavailable(f"entry {len(tokens)} rejected: {item}")
                tokens.append(token)

        logger.debug("batch_submitted", count=len(tokens))
        return tokens

    def _decode(self, item: Dict[str, Any]) -> RawResult:
        status = item.get("status") if isinstance(item.get("status"), dict) else {}
        status_id = item.get("status_id")
        if status_id is None:
            status_id = status.get("id")
        try:
            elapsed = float(item.get("time") or 0)
            memory = int(item.get("memory") or 0)
        except (TypeError, ValueError) as e:
            raise JudgeUnavailable(f"unreadable result for token {item.get('token')}: {e}") from e
        return RawResult(
            token=item.get("token"),
            status=JudgeStatus.from_code(status_id),
            time=elapsed,
            memory=memory,
            stderr=item.get("stderr") or item.get("compile_output") or None,
            description=status.get("description"),
        )

    def _poll(self, tokens: Sequence[str]) -> List[RawResult]:
        results = []
        for chunk in self._chunks(tokens):
            data = self._request(
                "GET",
                "/submissions/batch",
                params={
                    "tokens": ",".join(chunk),
                    "base64_encoded": "false",
                    "fields": self.RESULT_FIELDS,
                },
            )
            submissions = data.get("submissions") if isinstance(data, dict) else None
            if not isinstance(submissions, list):
                raise JudgeUnavailable("result response has no submissions list")
            for item in submissions:
                if isinstance(item, dict):
                    results.append(self._decode(item))
        return results

    def fetch_results(self, tokens: Sequence[str]) -> List[RawResult]:
        """
        Poll until every token has a terminal result.

        Results are matched back to tokens, so the Nth result always belongs to
        the Nth token no matter how the engine orders its answer.

        Raises:
            JudgeTimeout: results still queued/running after max_poll_attempts.
            JudgeUnavailable: the engine could not be reached or answered badly.
        """
        finished: Dict[str, RawResult] = {}
        pending = list(tokens)
        attempt = 0
        while pending:
            attempt += 1
            for result in self._poll(pending):
                if result.token in pending and result.status.is_terminal:
                    finished[result.token] = result
            pending = [token for token in tokens if token not in finished]
            if not pending:
                break
            if attempt >= self.max_poll_attempts:
                logger.warning(
                    "judge_timeout",
                    attempts=attempt,
                    pending=len(pending),
                    total=len(tokens),
                )
                raise JudgeTimeout(
                    f"{len(pending)} of {len(tokens)} submissions unfinished after {attempt} polls"
                )
            time.sleep(self.poll_interval_seconds)

        logger.debug("batch_finished", count=len(tokens), polls=attempt)
        return [finished[token] for token in tokens]

    def execute(self, entries: Sequence[BatchEntry]) -> List[RawResult]:
        return self.fetch_results(self.submit_batch(entries))

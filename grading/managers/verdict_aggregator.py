from typing import Optional, Sequence

from grading.models.results import JudgeStatus, RawResult, Verdict, VerdictStatus

DEFAULT_ERROR_MESSAGE = "Test case failed"


class VerdictAggregator:
    """
    Reduces per-test results into a single Verdict.

    Acceptance is a strict AND over every test case; there is no partial
    credit. Runtime sums passing tests only, memory is the peak over all
    tests. A runtime error anywhere in the batch outranks wrong output, and
    only the first failing test's diagnostic is kept.
    """

    @staticmethod
    def failure_kind(status: JudgeStatus) -> VerdictStatus:
        if status == JudgeStatus.WRONG_OUTPUT:
            return VerdictStatus.WRONG_ANSWER
        return VerdictStatus.RUNTIME_ERROR

    def aggregate(self, results: Sequence[RawResult]) -> Verdict:
        passed = 0
        runtime = 0.0
        memory = 0
        status = VerdictStatus.ACCEPTED
        error_message: Optional[str] = None

        for result in results:
            memory = max(memory, result.memory)
            if result.status == JudgeStatus.ACCEPTED:
                passed += 1
                runtime += result.time
                continue

            kind = self.failure_kind(result.status)
            if status != VerdictStatus.RUNTIME_ERROR:
                status = kind
            if error_message is None:
                error_message = result.stderr or result.description or DEFAULT_ERROR_MESSAGE

        return Verdict(
            passed=passed,
            total=len(results),
            runtime=round(runtime, 6),
            memory=memory,
            status=status,
            error_message=error_message,
        )

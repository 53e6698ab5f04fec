"""
Error taxonomy for the grading pipelines.

Validation and lookup errors fail fast at the point they are detected.
JudgeError and its subclasses are infrastructure failures: the caller may
retry them, and they are never reported as a wrong answer.
"""
from typing import Optional


class GradingError(Exception):
    code = "grading_error"

    def __init__(self, detail: str = ""):
        self.detail = detail
        super().__init__(f"{self.code}: {detail}" if detail else self.code)


class UnsupportedLanguage(GradingError):
    code = "unsupported_language"

    def __init__(self, language: str):
        self.language = language
        super().__init__(language)


class ProblemNotFound(GradingError):
    code = "problem_not_found"

    def __init__(self, problem_id):
        self.problem_id = problem_id
        super().__init__(str(problem_id))


class UserNotFound(GradingError):
    code = "user_not_found"

    def __init__(self, user_id):
        self.user_id = user_id
        super().__init__(str(user_id))


class InvalidProblem(GradingError):
    code = "invalid_problem"


class ReferenceSolutionFailed(GradingError):
    code = "reference_solution_failed"

    def __init__(
        self,
        language: str,
        diagnostic: Optional[str] = None,
        passed: int = 0,
        total: int = 0,
    ):
        self.language = language
        self.diagnostic = diagnostic
        self.passed = passed
        self.total = total
        super().__init__(f"{language} passed {passed}/{total} visible test cases")


class JudgeError(GradingError):
    code = "judge_error"


class JudgeTimeout(JudgeError):
    code = "judge_timeout"


class JudgeUnavailable(JudgeError):
    code = "judge_unavailable"

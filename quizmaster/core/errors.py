"""
Error taxonomy shared by the workflow, the auth gate and the HTTP layer.

Each error carries the HTTP status it maps to; the handlers registered in
``main.py`` turn them into JSON responses.
"""

from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


class QuizAppError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(QuizAppError):
    status_code = 400

    def __init__(self, errors: List[FieldError], message: str = "Invalid input"):
        super().__init__(message)
        self.errors = errors


class Unauthorized(QuizAppError):
    status_code = 401


class NotFoundError(QuizAppError):
    status_code = 404


class EmptyQuizError(QuizAppError):
    """Scoring was asked to grade a quiz that has no questions."""

    status_code = 404


class ConflictError(QuizAppError):
    status_code = 409


class PersistenceError(QuizAppError):
    status_code = 500

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause

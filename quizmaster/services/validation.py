"""
Per-operation input checks.

Each function returns every problem it finds as a FieldError; an empty
list means the payload may go on to the store.
"""

from typing import List, Optional

from email_validator import EmailNotValidError, validate_email

from quizmaster.core.errors import FieldError
from quizmaster.schemas.quiz.quiz_base import AnswerSubmission, QuizCreate

MIN_OPTIONS = 2
# title, email and question text columns are String(255)
MAX_TEXT_LENGTH = 255


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def _too_long(value: Optional[str]) -> bool:
    return value is not None and len(value) > MAX_TEXT_LENGTH


def is_valid_email(value: Optional[str]) -> bool:
    if _is_blank(value):
        return False
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def validate_quiz_create(payload: QuizCreate, require_email: bool = True) -> List[FieldError]:
    errors: List[FieldError] = []

    if _is_blank(payload.title):
        errors.append(FieldError("title", "Title is required"))
    elif _too_long(payload.title):
        errors.append(FieldError("title", f"Title must be at most {MAX_TEXT_LENGTH} characters"))
    if require_email and not is_valid_email(payload.email):
        errors.append(FieldError("email", "Valid email is required"))
    elif require_email and _too_long(payload.email):
        errors.append(FieldError("email", f"Email must be at most {MAX_TEXT_LENGTH} characters"))

    if not payload.questions:
        errors.append(FieldError("questions", "At least one question is required"))
        return errors

    for i, question in enumerate(payload.questions):
        prefix = f"questions[{i}]"
        if _is_blank(question.question_text):
            errors.append(FieldError(f"{prefix}.questionText", "Question text is required"))
        elif _too_long(question.question_text):
            errors.append(
                FieldError(f"{prefix}.questionText", f"Question text must be at most {MAX_TEXT_LENGTH} characters")
            )

        options = question.options or []
        if len(options) < MIN_OPTIONS:
            errors.append(FieldError(f"{prefix}.options", "At least two options are required"))
        for j, option in enumerate(options):
            if _is_blank(option.text):
                errors.append(FieldError(f"{prefix}.options[{j}].text", "Option text is required"))

        if not _is_int(question.correct_option_id):
            errors.append(FieldError(f"{prefix}.correctOptionId", "Correct option ID is required"))
        elif options and not 1 <= question.correct_option_id <= len(options):
            errors.append(FieldError(f"{prefix}.correctOptionId", "Correct option ID must match one of the options"))

    return errors


def validate_answer_submission(payload: AnswerSubmission, require_email: bool = True) -> List[FieldError]:
    errors: List[FieldError] = []

    if require_email and not is_valid_email(payload.email):
        errors.append(FieldError("email", "Valid email is required"))

    if not payload.answers:
        errors.append(FieldError("answers", "At least one answer is required"))
        return errors

    for i, answer in enumerate(payload.answers):
        if not _is_int(answer.question_id):
            errors.append(FieldError(f"answers[{i}].questionId", "Question ID must be an integer"))
        if not _is_int(answer.selected_option_id):
            errors.append(FieldError(f"answers[{i}].selectedOptionId", "Selected option ID must be an integer"))

    return errors

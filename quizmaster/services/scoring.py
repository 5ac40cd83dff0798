"""
Answer scoring.

Pure functions over the quiz's answer key and a submitted answer set; no
I/O, no session access.
"""

from dataclasses import dataclass
from typing import Iterable, Sequence

from quizmaster.core.errors import EmptyQuizError


@dataclass(frozen=True)
class ScoreResult:
    score: int
    total: int
    percentage: str


def format_percentage(score: int, total: int) -> str:
    return f"{score / total * 100:.2f}"


def score_answers(questions: Sequence, answers: Iterable) -> ScoreResult:
    """
    Grade ``answers`` (objects with ``question_id`` / ``selected_option_id``)
    against ``questions`` (objects with ``id`` / ``correct_option_id``).

    ``total`` is the number of questions, not of answers. Answers for unknown
    questions are ignored. Repeated answers to the same question are each
    counted, so ``score`` can exceed ``total``.
    """
    total = len(questions)
    if total == 0:
        raise EmptyQuizError("Quiz has no questions to score")

    key = {q.id: q.correct_option_id for q in questions}
    score = 0
    for answer in answers:
        if answer.question_id in key and key[answer.question_id] == answer.selected_option_id:
            score += 1

    return ScoreResult(score=score, total=total, percentage=format_percentage(score, total))

"""
Store operations for quizzes, questions and email logs.

None of these commit: they run inside whatever transaction the caller's
session has open, so the workflow decides when the unit of work ends.
"""

from typing import List, Optional, Sequence

from sqlalchemy.orm import Session

from quizmaster.models.quiz_db.email_log_db import EmailLog, EmailLogType
from quizmaster.models.quiz_db.question_db import Question
from quizmaster.models.quiz_db.quiz_db import Quiz
from quizmaster.models.user_db.user_db import User  # noqa: F401 - users table for the creator FK


def insert_quiz(db: Session, title: str, email: str, creator_user_id: Optional[int] = None) -> Quiz:
    quiz = Quiz(title=title, email=email, creator_user_id=creator_user_id)
    db.add(quiz)
    db.flush()
    return quiz


def bulk_insert_questions(db: Session, quiz_id: int, rows: Sequence[dict]) -> List[Question]:
    questions = [
        Question(
            quiz_id=quiz_id,
            question_text=row["question_text"],
            options=[{"id": i, "text": text} for i, text in enumerate(row["options"], 1)],
            correct_option_id=row["correct_option_id"],
        )
        for row in rows
    ]
    db.add_all(questions)
    db.flush()
    return questions


def insert_email_log(db: Session, quiz_id: int, recipient: str, log_type: EmailLogType) -> EmailLog:
    log = EmailLog(quiz_id=quiz_id, recipient=recipient, type=log_type)
    db.add(log)
    db.flush()
    return log


def get_quiz_by_id(db: Session, quiz_id: int) -> Optional[Quiz]:
    return db.query(Quiz).filter(Quiz.id == quiz_id).first()


def list_quizzes(db: Session, creator_user_id: Optional[int] = None) -> List[Quiz]:
    query = db.query(Quiz)
    if creator_user_id is not None:
        query = query.filter(Quiz.creator_user_id == creator_user_id)
    return query.order_by(Quiz.id.asc()).all()


def get_answer_key(db: Session, quiz_id: int):
    """(id, correct_option_id) rows for every question of the quiz."""
    return (
        db.query(Question.id, Question.correct_option_id)
        .filter(Question.quiz_id == quiz_id)
        .order_by(Question.id.asc())
        .all()
    )


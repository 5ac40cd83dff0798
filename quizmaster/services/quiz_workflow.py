"""
Quiz creation, retrieval and answer submission.

Create and submit each run as one transaction against the session; the
notification goes out only after the commit and its outcome never changes
the result handed back to the caller.
"""

import logging
from typing import List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from quizmaster.core.errors import NotFoundError, PersistenceError, ValidationError
from quizmaster.models.quiz_db import quiz_crud
from quizmaster.models.quiz_db.email_log_db import EmailLogType
from quizmaster.models.quiz_db.quiz_db import Quiz
from quizmaster.models.user_db.user_db import User
from quizmaster.schemas.quiz.quiz_base import AnswerSubmission, QuizCreate
from quizmaster.services.email import EmailNotifier
from quizmaster.services.scoring import ScoreResult, score_answers
from quizmaster.services.validation import validate_answer_submission, validate_quiz_create

logger = logging.getLogger(__name__)


class QuizWorkflow:
    """
    The session is synchronous, so every transactional block runs in the
    threadpool; only the notification is awaited on the event loop.
    """

    def __init__(self, db: Session, notifier: EmailNotifier):
        self.db = db
        self.notifier = notifier

    async def create_quiz(self, payload: QuizCreate, owner: Optional[User] = None) -> Quiz:
        """
        Persist the quiz, its questions and a ``creation`` email log together.

        With an ``owner`` (authenticated mode) the owner email and creator id
        come from the user and any client-supplied email is ignored.
        """
        errors = validate_quiz_create(payload, require_email=owner is None)
        if errors:
            raise ValidationError(errors)

        quiz, email, title, question_count = await run_in_threadpool(self._persist_quiz, payload, owner)

        await self._notify(
            email,
            f'Quiz "{title}" Created',
            f'Your quiz "{title}" with {question_count} question(s) has been created successfully.',
        )
        return quiz

    def _persist_quiz(self, payload: QuizCreate, owner: Optional[User]) -> Tuple[Quiz, str, str, int]:
        email = owner.email if owner is not None else payload.email.strip()
        creator_user_id = owner.id if owner is not None else None
        title = payload.title.strip()

        try:
            quiz = quiz_crud.insert_quiz(self.db, title, email, creator_user_id)
            quiz_crud.bulk_insert_questions(
                self.db,
                quiz.id,
                [
                    {
                        "question_text": q.question_text,
                        "options": [opt.text for opt in q.options],
                        "correct_option_id": q.correct_option_id,
                    }
                    for q in payload.questions
                ],
            )
            quiz_crud.insert_email_log(self.db, quiz.id, email, EmailLogType.creation)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Failed to create quiz %r", title)
            raise PersistenceError("Failed to create quiz", e)

        self.db.refresh(quiz)
        question_count = len(quiz.questions)
        logger.info("Quiz %s created with %d question(s)", quiz.id, question_count)
        return quiz, email, title, question_count

    def list_quizzes(self, owner: Optional[User] = None) -> List[Quiz]:
        return quiz_crud.list_quizzes(self.db, owner.id if owner is not None else None)

    def get_quiz(self, quiz_id: int) -> Quiz:
        quiz = quiz_crud.get_quiz_by_id(self.db, quiz_id)
        if not quiz:
            raise NotFoundError("Quiz not found")
        return quiz

    async def submit_answers(
        self,
        quiz_id: int,
        payload: AnswerSubmission,
        submitter: Optional[User] = None,
    ) -> ScoreResult:
        errors = validate_answer_submission(payload, require_email=submitter is None)
        if errors:
            raise ValidationError(errors)

        result, title, email = await run_in_threadpool(self._record_submission, quiz_id, payload, submitter)

        await self._notify(
            email,
            f'Quiz Results for "{title}"',
            f'You scored {result.score}/{result.total} ({result.percentage}%) on "{title}".',
        )
        return result

    def _record_submission(
        self, quiz_id: int, payload: AnswerSubmission, submitter: Optional[User]
    ) -> Tuple[ScoreResult, str, str]:
        email = submitter.email if submitter is not None else payload.email.strip()
        try:
            quiz = quiz_crud.get_quiz_by_id(self.db, quiz_id)
            if not quiz:
                raise NotFoundError("Quiz not found")
            answer_key = quiz_crud.get_answer_key(self.db, quiz_id)
            if not answer_key:
                raise NotFoundError("Quiz not found")

            result = score_answers(answer_key, payload.answers)
            quiz_crud.insert_email_log(self.db, quiz_id, email, EmailLogType.submission)
            title = quiz.title
            self.db.commit()
        except NotFoundError:
            self.db.rollback()
            raise
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Failed to record submission for quiz %s", quiz_id)
            raise PersistenceError("Failed to submit answers", e)

        logger.info("Quiz %s submission scored %d/%d", quiz_id, result.score, result.total)
        return result, title, email

    async def _notify(self, to_email: str, subject: str, body: str) -> None:
        sent = await self.notifier.send(to_email, subject, body)
        if not sent:
            logger.warning("Notification %r to %s was not delivered", subject, to_email)

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List, Optional
from quizmaster.core.database import get_db
from quizmaster.core.security import get_request_identity
from quizmaster.models.user_db.user_db import User
from quizmaster.schemas.quiz.quiz_base import (
    AnswerSubmission,
    QuizCreate,
    QuizOut,
    QuizSummaryOut,
    ScoreOut,
)
from quizmaster.services.email import EmailNotifier, get_notifier
from quizmaster.services.quiz_workflow import QuizWorkflow

quiz_router = APIRouter(prefix="/quizzes", tags=["Quizzes"])


def get_workflow(
    db: Session = Depends(get_db),
    notifier: EmailNotifier = Depends(get_notifier),
) -> QuizWorkflow:
    return QuizWorkflow(db, notifier)


@quiz_router.post("", response_model=QuizOut, status_code=status.HTTP_201_CREATED)
async def create_quiz(
    quiz_in: QuizCreate,
    workflow: QuizWorkflow = Depends(get_workflow),
    current_user: Optional[User] = Depends(get_request_identity),
):
    return await workflow.create_quiz(quiz_in, owner=current_user)


@quiz_router.get("", response_model=List[QuizSummaryOut])
def list_quizzes(
    workflow: QuizWorkflow = Depends(get_workflow),
    current_user: Optional[User] = Depends(get_request_identity),
):
    return workflow.list_quizzes(owner=current_user)


@quiz_router.get("/{quiz_id}", response_model=QuizOut)
def get_quiz(
    quiz_id: int,
    workflow: QuizWorkflow = Depends(get_workflow),
    current_user: Optional[User] = Depends(get_request_identity),
):
    return workflow.get_quiz(quiz_id)


@quiz_router.post("/{quiz_id}/answers", response_model=ScoreOut)
async def submit_answers(
    quiz_id: int,
    submission: AnswerSubmission,
    workflow: QuizWorkflow = Depends(get_workflow),
    current_user: Optional[User] = Depends(get_request_identity),
):
    return await workflow.submit_answers(quiz_id, submission, submitter=current_user)

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from quizmaster.core.config import settings
from quizmaster.core.database import get_db
from quizmaster.core.errors import ConflictError, Unauthorized
from quizmaster.core.security import (
    verify_password,
    create_access_token,
    get_current_user
)
from quizmaster.models.user_db.user_db import User
from quizmaster.models.user_db.user_db_crud import create_user, get_user_by_email
from quizmaster.schemas.login.login_base import LoginRequest, LoginResponse, SignupRequest
from quizmaster.schemas.users.user_base import UserOut
from quizmaster.services.email import EmailNotifier, get_notifier

logger = logging.getLogger(__name__)

auth_router = APIRouter(prefix="/auth", tags=["Auth"])


def register_user(db: Session, email: str, password: str) -> UserOut:
    if get_user_by_email(db, email):
        raise ConflictError("Email already exists")
    user = create_user(db, email, password)
    return UserOut.model_validate(user)


@auth_router.post("/signup", response_model=UserOut, status_code=status.HTTP_201_CREATED)
async def signup(
    payload: SignupRequest,
    db: Session = Depends(get_db),
    notifier: EmailNotifier = Depends(get_notifier),
):
    user = await run_in_threadpool(register_user, db, payload.email, payload.password)

    sent = await notifier.send(
        user.email,
        "Welcome to QuizMaster!",
        f"Thank you for signing up, {user.email}! "
        f"Start creating quizzes now at {settings.APP_BASE_URL}/docs.",
    )
    if not sent:
        logger.warning("Welcome email failed to send for %s", user.email)
    return user


@auth_router.post("/login", response_model=LoginResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    user = get_user_by_email(db, payload.email)
    if not user or not verify_password(payload.password, user.hashed_password):
        raise Unauthorized("Invalid credentials")

    token = create_access_token({"sub": user.email, "id": user.id})
    return {"user": user, "token": token}


@auth_router.get("/me", response_model=UserOut)
def get_me(current_user: User = Depends(get_current_user)):
    return current_user

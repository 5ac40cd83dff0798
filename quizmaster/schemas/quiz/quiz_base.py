from datetime import datetime

from pydantic import BaseModel, Field
from typing import Any, List, Optional


# Request bodies are deliberately loose: shape checks live in
# quizmaster.services.validation so every rule reports as a field error.

class OptionIn(BaseModel):
    text: Optional[str] = None


class QuestionIn(BaseModel):
    question_text: Optional[str] = Field(default=None, alias="questionText")
    options: Optional[List[OptionIn]] = None
    correct_option_id: Optional[Any] = Field(default=None, alias="correctOptionId")


class QuizCreate(BaseModel):
    title: Optional[str] = None
    email: Optional[str] = None
    questions: Optional[List[QuestionIn]] = None


class AnswerIn(BaseModel):
    question_id: Optional[Any] = Field(default=None, alias="questionId")
    selected_option_id: Optional[Any] = Field(default=None, alias="selectedOptionId")


class AnswerSubmission(BaseModel):
    email: Optional[str] = None
    answers: Optional[List[AnswerIn]] = None


class OptionOut(BaseModel):
    id: int
    text: str


class QuestionOut(BaseModel):
    id: int
    question_text: str = Field(serialization_alias="questionText")
    options: List[OptionOut]
    correct_option_id: int = Field(serialization_alias="correctOptionId")

    class Config:
        from_attributes = True


class QuizSummaryOut(BaseModel):
    id: int
    title: str
    email: str
    created_at: datetime = Field(serialization_alias="createdAt")

    class Config:
        from_attributes = True


class QuizOut(QuizSummaryOut):
    questions: List[QuestionOut]


class ScoreOut(BaseModel):
    score: int
    total: int
    percentage: str

    class Config:
        from_attributes = True

from pydantic import BaseModel, EmailStr, Field
from quizmaster.schemas.users.user_base import UserOut


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)


class SignupRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)


class LoginResponse(BaseModel):
    token: str
    user: UserOut

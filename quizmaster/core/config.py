from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # JWT
    JWT_SECRET_KEY: str
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # Authenticated mode: quizzes are owned by and listed for the signed-in user
    AUTH_REQUIRED: bool = False

    # email
    MAIL_FROM: str = ""
    MAIL_PASSWORD: str = ""
    MAIL_HOST: str = "smtp.gmail.com"
    MAIL_PORT: int = 587
    MAIL_TIMEOUT: float = 10
    APP_BASE_URL: str = "http://localhost:3000"

    # database
    DATABASE_URL: str
    SQL_ECHO: bool = False

    PORT: int = 3000
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "ignore"

    @field_validator("DATABASE_URL", "JWT_SECRET_KEY")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be empty")
        return v

    @field_validator("PORT")
    @classmethod
    def valid_port(cls, v: int) -> int:
        if not 0 < v < 65536:
            raise ValueError("must be between 1 and 65535")
        return v


settings = Settings()

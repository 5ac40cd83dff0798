from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from quizmaster.core.config import settings


engine = create_engine(settings.DATABASE_URL, echo=settings.SQL_ECHO)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

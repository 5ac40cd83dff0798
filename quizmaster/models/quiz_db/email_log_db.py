from datetime import datetime
from enum import Enum
from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, Enum as SAEnum
from sqlalchemy.orm import relationship
from quizmaster.core.database import Base


class EmailLogType(str, Enum):
    creation = "creation"
    submission = "submission"


class EmailLog(Base):
    """Append-only record of a notification attempt, written whether or not the mail went out."""

    __tablename__ = "email_logs"

    id = Column(Integer, primary_key=True, index=True)
    quiz_id = Column(Integer, ForeignKey("quizzes.id", ondelete="CASCADE"), nullable=False, index=True)
    recipient = Column(String(255), nullable=False)
    type = Column(
        SAEnum(EmailLogType, name="email_log_type", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    sent_at = Column(DateTime, default=datetime.utcnow)

    quiz = relationship("Quiz", back_populates="email_logs")

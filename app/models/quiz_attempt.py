# app/models/quiz_attempt.py
import uuid

from sqlalchemy import JSON, Column, DateTime, Float, ForeignKey, Integer, String
from sqlalchemy.dialects.postgresql import JSONB

from app.core.database import Base
from app.utils.timeutils import get_utc_now


class QuizAttempt(Base):
    """One submitted quiz attempt. Rows are append-only."""

    __tablename__ = "quiz_attempts"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    # Relationships
    quiz_id = Column(
        String(36),
        ForeignKey("quizzes.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id = Column(String(36), nullable=False, index=True)
    lesson_id = Column(String(36), nullable=True, index=True)

    # Attempt data
    score = Column(Float, nullable=False)
    max_score = Column(Float, nullable=False)
    answers = Column(
        JSON().with_variant(JSONB, "postgresql"), nullable=False
    )  # Opaque payload of the submitted answers
    correct_count = Column(Integer, nullable=True)
    total_questions = Column(Integer, nullable=True)

    # Time tracking
    time_spent = Column(Integer, nullable=True)  # Seconds

    # Timestamps
    created_at = Column(
        DateTime(timezone=True), default=get_utc_now, nullable=False, index=True
    )

    def __repr__(self):
        return (
            f"<QuizAttempt(id={self.id}, user_id={self.user_id}, score={self.score})>"
        )

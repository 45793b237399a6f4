# app/models/exercise_attempt.py
import uuid

from sqlalchemy import JSON, Column, DateTime, Float, ForeignKey, String
from sqlalchemy.dialects.postgresql import JSONB

from app.core.database import Base
from app.utils.timeutils import get_utc_now


class ExerciseAttempt(Base):
    __tablename__ = "exercise_attempts"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    exercise_id = Column(
        String(36),
        ForeignKey("exercises.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id = Column(String(36), nullable=False, index=True)
    lesson_id = Column(String(36), nullable=False, index=True)

    score = Column(Float, nullable=False)
    max_score = Column(Float, nullable=False)
    answers = Column(JSON().with_variant(JSONB, "postgresql"), nullable=True)

    created_at = Column(
        DateTime(timezone=True), default=get_utc_now, nullable=False, index=True
    )

    def __repr__(self):
        return (
            f"<ExerciseAttempt(id={self.id}, user_id={self.user_id}, "
            f"exercise_id={self.exercise_id})>"
        )

# app/models/lesson_tracking.py
import uuid

from sqlalchemy import Boolean, Column, DateTime, Index, Integer, String

from app.core.database import Base
from app.utils.timeutils import get_utc_now


class UserLessonTracking(Base):
    """
    One engagement session of a user on a lesson.

    A session is open until ``completed`` flips to True; it is never reopened.
    """

    __tablename__ = "user_lesson_tracking"
    __table_args__ = (
        Index("ix_user_lesson_tracking_user_lesson", "user_id", "lesson_id"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), nullable=False, index=True)
    lesson_id = Column(String(36), nullable=False, index=True)

    start_time = Column(DateTime(timezone=True), default=get_utc_now, nullable=False)
    end_time = Column(DateTime(timezone=True), nullable=True)
    total_time_seconds = Column(Integer, nullable=True)
    progress_percentage = Column(Integer, default=0, nullable=False)
    completed = Column(Boolean, default=False, nullable=False)
    last_position = Column(String(255), nullable=True)

    updated_at = Column(
        DateTime(timezone=True),
        default=get_utc_now,
        onupdate=get_utc_now,
        nullable=False,
    )

    def __repr__(self):
        return (
            f"<UserLessonTracking(id={self.id}, lesson_id={self.lesson_id}, "
            f"completed={self.completed})>"
        )

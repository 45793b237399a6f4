# app/models/lesson_statistic.py
import uuid

from sqlalchemy import Column, DateTime, Float, Integer, String

from app.core.database import Base
from app.utils.timeutils import get_utc_now


class LessonStatistic(Base):
    __tablename__ = "lesson_statistics"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    lesson_id = Column(String(36), unique=True, nullable=False, index=True)

    views = Column(Integer, default=0, nullable=False)
    unique_users = Column(Integer, default=0, nullable=False)
    completion_count = Column(Integer, default=0, nullable=False)
    avg_time_spent = Column(Float, nullable=True)  # Seconds
    exercise_completions = Column(Integer, default=0, nullable=False)

    created_at = Column(DateTime(timezone=True), default=get_utc_now, nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        default=get_utc_now,
        onupdate=get_utc_now,
        nullable=False,
    )

    def __repr__(self):
        return f"<LessonStatistic(lesson_id={self.lesson_id}, views={self.views})>"

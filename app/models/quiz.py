# app/models/quiz.py
import uuid

from sqlalchemy import Column, DateTime, ForeignKey, String

from app.core.database import Base
from app.utils.timeutils import get_utc_now


class Quiz(Base):
    __tablename__ = "quizzes"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    lesson_id = Column(
        String(36), ForeignKey("lessons.id", ondelete="SET NULL"), nullable=True
    )
    title = Column(String(255), nullable=False)
    category = Column(String(100), nullable=True)
    created_at = Column(DateTime(timezone=True), default=get_utc_now, nullable=False)

    def __repr__(self):
        return f"<Quiz(id={self.id}, title={self.title})>"


class Exercise(Base):
    __tablename__ = "exercises"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    lesson_id = Column(
        String(36), ForeignKey("lessons.id", ondelete="CASCADE"), nullable=True
    )
    title = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), default=get_utc_now, nullable=False)

    def __repr__(self):
        return f"<Exercise(id={self.id}, title={self.title})>"

"""
Attempt Repositories

Append-only access to ``quiz_attempts`` and ``exercise_attempts``.
No update or delete is exposed.
"""

from typing import List, Optional

from sqlalchemy.orm import Session, selectinload

from app.core.decorator import db_exception
from app.models.exercise_attempt import ExerciseAttempt
from app.models.quiz_attempt import QuizAttempt
from app.repositories.base import BaseRepository


class QuizAttemptRepository(BaseRepository[QuizAttempt]):
    """Repository for QuizAttempt model."""

    def __init__(self, db: Session):
        super().__init__(QuizAttempt, db)

    def update(self, instance, **kwargs):
        raise NotImplementedError("Quiz attempts are immutable")

    @db_exception
    def list_for_user(
        self,
        user_id: str,
        quiz_id: Optional[str] = None,
        lesson_id: Optional[str] = None,
        limit: int = 10,
    ) -> List[QuizAttempt]:
        """A user's attempts, newest first."""
        query = (
            self.db.query(QuizAttempt)
            .options(selectinload(QuizAttempt.quiz))
            .filter(QuizAttempt.user_id == user_id)
        )
        if quiz_id:
            query = query.filter(QuizAttempt.quiz_id == quiz_id)
        if lesson_id:
            query = query.filter(QuizAttempt.lesson_id == lesson_id)

        return (
            query.order_by(QuizAttempt.created_at.desc(), QuizAttempt.id.desc())
            .limit(limit)
            .all()
        )

    @db_exception
    def list_for_quiz(
        self, quiz_id: str, user_id: Optional[str] = None
    ) -> List[QuizAttempt]:
        """Every attempt of a quiz, newest first."""
        query = self.db.query(QuizAttempt).filter(QuizAttempt.quiz_id == quiz_id)
        if user_id:
            query = query.filter(QuizAttempt.user_id == user_id)
        return query.order_by(QuizAttempt.created_at.desc()).all()

    @db_exception
    def list_matching(
        self, user_id: Optional[str] = None, quiz_id: Optional[str] = None
    ) -> List[QuizAttempt]:
        """Attempts filtered by any combination of user and quiz."""
        query = self.db.query(QuizAttempt)
        if user_id:
            query = query.filter(QuizAttempt.user_id == user_id)
        if quiz_id:
            query = query.filter(QuizAttempt.quiz_id == quiz_id)
        return query.order_by(QuizAttempt.created_at.asc()).all()


class ExerciseAttemptRepository(BaseRepository[ExerciseAttempt]):
    """Repository for ExerciseAttempt model."""

    def __init__(self, db: Session):
        super().__init__(ExerciseAttempt, db)

    def update(self, instance, **kwargs):
        raise NotImplementedError("Exercise attempts are immutable")

    @db_exception
    def list_for_user_lesson(self, user_id: str, lesson_id: str) -> List[ExerciseAttempt]:
        return (
            self.db.query(ExerciseAttempt)
            .filter(
                ExerciseAttempt.user_id == user_id,
                ExerciseAttempt.lesson_id == lesson_id,
            )
            .order_by(ExerciseAttempt.created_at.desc())
            .all()
        )

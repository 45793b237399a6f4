from typing import List, Optional

from sqlalchemy.orm import Session

from app.core.decorator import db_exception
from app.models.lesson_statistic import LessonStatistic
from app.repositories.base import BaseRepository


class LessonStatisticRepository(BaseRepository[LessonStatistic]):
    """Repository for the per-lesson aggregate row."""

    def __init__(self, db: Session):
        super().__init__(LessonStatistic, db)

    @db_exception
    def get_by_lesson(self, lesson_id: str) -> Optional[LessonStatistic]:
        return (
            self.db.query(LessonStatistic)
            .filter(LessonStatistic.lesson_id == lesson_id)
            .first()
        )

    def upsert(self, lesson_id: str, **fields) -> LessonStatistic:
        """Create the lesson's row or overwrite the given fields."""
        row = self.get_by_lesson(lesson_id)
        if row is None:
            return self.create(lesson_id=lesson_id, **fields)
        return self.update(row, **fields)

    @db_exception
    def list_for_lessons(self, lesson_ids: List[str]) -> List[LessonStatistic]:
        if not lesson_ids:
            return []
        return (
            self.db.query(LessonStatistic)
            .filter(LessonStatistic.lesson_id.in_(lesson_ids))
            .order_by(LessonStatistic.lesson_id)
            .all()
        )

"""
Tracking Repository

Access to the ``user_lesson_tracking`` log.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from app.core.decorator import db_exception
from app.models.lesson_tracking import UserLessonTracking
from app.repositories.base import BaseRepository


class TrackingRepository(BaseRepository[UserLessonTracking]):
    """Repository for UserLessonTracking model."""

    def __init__(self, db: Session):
        super().__init__(UserLessonTracking, db)

    @db_exception
    def find_latest(self, user_id: str, lesson_id: str) -> Optional[UserLessonTracking]:
        """Most recent session of the user on the lesson, by ``start_time``."""
        return (
            self.db.query(UserLessonTracking)
            .filter(
                UserLessonTracking.user_id == user_id,
                UserLessonTracking.lesson_id == lesson_id,
            )
            .order_by(
                UserLessonTracking.start_time.desc(),
                UserLessonTracking.updated_at.desc(),
            )
            .first()
        )

    def find_latest_open_tracking(
        self, user_id: str, lesson_id: str
    ) -> Optional[UserLessonTracking]:
        """
        The session that progress/complete events update.

        Only the latest session qualifies, and only while it is not completed:
        an older open session behind a completed one is not resumed.
        """
        latest = self.find_latest(user_id, lesson_id)
        if latest is None or latest.completed:
            return None
        return latest

    @db_exception
    def list_for_lesson(self, lesson_id: str) -> List[UserLessonTracking]:
        return (
            self.db.query(UserLessonTracking)
            .filter(UserLessonTracking.lesson_id == lesson_id)
            .all()
        )

# app/services/lesson_statistics.py
import logging
from typing import List

from app.core.exceptions import NotFoundError
from app.models.lesson_statistic import LessonStatistic
from app.repositories.catalog_repo import CatalogRepository
from app.repositories.lesson_statistic_repo import LessonStatisticRepository
from app.repositories.tracking_repo import TrackingRepository
from app.schemas.statistics import LessonStatisticResponse

logger = logging.getLogger(__name__)


class LessonStatisticsService:
    """Per-lesson engagement aggregates, derived from the tracking log."""

    def __init__(
        self,
        statistics: LessonStatisticRepository,
        tracking: TrackingRepository,
        catalog: CatalogRepository,
    ):
        self.statistics = statistics
        self.tracking = tracking
        self.catalog = catalog

    def refresh(self, lesson_id: str) -> LessonStatistic:
        """Recompute views, unique users, completions and average time."""
        sessions = self.tracking.list_for_lesson(lesson_id)
        times = [
            s.total_time_seconds for s in sessions if s.total_time_seconds is not None
        ]

        row = self.statistics.upsert(
            lesson_id,
            views=len(sessions),
            unique_users=len({s.user_id for s in sessions}),
            completion_count=sum(1 for s in sessions if s.completed),
            avg_time_spent=(sum(times) / len(times)) if times else None,
        )
        logger.debug(f"Lesson {lesson_id} statistics refreshed: views={row.views}")
        return row

    def register_exercise_completion(self, lesson_id: str) -> LessonStatistic:
        row = self.statistics.get_by_lesson(lesson_id)
        if row is None:
            return self.statistics.create(lesson_id=lesson_id, exercise_completions=1)
        return self.statistics.update(
            row, exercise_completions=(row.exercise_completions or 0) + 1
        )

    def get_lesson_statistics(self, lesson_id: str) -> LessonStatisticResponse:
        if self.catalog.get_lesson(lesson_id) is None:
            raise NotFoundError("Lesson not found")

        row = self.statistics.get_by_lesson(lesson_id)
        if row is None:
            return LessonStatisticResponse(lesson_id=lesson_id)
        return LessonStatisticResponse.model_validate(row)

    def get_formation_statistics(
        self, formation_id: str
    ) -> List[LessonStatisticResponse]:
        """Statistics of every lesson of the formation; untracked lessons read as zero."""
        if self.catalog.get_formation(formation_id) is None:
            raise NotFoundError("Formation not found")

        lesson_ids = self.catalog.lesson_ids_for_formation(formation_id)
        rows = {
            row.lesson_id: row
            for row in self.statistics.list_for_lessons(lesson_ids)
        }
        return [
            LessonStatisticResponse.model_validate(rows[lesson_id])
            if lesson_id in rows
            else LessonStatisticResponse(lesson_id=lesson_id)
            for lesson_id in lesson_ids
        ]

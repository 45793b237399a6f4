# app/services/progress.py
import logging
from typing import Optional

from app.core.exceptions import InvalidActionError, NotFoundError, ValidationError
from app.models.lesson_tracking import UserLessonTracking
from app.repositories.catalog_repo import CatalogRepository
from app.repositories.tracking_repo import TrackingRepository
from app.utils.timeutils import get_utc_now

logger = logging.getLogger(__name__)

VIEW = "view"
START = "start"
PROGRESS = "progress"
COMPLETE = "complete"
VALID_ACTIONS = (VIEW, START, PROGRESS, COMPLETE)

# Actions that always begin a fresh session
OPENING_ACTIONS = (VIEW, START)


class ProgressTracker:
    """
    Lesson engagement state machine, per (user, lesson).

    States are *no record*, *open* and *completed*. ``view``/``start`` always
    open a new session; ``progress``/``complete`` advance the latest open
    session, or open one when there is none. A completed session is final.
    """

    def __init__(
        self,
        tracking: TrackingRepository,
        catalog: CatalogRepository,
        lesson_statistics=None,
    ):
        self.tracking = tracking
        self.catalog = catalog
        # LessonStatisticsService, refreshed after each event
        self.lesson_statistics = lesson_statistics

    def record_lesson_event(
        self,
        user_id: str,
        lesson_id: Optional[str],
        action: Optional[str],
        time_spent: Optional[int] = None,
        progress: Optional[int] = None,
        position: Optional[str] = None,
    ) -> str:
        """Apply one event and return the id of the session it touched."""
        if not lesson_id or not action:
            raise ValidationError("lesson_id and action are required")
        if action not in VALID_ACTIONS:
            raise InvalidActionError(
                "Invalid action. Valid actions are: " + ", ".join(VALID_ACTIONS)
            )
        if progress is not None and not 0 <= progress <= 100:
            raise ValidationError("progress must be between 0 and 100")
        if time_spent is not None and time_spent < 0:
            raise ValidationError("time_spent must not be negative")

        if self.catalog.get_lesson(lesson_id) is None:
            raise NotFoundError("Lesson not found")

        session = None
        if action not in OPENING_ACTIONS:
            session = self.tracking.find_latest_open_tracking(user_id, lesson_id)

        if session is None:
            session = self._open_session(
                user_id, lesson_id, action, time_spent, progress, position
            )
        else:
            session = self._advance_session(
                session, action, time_spent, progress, position
            )

        self._refresh_statistics(lesson_id)
        return session.id

    def get_lesson_progress(
        self, user_id: str, lesson_id: str
    ) -> Optional[UserLessonTracking]:
        """Latest session of the user on the lesson, open or not."""
        return self.tracking.find_latest(user_id, lesson_id)

    def _open_session(
        self,
        user_id: str,
        lesson_id: str,
        action: str,
        time_spent: Optional[int],
        progress: Optional[int],
        position: Optional[str],
    ) -> UserLessonTracking:
        now = get_utc_now()
        fields = dict(
            user_id=user_id,
            lesson_id=lesson_id,
            start_time=now,
            updated_at=now,
            total_time_seconds=time_spent,
            last_position=position,
            progress_percentage=0,
            completed=False,
        )
        if action == PROGRESS:
            fields["progress_percentage"] = progress or 0
        elif action == COMPLETE:
            fields.update(completed=True, end_time=now, progress_percentage=100)

        session = self.tracking.create(**fields)
        logger.info(
            f"Tracking {session.id} opened by '{action}': "
            f"user={user_id} lesson={lesson_id} completed={session.completed}"
        )
        return session

    def _advance_session(
        self,
        session: UserLessonTracking,
        action: str,
        time_spent: Optional[int],
        progress: Optional[int],
        position: Optional[str],
    ) -> UserLessonTracking:
        now = get_utc_now()
        changes = {"updated_at": now}

        if time_spent is not None:
            changes["total_time_seconds"] = time_spent
        if position is not None:
            changes["last_position"] = position

        if action == COMPLETE:
            changes.update(completed=True, end_time=now, progress_percentage=100)
        elif progress is not None:
            changes["progress_percentage"] = progress

        session = self.tracking.update(session, **changes)
        logger.info(
            f"Tracking {session.id} updated by '{action}': "
            f"progress={session.progress_percentage} completed={session.completed}"
        )
        return session

    def _refresh_statistics(self, lesson_id: str) -> None:
        if self.lesson_statistics is None:
            return
        try:
            self.lesson_statistics.refresh(lesson_id)
        except Exception as e:
            logger.error(
                f"Failed to refresh statistics of lesson {lesson_id}: {e}",
                exc_info=True,
            )

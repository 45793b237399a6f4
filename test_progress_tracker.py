import pytest

from app.core.exceptions import (
    DependencyError,
    InvalidActionError,
    NotFoundError,
    ValidationError,
)
from app.models import UserLessonTracking
from app.repositories import (
    CatalogRepository,
    LessonStatisticRepository,
    TrackingRepository,
)
from app.services.progress import ProgressTracker


def count_sessions(db, user_id, lesson_id):
    return (
        db.query(UserLessonTracking)
        .filter(
            UserLessonTracking.user_id == user_id,
            UserLessonTracking.lesson_id == lesson_id,
        )
        .count()
    )


def test_each_start_opens_a_new_session(tracker, catalog, db):
    first = tracker.record_lesson_event("user-1", "lesson-1", "start")
    second = tracker.record_lesson_event("user-1", "lesson-1", "start")

    assert first != second
    assert count_sessions(db, "user-1", "lesson-1") == 2


def test_view_opens_a_session_at_zero(tracker, catalog, db):
    tracking_id = tracker.record_lesson_event(
        "user-1", "lesson-1", "view", time_spent=5, position="00:05"
    )

    session = TrackingRepository(db).get_by_id(tracking_id)
    assert session.progress_percentage == 0
    assert session.completed is False
    assert session.total_time_seconds == 5
    assert session.last_position == "00:05"


def test_progress_updates_the_open_session(tracker, catalog, db):
    opened = tracker.record_lesson_event("user-1", "lesson-1", "start")
    updated = tracker.record_lesson_event(
        "user-1", "lesson-1", "progress", time_spent=120, progress=40, position="p3"
    )

    assert updated == opened
    session = TrackingRepository(db).get_by_id(opened)
    assert session.progress_percentage == 40
    assert session.total_time_seconds == 120
    assert session.last_position == "p3"
    assert count_sessions(db, "user-1", "lesson-1") == 1


def test_progress_without_open_session_opens_one(tracker, catalog, db):
    tracking_id = tracker.record_lesson_event(
        "user-1", "lesson-1", "progress", progress=25
    )

    session = TrackingRepository(db).get_by_id(tracking_id)
    assert session.progress_percentage == 25
    assert session.completed is False


@pytest.mark.parametrize("progress", [None, 0, 30, 100])
def test_complete_forces_full_progress(tracker, catalog, db, progress):
    tracker.record_lesson_event("user-1", "lesson-1", "start")
    tracking_id = tracker.record_lesson_event(
        "user-1", "lesson-1", "complete", progress=progress
    )

    session = TrackingRepository(db).get_by_id(tracking_id)
    assert session.progress_percentage == 100
    assert session.completed is True
    assert session.end_time is not None


def test_complete_without_open_session(tracker, catalog, db):
    tracking_id = tracker.record_lesson_event(
        "user-1", "lesson-1", "complete", progress=10
    )

    session = TrackingRepository(db).get_by_id(tracking_id)
    assert session.progress_percentage == 100
    assert session.completed is True


def test_completed_session_is_not_reopened(tracker, catalog, db):
    completed = tracker.record_lesson_event("user-1", "lesson-1", "complete")
    later = tracker.record_lesson_event("user-1", "lesson-1", "progress", progress=10)

    assert later != completed
    assert TrackingRepository(db).get_by_id(completed).progress_percentage == 100
    assert TrackingRepository(db).get_by_id(later).progress_percentage == 10


def test_sessions_are_per_user(tracker, catalog, db):
    tracker.record_lesson_event("user-1", "lesson-1", "start")
    other = tracker.record_lesson_event("user-2", "lesson-1", "progress", progress=50)

    assert count_sessions(db, "user-1", "lesson-1") == 1
    assert TrackingRepository(db).get_by_id(other).user_id == "user-2"


def test_get_lesson_progress_returns_latest(tracker, catalog):
    assert tracker.get_lesson_progress("user-1", "lesson-1") is None

    tracker.record_lesson_event("user-1", "lesson-1", "start")
    latest = tracker.record_lesson_event("user-1", "lesson-1", "start")

    assert tracker.get_lesson_progress("user-1", "lesson-1").id == latest


def test_events_refresh_lesson_statistics(tracker, catalog, db):
    tracker.record_lesson_event("user-1", "lesson-1", "start", time_spent=60)
    tracker.record_lesson_event("user-1", "lesson-1", "complete", time_spent=100)
    tracker.record_lesson_event("user-2", "lesson-1", "view")

    stats = LessonStatisticRepository(db).get_by_lesson("lesson-1")
    assert stats.views == 2
    assert stats.unique_users == 2
    assert stats.completion_count == 1
    assert stats.avg_time_spent == 100


class TestRejectedEvents:
    def test_unknown_action(self, tracker, catalog, db):
        with pytest.raises(InvalidActionError):
            tracker.record_lesson_event("user-1", "lesson-1", "pause")
        assert TrackingRepository(db).count() == 0

    @pytest.mark.parametrize("lesson_id,action", [(None, "start"), ("lesson-1", None)])
    def test_missing_fields(self, tracker, catalog, lesson_id, action):
        with pytest.raises(ValidationError):
            tracker.record_lesson_event("user-1", lesson_id, action)

    @pytest.mark.parametrize("progress", [-1, 101])
    def test_progress_out_of_range(self, tracker, catalog, progress):
        with pytest.raises(ValidationError):
            tracker.record_lesson_event(
                "user-1", "lesson-1", "progress", progress=progress
            )

    def test_negative_time(self, tracker, catalog):
        with pytest.raises(ValidationError):
            tracker.record_lesson_event("user-1", "lesson-1", "view", time_spent=-3)

    def test_unknown_lesson(self, tracker, catalog):
        with pytest.raises(NotFoundError):
            tracker.record_lesson_event("user-1", "missing", "start")


def test_statistics_failure_does_not_fail_event(db, catalog):
    class BrokenStatistics:
        def refresh(self, lesson_id):
            raise DependencyError("Database error occurred")

    tracker = ProgressTracker(
        TrackingRepository(db),
        CatalogRepository(db),
        lesson_statistics=BrokenStatistics(),
    )

    tracking_id = tracker.record_lesson_event("user-1", "lesson-1", "start")

    assert tracking_id
    assert TrackingRepository(db).get_by_id(tracking_id).lesson_id == "lesson-1"
    assert count_sessions(db, "user-1", "lesson-1") == 1
    assert LessonStatisticRepository(db).get_by_lesson("lesson-1") is None

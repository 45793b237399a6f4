import os
import tempfile

# Must be set before anything under app/ reads the settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RATE_LIMIT_STORAGE_URI"] = "memory://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["LOG_FILE"] = os.path.join(tempfile.gettempdir(), "formations-tests.log")

from types import SimpleNamespace

import pytest

from app.core.database import Base, SessionLocal, engine
from app.models import Chapter, Exercise, Formation, Lesson, Profile, Quiz
from app.repositories import (
    CatalogRepository,
    ExerciseAttemptRepository,
    LessonStatisticRepository,
    ProfileRepository,
    QuizAttemptRepository,
    TrackingRepository,
)
from app.services.attempt import AttemptRecorder
from app.services.leaderboard import LeaderboardRanker
from app.services.lesson_statistics import LessonStatisticsService
from app.services.progress import ProgressTracker
from app.services.statistics import StatisticsAggregator


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def catalog(db):
    """One formation with two lessons, two quizzes, an exercise and four profiles."""
    formation = Formation(id="formation-1", title="Algebra")
    chapter = Chapter(id="chapter-1", formation_id=formation.id, title="Basics")
    lesson = Lesson(id="lesson-1", chapter_id=chapter.id, title="Equations", position=1)
    other_lesson = Lesson(
        id="lesson-2", chapter_id=chapter.id, title="Inequalities", position=2
    )
    quiz = Quiz(id="quiz-1", lesson_id=lesson.id, title="Equations quiz", category="math")
    empty_quiz = Quiz(id="quiz-2", title="Unattempted quiz")
    exercise = Exercise(id="exercise-1", lesson_id=lesson.id, title="Solve for x")

    db.add_all(
        [
            formation,
            chapter,
            lesson,
            other_lesson,
            quiz,
            empty_quiz,
            exercise,
            Profile(id="admin-1", username="admin", role="admin"),
            Profile(id="user-1", username="alice", full_name="Alice A."),
            Profile(id="user-2", username="bob", full_name="Bob B."),
            Profile(id="user-3", username="carol", full_name="Carol C."),
        ]
    )
    db.commit()

    return SimpleNamespace(
        formation=formation,
        lesson=lesson,
        other_lesson=other_lesson,
        quiz=quiz,
        empty_quiz=empty_quiz,
        exercise=exercise,
    )


@pytest.fixture
def lesson_statistics(db):
    return LessonStatisticsService(
        LessonStatisticRepository(db), TrackingRepository(db), CatalogRepository(db)
    )


@pytest.fixture
def recorder(db, lesson_statistics):
    return AttemptRecorder(
        QuizAttemptRepository(db),
        ExerciseAttemptRepository(db),
        CatalogRepository(db),
        lesson_statistics=lesson_statistics,
    )


@pytest.fixture
def tracker(db, lesson_statistics):
    return ProgressTracker(
        TrackingRepository(db), CatalogRepository(db), lesson_statistics=lesson_statistics
    )


@pytest.fixture
def aggregator(db):
    return StatisticsAggregator(
        QuizAttemptRepository(db), CatalogRepository(db), ProfileRepository(db)
    )


@pytest.fixture
def ranker(db):
    return LeaderboardRanker(
        QuizAttemptRepository(db), CatalogRepository(db), ProfileRepository(db)
    )
